from __future__ import annotations

import logging

import click

from labgit import settings

logger = logging.getLogger("labgit")

# Prefix colour per level; anything below WARNING uses the default
PREFIX_COLORS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}
DEFAULT_PREFIX_COLOR = "magenta"


def log_prefix(levelno: int) -> str:
    color = PREFIX_COLORS.get(levelno, DEFAULT_PREFIX_COLOR)
    return click.style("labgit", fg=color, bold=True)


class LabgitFormatter(logging.Formatter):
    """Prefixes every line of a record, so multi-line diagnostics stay attributable."""

    def format(self, record: logging.LogRecord) -> str:
        if not record.getMessage():
            return ""
        prefix = log_prefix(record.levelno)
        formatted_message = super().format(record)
        return "\n".join(f"{prefix}: {line}" for line in formatted_message.split("\n"))


_handler: logging.Handler | None = None


def configure_logger(level: str | None = None) -> None:
    """Attach the labgit handler once and set the level.

    `level` wins over the `log_level` setting; the CLI passes `--log-level` here.
    """
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(LabgitFormatter())
        logger.addHandler(_handler)

    log_level = (level or settings.log_level()).upper()
    logger.setLevel(getattr(logging, log_level, logging.WARNING))


__all__ = ["configure_logger", "log_prefix", "logger"]
