from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from labgit import settings
from labgit.gate.compatibility_gate import Activated, Blocked, evaluate
from labgit.server_bindings.models import ServerSettings
from labgit.server_bindings.settings_fetcher import SettingsFetcher
from labgit.version import VERSION

logger = logging.getLogger(__name__)


class ErrorReporter(Protocol):
    def __call__(self, title: str, message: str, actions: Sequence[Any]) -> None: ...


@dataclass(frozen=True)
class ActivationToken:
    """What the rest of the client receives once the server extension is accepted."""

    server_root: str
    server_url: str
    settings: ServerSettings


def log_error_reporter(title: str, message: str, actions: Sequence[Any]) -> None:
    logger.error(f"{title}: {message}")


def report_blocked(outcome: Blocked, report_error: ErrorReporter) -> None:
    report_error(outcome.title, outcome.message, list(outcome.actions))


def activate(
    declared_client_version: str = VERSION,
    *,
    fetcher: SettingsFetcher | None = None,
    report_error: ErrorReporter | None = None,
    retry: bool | None = None,
) -> ActivationToken | None:
    """Check the git server extension and return a token if the client may activate.

    Args:
        declared_client_version: The version this client was built as.
        fetcher: Reads the server settings; built from the environment if omitted.
        report_error: Receives `(title, message, actions)` when activation is
            blocked. Defaults to logging the message.
        retry: Retry the settings request on transport errors and 5xx statuses.
            Defaults to the `retry_fetch` setting.

    Returns:
        An `ActivationToken`, or None when activation is blocked.
    """
    if fetcher is None:
        fetcher = SettingsFetcher.from_env()
    if report_error is None:
        report_error = log_error_reporter
    if retry is None:
        retry = settings.should_retry_fetch()

    fetch_result = fetcher.fetch(declared_client_version, retry=retry)
    outcome = evaluate(
        fetch_result,
        declared_client_version,
        floor=settings.tool_version_floor(),
        upgrade_command=settings.upgrade_command(),
        list_command=settings.list_command(),
    )

    if isinstance(outcome, Blocked):
        logger.debug(f"Activation blocked: {outcome.reason.value}")
        report_blocked(outcome, report_error)
        return None

    assert isinstance(outcome, Activated)
    logger.info(f"Activated against git server extension at {fetcher.server_url}")
    return ActivationToken(
        server_root=outcome.server_root,
        server_url=fetcher.server_url,
        settings=outcome.settings,
    )
