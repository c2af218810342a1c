"""Command line interface for labgit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import click

from labgit import __version__, env, settings
from labgit.gate.compatibility_gate import (
    Blocked,
    BlockReason,
    GateOutcome,
    evaluate,
)
from labgit.server_bindings.models import ServerSettings
from labgit.server_bindings.settings_fetcher import SettingsFetcher
from labgit.term import configure_logger
from labgit.version import VERSION

# Pipeline stages in evaluation order, with the reasons that fail each one
PIPELINE_CHECKS: list[tuple[str, tuple[BlockReason, ...]]] = [
    (
        "Server extension",
        (BlockReason.ENDPOINT_UNAVAILABLE, BlockReason.UNREACHABLE),
    ),
    ("Git binary", (BlockReason.TOOL_NOT_FOUND,)),
    ("Git version", (BlockReason.TOOL_VERSION_TOO_LOW,)),
    ("Package versions", (BlockReason.VERSION_MISMATCH,)),
]


@dataclass
class CheckResult:
    name: str
    passed: bool
    message: str
    details: str = ""


def _check_results(outcome: GateOutcome) -> list[CheckResult]:
    """Expand a gate outcome into one result per stage, up to the first failure."""
    results = []
    for name, reasons in PIPELINE_CHECKS:
        if isinstance(outcome, Blocked) and outcome.reason in reasons:
            results.append(
                CheckResult(
                    name=name, passed=False, message=outcome.title, details=outcome.message
                )
            )
            break
        results.append(CheckResult(name=name, passed=True, message="OK"))
    return results


def _print_result(result: CheckResult, verbose: bool) -> None:
    mark = click.style("✓", fg="green") if result.passed else click.style("✗", fg="red")
    click.echo(f"{mark} {result.name}: {result.message}")
    if result.details and (verbose or not result.passed):
        click.echo(f"    {result.details}")


def _print_server_settings(server_settings: ServerSettings) -> None:
    click.echo(f"Server root: {server_settings.server_root}")
    click.echo(f"Server version: {server_settings.server_package_version}")
    click.echo(f"Git version: {server_settings.tool_version}")


@click.group()
@click.version_option(version=__version__, prog_name="labgit")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Level of the labgit logger. Defaults to LABGIT_LOG_LEVEL.",
)
def cli(log_level: Optional[str]) -> None:
    """labgit - Check the JupyterLab Git server extension before activating."""
    configure_logger(log_level)


@cli.command(help="Test connectivity and compatibility with the git server extension.")
@click.option("--server-url", help="Jupyter server URL. Defaults to LABGIT_SERVER_URL.")
@click.option(
    "--client-version",
    default=VERSION,
    show_default=True,
    help="Client version to declare to the server extension.",
)
@click.option("--retry/--no-retry", default=None, help="Retry transient failures.")
@click.option("--verbose", is_flag=True, help="Show the settings reported by the server.")
def doctor(
    server_url: Optional[str],
    client_version: str,
    retry: Optional[bool],
    verbose: bool,
) -> None:
    fetcher = SettingsFetcher(
        server_url or env.labgit_server_url(), token=env.labgit_server_token()
    )
    if retry is None:
        retry = settings.should_retry_fetch()
    if verbose:
        click.echo(f"Server URL: {fetcher.server_url}")
        click.echo(f"Client version: {client_version}")

    fetch_result = fetcher.fetch(client_version, retry=retry)
    if verbose and isinstance(fetch_result, ServerSettings):
        _print_server_settings(fetch_result)

    outcome = evaluate(
        fetch_result,
        client_version,
        floor=settings.tool_version_floor(),
        upgrade_command=settings.upgrade_command(),
        list_command=settings.list_command(),
    )
    for result in _check_results(outcome):
        _print_result(result, verbose)

    if isinstance(outcome, Blocked):
        click.echo(click.style("Some checks failed", fg="red", bold=True))
        raise SystemExit(1)
    click.echo(click.style("All checks passed", fg="green", bold=True))


@cli.command(name="settings", help="Show the effective labgit settings.")
def show_settings() -> None:
    click.echo(f"server_url: {env.labgit_server_url()}")
    for name, value in settings.current_settings().items():
        click.echo(f"{name}: {value}")


if __name__ == "__main__":
    cli()
