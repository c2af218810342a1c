"""Decides whether the client may activate against the git server extension.

`evaluate` runs the checks below in order and stops at the first failure:

1. the settings endpoint answered (`FetchFailure` otherwise),
2. the server found a git binary,
3. that binary's major version reaches the floor,
4. the client and server package versions are the same release.

Every input maps to an `Activated` or `Blocked` outcome; nothing is raised
and nothing is retained between calls.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

from labgit.gate import messages
from labgit.gate.versions import parse_tool_version
from labgit.server_bindings.models import FetchFailure, FetchResult, ServerSettings
from labgit.settings import DEFAULT_LIST_COMMAND, DEFAULT_UPGRADE_COMMAND

TOOL_VERSION_FLOOR = 2


class BlockReason(str, Enum):
    ENDPOINT_UNAVAILABLE = "endpoint_unavailable"
    UNREACHABLE = "unreachable"
    TOOL_NOT_FOUND = "tool_not_found"
    TOOL_VERSION_TOO_LOW = "tool_version_too_low"
    VERSION_MISMATCH = "version_mismatch"


class Activated(BaseModel):
    model_config = ConfigDict(frozen=True)

    server_root: str
    settings: ServerSettings


class Blocked(BaseModel):
    model_config = ConfigDict(frozen=True)

    reason: BlockReason
    title: str = messages.BLOCKED_TITLE
    message: str
    # Remediation actions for the reporter to render; the gate offers none
    actions: tuple[Any, ...] = ()


GateOutcome = Union[Activated, Blocked]


def evaluate(
    fetch_result: FetchResult,
    declared_client_version: str,
    *,
    floor: int = TOOL_VERSION_FLOOR,
    upgrade_command: str = DEFAULT_UPGRADE_COMMAND,
    list_command: str = DEFAULT_LIST_COMMAND,
) -> GateOutcome:
    """Run the activation checks against one settings fetch.

    Args:
        fetch_result: What `SettingsFetcher.fetch` returned.
        declared_client_version: The version this client was built as.
        floor: Lowest accepted major version of the git binary.
        upgrade_command: Command suggested to install or upgrade the server extension.
        list_command: Command suggested to confirm the server extension is installed.

    Returns:
        `Activated` carrying the server root, or `Blocked` describing the first
        failing check.
    """
    if not isinstance(fetch_result, ServerSettings):
        return Blocked(
            reason=(
                BlockReason.UNREACHABLE
                if fetch_result is FetchFailure.UNREACHABLE
                else BlockReason.ENDPOINT_UNAVAILABLE
            ),
            message=messages.extension_unavailable_message(
                upgrade_command, list_command
            ),
        )
    settings = fetch_result

    # An empty or blank version is as good as no git binary at all
    if not (settings.tool_version or "").strip():
        return Blocked(
            reason=BlockReason.TOOL_NOT_FOUND,
            message=messages.tool_not_found_message(floor),
        )

    if not parse_tool_version(settings.tool_version).at_least_major(floor):
        return Blocked(
            reason=BlockReason.TOOL_VERSION_TOO_LOW,
            message=messages.tool_version_too_low_message(
                floor, settings.tool_version
            ),
        )

    # Release identity, not a semantic comparison
    if declared_client_version != settings.server_package_version:
        return Blocked(
            reason=BlockReason.VERSION_MISMATCH,
            message=messages.version_mismatch_message(
                declared_client_version,
                settings.server_package_version,
                upgrade_command,
            ),
        )

    return Activated(server_root=settings.server_root, settings=settings)
