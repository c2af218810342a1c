"""Activation gate for the JupyterLab Git server extension."""

from labgit import version
from labgit.activation import ActivationToken, activate
from labgit.gate.compatibility_gate import (
    Activated,
    Blocked,
    BlockReason,
    GateOutcome,
    evaluate,
)
from labgit.gate.versions import ToolVersion, compare_versions, parse_tool_version
from labgit.server_bindings.models import FetchFailure, FetchResult, ServerSettings
from labgit.server_bindings.settings_fetcher import SettingsFetcher
from labgit.settings import UserSettings, parse_and_apply_settings

__version__ = version.VERSION

__all__ = [
    "Activated",
    "ActivationToken",
    "BlockReason",
    "Blocked",
    "FetchFailure",
    "FetchResult",
    "GateOutcome",
    "ServerSettings",
    "SettingsFetcher",
    "ToolVersion",
    "UserSettings",
    "__version__",
    "activate",
    "compare_versions",
    "evaluate",
    "parse_and_apply_settings",
    "parse_tool_version",
]
