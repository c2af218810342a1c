"""Settings for labgit.

## `tool_version_floor`

* Environment Variable: `LABGIT_TOOL_VERSION_FLOOR`
* Settings Key: `tool_version_floor`
* Default: `2`
* Type: `int`

Lowest major version of the git binary the server extension may report.

## `upgrade_command`

* Environment Variable: `LABGIT_UPGRADE_COMMAND`
* Settings Key: `upgrade_command`
* Default: `pip install --upgrade jupyterlab-git`
* Type: `str`

Command suggested to the user when the server extension is missing or out of date.
"""

import os
from contextvars import ContextVar
from typing import Any, Callable, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr

SETTINGS_PREFIX = "LABGIT_"

DEFAULT_UPGRADE_COMMAND = "pip install --upgrade jupyterlab-git"
DEFAULT_LIST_COMMAND = "jupyter serverextension list"

T = TypeVar("T")


class InvalidSettingError(ValueError):
    """A `LABGIT_*` environment variable holds a value of the wrong type."""


# To add new settings:
# 1. Add a new field to `UserSettings`
# 2. Add an accessor function below


class UserSettings(BaseModel):
    """User configuration for labgit.

    All configs can be overridden with environment variables.  The precedence is
    environment variables > `labgit.settings.UserSettings`."""

    tool_version_floor: int = 2
    """Lowest accepted major version of the git binary.

    Can be overridden with the environment variable `LABGIT_TOOL_VERSION_FLOOR`"""

    upgrade_command: str = DEFAULT_UPGRADE_COMMAND
    """Command shown to the user to install or upgrade the server extension.

    Can be overridden with the environment variable `LABGIT_UPGRADE_COMMAND`"""

    list_command: str = DEFAULT_LIST_COMMAND
    """Command shown to the user to confirm the server extension is installed.

    Can be overridden with the environment variable `LABGIT_LIST_COMMAND`"""

    http_timeout: float = 30.0
    """Timeout in seconds for requests to the server extension.

    Can be overridden with the environment variable `LABGIT_HTTP_TIMEOUT`"""

    retry_fetch: bool = False
    """Toggles retrying the settings request on transport errors and 5xx statuses.

    Can be overridden with the environment variable `LABGIT_RETRY_FETCH`"""

    retry_max_attempts: int = 3
    """
    Sets the maximum number of attempts when `retry_fetch` is enabled.  Defaults to 3.

    Can be overridden with the environment variable `LABGIT_RETRY_MAX_ATTEMPTS`
    """

    retry_max_interval: float = 10.0
    """
    Sets the maximum interval between retries in seconds.  Defaults to 10.

    Can be overridden with the environment variable `LABGIT_RETRY_MAX_INTERVAL`
    """

    log_level: str = "WARNING"
    """Level of the `labgit` logger once `labgit.term.configure_logger` runs.

    Can be overridden with the environment variable `LABGIT_LOG_LEVEL`"""

    model_config = ConfigDict(extra="forbid")
    _is_first_apply: bool = PrivateAttr(True)

    def _reset(self) -> None:
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.default)

    def apply(self) -> None:
        if self._is_first_apply:
            self._is_first_apply = False
        else:
            self._reset()

        for name in type(self).model_fields:
            context_var = _context_vars[name]
            context_var.set(getattr(self, name))


def tool_version_floor() -> int:
    floor = _optional_int("tool_version_floor")
    if floor is None:
        return 2
    return floor


def upgrade_command() -> str:
    return _optional_str("upgrade_command") or DEFAULT_UPGRADE_COMMAND


def list_command() -> str:
    return _optional_str("list_command") or DEFAULT_LIST_COMMAND


def http_timeout() -> float:
    timeout = _optional_float("http_timeout")
    if timeout is None:
        return 30.0
    return timeout


def should_retry_fetch() -> bool:
    return _should("retry_fetch")


def retry_max_attempts() -> int:
    """Returns the maximum number of retry attempts."""
    max_attempts = _optional_int("retry_max_attempts")
    if max_attempts is None:
        return 3
    return max_attempts


def retry_max_interval() -> float:
    """Returns the maximum interval between retries in seconds."""
    max_interval = _optional_float("retry_max_interval")
    if max_interval is None:
        return 10.0
    return max_interval


def log_level() -> str:
    level = _optional_str("log_level") or "WARNING"
    return level.upper()


def current_settings() -> dict[str, Any]:
    """The effective value of every setting, environment overrides included."""
    return {
        "tool_version_floor": tool_version_floor(),
        "upgrade_command": upgrade_command(),
        "list_command": list_command(),
        "http_timeout": http_timeout(),
        "retry_fetch": should_retry_fetch(),
        "retry_max_attempts": retry_max_attempts(),
        "retry_max_interval": retry_max_interval(),
        "log_level": log_level(),
    }


def parse_and_apply_settings(
    settings: Optional[Union[UserSettings, dict[str, Any]]] = None,
) -> None:
    if isinstance(settings, UserSettings):
        user_settings = settings
    elif isinstance(settings, dict):
        user_settings = UserSettings.model_validate(settings)
    else:
        user_settings = UserSettings()

    user_settings.apply()


_context_vars = {
    name: ContextVar(name, default=field.default)
    for name, field in UserSettings.model_fields.items()
}


def _convert_env(name: str, value: str, convert: Callable[[str], T]) -> T:
    try:
        return convert(value)
    except ValueError:
        raise InvalidSettingError(
            f"{SETTINGS_PREFIX}{name.upper()} must be a valid {convert.__name__}, got {value!r}"
        ) from None


def _str2bool_truthy(v: str) -> bool:
    return v.lower() in ("yes", "true", "1", "on")


def _should(name: str) -> bool:
    if env := os.getenv(f"{SETTINGS_PREFIX}{name.upper()}"):
        return _str2bool_truthy(env)
    return _context_vars[name].get()


def _optional_int(name: str) -> Optional[int]:
    if env := os.getenv(f"{SETTINGS_PREFIX}{name.upper()}"):
        return _convert_env(name, env, int)
    return _context_vars[name].get()


def _optional_str(name: str) -> Optional[str]:
    if env := os.getenv(f"{SETTINGS_PREFIX}{name.upper()}"):
        return env
    return _context_vars[name].get()


def _optional_float(name: str) -> Optional[float]:
    if env := os.getenv(f"{SETTINGS_PREFIX}{name.upper()}"):
        return _convert_env(name, env, float)
    return _context_vars[name].get()
