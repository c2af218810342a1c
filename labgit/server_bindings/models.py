from enum import Enum
from typing import Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ServerSettings(BaseModel):
    """Settings reported by the git server extension at `/git/settings`."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Missing and null both mean the server could not find a git binary
    tool_version: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gitVersion", "toolVersion", "tool_version"),
        serialization_alias="gitVersion",
    )
    client_version: str = Field(
        validation_alias=AliasChoices("frontendVersion", "client_version"),
        serialization_alias="frontendVersion",
    )
    server_root: str = Field(
        validation_alias=AliasChoices("serverRoot", "server_root"),
        serialization_alias="serverRoot",
    )
    server_package_version: str = Field(
        validation_alias=AliasChoices("serverVersion", "server_package_version"),
        serialization_alias="serverVersion",
    )


class FetchFailure(str, Enum):
    # The endpoint answered with a non-2xx status or an unusable body
    ENDPOINT_UNAVAILABLE = "endpoint_unavailable"
    # No response at all: connection refused, DNS failure, timeout
    UNREACHABLE = "unreachable"


FetchResult = Union[ServerSettings, FetchFailure]
