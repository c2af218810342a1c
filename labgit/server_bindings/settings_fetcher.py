import json
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError
from typing_extensions import Self

from labgit.env import labgit_server_token, labgit_server_url
from labgit.server_bindings.models import FetchFailure, FetchResult, ServerSettings
from labgit.utils import http_requests
from labgit.utils.retry import with_retry

logger = logging.getLogger(__name__)

SETTINGS_ENDPOINT = "/git/settings"


class SettingsFetcher:
    """Reads the git server extension's settings resource.

    One call to `fetch` issues one GET (or, with `retry=True`, one logical
    GET retried on transport errors and 5xx statuses) and never raises for
    HTTP-level problems: they are reported as a `FetchFailure`.
    """

    server_url: str

    def __init__(
        self,
        server_url: str,
        *,
        token: Optional[str] = None,
        extra_headers: Optional[dict[str, str]] = None,
    ):
        self.server_url = server_url.rstrip("/")
        self._token = token
        self._extra_headers = extra_headers

    @classmethod
    def from_env(cls) -> Self:
        return cls(labgit_server_url(), token=labgit_server_token())

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def _build_request_headers(self) -> dict[str, str]:
        headers = dict(self._extra_headers) if self._extra_headers else {}
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def get(self, url: str, *args: Any, **kwargs: Any) -> httpx.Response:
        return http_requests.get(
            self.server_url + url,
            *args,
            headers=self._build_request_headers(),
            **kwargs,
        )

    def _get_settings(self, declared_client_version: str) -> ServerSettings:
        r = self.get(SETTINGS_ENDPOINT, params={"version": declared_client_version})
        r.raise_for_status()
        return ServerSettings.model_validate(r.json())

    @with_retry
    def _get_settings_with_retry(self, declared_client_version: str) -> ServerSettings:
        return self._get_settings(declared_client_version)

    def fetch(self, declared_client_version: str, *, retry: bool = False) -> FetchResult:
        url = self.server_url + SETTINGS_ENDPOINT
        logger.debug(f"Fetching server extension settings from {url}")
        get_settings = (
            self._get_settings_with_retry if retry else self._get_settings
        )
        try:
            return get_settings(declared_client_version)
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"Server extension settings request returned HTTP {e.response.status_code}: {url}"
            )
            return FetchFailure.ENDPOINT_UNAVAILABLE
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"Server extension settings response is malformed: {e}")
            return FetchFailure.ENDPOINT_UNAVAILABLE
        except (httpx.TransportError, OSError) as e:
            logger.warning(f"Server extension at {self.server_url} is unreachable: {e}")
            return FetchFailure.UNREACHABLE
