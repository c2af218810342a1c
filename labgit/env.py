from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost:8888"
DEFAULT_BASE_URL = "/"


def labgit_base_url() -> str:
    """The path the Jupyter server is mounted under, always with surrounding slashes."""
    base_url = os.getenv("LABGIT_BASE_URL", DEFAULT_BASE_URL).strip("/")
    if not base_url:
        return "/"
    return f"/{base_url}/"


def labgit_server_url() -> str:
    """Get the full URL of the Jupyter server hosting the git server extension."""
    server_url = os.getenv("LABGIT_SERVER_URL", DEFAULT_SERVER_URL).rstrip("/")
    return server_url + labgit_base_url().rstrip("/")


def labgit_server_token() -> str | None:
    token = os.getenv("LABGIT_SERVER_TOKEN") or os.getenv("JUPYTER_TOKEN")
    if not token:
        return None
    return token
