import os

import pytest

from labgit.server_bindings.models import ServerSettings
from labgit.settings import UserSettings

FAKE_ROOT = "/path/to/server"
CLIENT_VERSION = "0.11.0"


@pytest.fixture(autouse=True)
def clean_labgit_env(monkeypatch):
    """Keep the developer's LABGIT_* and JUPYTER_TOKEN variables out of tests."""
    for name in list(os.environ):
        if name.startswith("LABGIT_") or name == "JUPYTER_TOKEN":
            monkeypatch.delenv(name)
    # Retries are opt-in; keep their backoff short when a test enables them
    monkeypatch.setenv("LABGIT_RETRY_MAX_INTERVAL", "0.01")
    yield
    UserSettings().apply()


@pytest.fixture
def make_settings():
    def _make_settings(
        tool_version="2.22.0",
        server_version=CLIENT_VERSION,
        server_root=FAKE_ROOT,
    ):
        return ServerSettings.model_validate(
            {
                "gitVersion": tool_version,
                "frontendVersion": CLIENT_VERSION,
                "serverRoot": server_root,
                "serverVersion": server_version,
            }
        )

    return _make_settings
