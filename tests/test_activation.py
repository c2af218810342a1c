"""End-to-end activation against a mocked git server extension."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from labgit.activation import ActivationToken, activate, log_error_reporter
from labgit.server_bindings.models import FetchFailure, ServerSettings
from labgit.server_bindings.settings_fetcher import SETTINGS_ENDPOINT, SettingsFetcher
from labgit.settings import InvalidSettingError
from labgit.version import VERSION

BASE_URL = "http://labgit.test"
FAKE_ROOT = "/path/to/server"
TITLE = "Failed to load the jupyterlab-git server extension"


@pytest.fixture
def fetcher():
    return SettingsFetcher(BASE_URL)


@pytest.fixture
def report_error():
    return MagicMock()


def mock_settings(respx_mock, **overrides):
    body = {
        "gitVersion": "2.22.0",
        "frontendVersion": VERSION,
        "serverRoot": FAKE_ROOT,
        "serverVersion": VERSION,
    }
    body.update(overrides)
    return respx_mock.get(SETTINGS_ENDPOINT, params={"version": VERSION}).mock(
        return_value=httpx.Response(200, json=body)
    )


class TestActivate:
    @pytest.mark.respx(base_url=BASE_URL)
    def test_fails_if_no_git_is_installed(self, respx_mock, fetcher, report_error):
        mock_settings(respx_mock, gitVersion=None)

        token = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert token is None
        report_error.assert_called_once_with(
            TITLE,
            "git command not found - please ensure you have Git > 2 installed",
            [],
        )

    @pytest.mark.respx(base_url=BASE_URL)
    def test_fails_if_git_version_is_below_2(self, respx_mock, fetcher, report_error):
        mock_settings(respx_mock, gitVersion="1.8.7")

        token = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert token is None
        report_error.assert_called_once_with(
            TITLE, "git command version must be > 2; got 1.8.7.", []
        )

    @pytest.mark.respx(base_url=BASE_URL)
    def test_fails_if_server_and_extension_versions_differ(
        self, respx_mock, fetcher, report_error
    ):
        mock_settings(respx_mock, serverVersion="0.1.0")

        token = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert token is None
        report_error.assert_called_once_with(
            TITLE,
            "The versions of the JupyterLab Git server frontend and backend do not match. "
            f"The @jupyterlab/git frontend extension has version: {VERSION} "
            "while the python package has version 0.1.0. "
            "Please install identical version of jupyterlab-git Python package and the "
            "@jupyterlab/git extension. Try running: pip install --upgrade jupyterlab-git",
            [],
        )

    @pytest.mark.respx(base_url=BASE_URL)
    def test_fails_if_server_extension_is_not_installed(
        self, respx_mock, fetcher, report_error
    ):
        respx_mock.get(SETTINGS_ENDPOINT).mock(
            return_value=httpx.Response(404, json={"message": "Not found"})
        )

        token = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert token is None
        report_error.assert_called_once_with(
            TITLE,
            "Git server extension is unavailable. Please ensure you have installed the "
            "JupyterLab Git server extension by running: pip install --upgrade jupyterlab-git. "
            "To confirm that the server extension is installed, run: jupyter serverextension list.",
            [],
        )

    @pytest.mark.respx(base_url=BASE_URL)
    def test_fails_if_server_is_unreachable(self, respx_mock, fetcher, report_error):
        respx_mock.get(SETTINGS_ENDPOINT).mock(side_effect=httpx.ConnectError)

        token = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert token is None
        report_error.assert_called_once()
        title, message, actions = report_error.call_args.args
        assert title == TITLE
        assert message.startswith("Git server extension is unavailable.")
        assert actions == []

    @pytest.mark.respx(base_url=BASE_URL)
    def test_activates_compatible_server(self, respx_mock, fetcher, report_error):
        route = mock_settings(respx_mock)

        token = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert isinstance(token, ActivationToken)
        assert token.server_root == FAKE_ROOT
        assert token.server_url == BASE_URL
        assert token.settings.tool_version == "2.22.0"
        assert route.call_count == 1
        report_error.assert_not_called()

    @pytest.mark.respx(base_url=BASE_URL)
    def test_activation_is_repeatable(self, respx_mock, fetcher, report_error):
        mock_settings(respx_mock)

        first = activate(VERSION, fetcher=fetcher, report_error=report_error)
        second = activate(VERSION, fetcher=fetcher, report_error=report_error)

        assert first == second

    def test_uses_configured_floor(self, monkeypatch, report_error):
        monkeypatch.setenv("LABGIT_TOOL_VERSION_FLOOR", "3")
        fetcher = MagicMock(spec=SettingsFetcher)
        fetcher.server_url = BASE_URL
        fetcher.fetch.return_value = ServerSettings(
            tool_version="2.40.0",
            client_version=VERSION,
            server_root=FAKE_ROOT,
            server_package_version=VERSION,
        )

        assert activate(VERSION, fetcher=fetcher, report_error=report_error) is None
        report_error.assert_called_once_with(
            TITLE, "git command version must be > 3; got 2.40.0.", []
        )
        fetcher.fetch.assert_called_once_with(VERSION, retry=False)

    def test_retry_setting_is_passed_to_fetcher(self, monkeypatch, report_error):
        monkeypatch.setenv("LABGIT_RETRY_FETCH", "true")
        fetcher = MagicMock(spec=SettingsFetcher)
        fetcher.server_url = BASE_URL
        fetcher.fetch.return_value = FetchFailure.UNREACHABLE

        activate(VERSION, fetcher=fetcher, report_error=report_error)

        fetcher.fetch.assert_called_once_with(VERSION, retry=True)

    def test_default_fetcher_comes_from_env(self, report_error):
        fetcher = MagicMock(spec=SettingsFetcher)
        fetcher.server_url = BASE_URL
        fetcher.fetch.return_value = FetchFailure.ENDPOINT_UNAVAILABLE

        with patch.object(SettingsFetcher, "from_env", return_value=fetcher):
            activate(report_error=report_error)

        fetcher.fetch.assert_called_once_with(VERSION, retry=False)
        report_error.assert_called_once()


def test_default_reporter_logs_error(caplog):
    with caplog.at_level("ERROR", logger="labgit"):
        log_error_reporter(TITLE, "git command not found", [])

    assert f"{TITLE}: git command not found" in caplog.text


def test_malformed_floor_setting_is_reported_by_name(monkeypatch):
    monkeypatch.setenv("LABGIT_TOOL_VERSION_FLOOR", "abc")
    fetcher = MagicMock(spec=SettingsFetcher)
    fetcher.server_url = BASE_URL
    fetcher.fetch.return_value = FetchFailure.UNREACHABLE

    with pytest.raises(InvalidSettingError, match="LABGIT_TOOL_VERSION_FLOOR"):
        activate(VERSION, fetcher=fetcher, report_error=MagicMock())
