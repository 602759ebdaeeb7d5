"""Tests for the command line entry point."""

import os
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from mcp_jira import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "JIRA_URL",
        "JIRA_WORKSPACE",
        "JIRA_USERNAME",
        "JIRA_API_TOKEN",
        "JIRA_PERSONAL_TOKEN",
        "JIRA_SSL_VERIFY",
        "JIRA_METADATA_CACHE_TTL",
        "READ_ONLY_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    # main() writes straight into os.environ.
    for name in (
        "JIRA_URL",
        "JIRA_WORKSPACE",
        "JIRA_USERNAME",
        "JIRA_API_TOKEN",
        "JIRA_SSL_VERIFY",
        "JIRA_METADATA_CACHE_TTL",
        "READ_ONLY_MODE",
    ):
        os.environ.pop(name, None)


def test_cli_sets_environment_and_runs_server():
    runner = CliRunner()
    with (
        patch("mcp_jira.load_dotenv"),
        patch("mcp_jira.servers.run_server", new_callable=AsyncMock) as mock_run_server,
    ):
        result = runner.invoke(
            main,
            [
                "--jira-workspace",
                "acme",
                "--jira-username",
                "user@example.com",
                "--jira-token",
                "secret",
                "--metadata-cache-ttl",
                "300",
                "--read-only",
                "--transport",
                "streamable-http",
                "--port",
                "9000",
            ],
        )

    assert result.exit_code == 0, result.output
    assert os.environ["JIRA_WORKSPACE"] == "acme"
    assert os.environ["JIRA_API_TOKEN"] == "secret"
    assert os.environ["JIRA_METADATA_CACHE_TTL"] == "300"
    assert os.environ["READ_ONLY_MODE"] == "true"
    assert "JIRA_SSL_VERIFY" not in os.environ
    mock_run_server.assert_awaited_once_with(
        transport="streamable-http", host="0.0.0.0", port=9000  # noqa: S104
    )


def test_cli_rejects_negative_cache_ttl():
    runner = CliRunner()

    result = runner.invoke(main, ["--metadata-cache-ttl", "-1"])

    assert result.exit_code != 0


def test_cli_keeps_ssl_verify_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("JIRA_URL=https://jira.example.com\nJIRA_SSL_VERIFY=false\n")
    runner = CliRunner()
    with patch("mcp_jira.servers.run_server", new_callable=AsyncMock):
        result = runner.invoke(main, ["--env-file", str(env_file)])

    assert result.exit_code == 0, result.output
    assert os.environ["JIRA_SSL_VERIFY"] == "false"


def test_cli_ssl_flag_overrides_environment(monkeypatch):
    monkeypatch.setenv("JIRA_SSL_VERIFY", "true")
    runner = CliRunner()
    with (
        patch("mcp_jira.load_dotenv"),
        patch("mcp_jira.servers.run_server", new_callable=AsyncMock),
    ):
        result = runner.invoke(main, ["--no-jira-ssl-verify"])

    assert result.exit_code == 0, result.output
    assert os.environ["JIRA_SSL_VERIFY"] == "false"
