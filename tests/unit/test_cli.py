"""Tests for the crp-bot CLI."""

import pytest
from click.testing import CliRunner

from crp_bot.cli import main
from crp_bot.types import Settings

ENV = {
    "SLACK_SIGNING_SECRET": "signing-secret",
    "SLACK_BOT_TOKEN": "xoxb-token",
    "GITHUB_TOKEN": "ghp-token",
    "CLIENTS_JSON": '{"acme": {"owner": "acme-corp", "repo": "experiments", "testsPath": "acme-tests"}}',
    "PORT": None,
    "GITHUB_DEFAULT_BRANCH": None,
    "GITHUB_API_URL": None,
}


@pytest.fixture
def runs(monkeypatch: pytest.MonkeyPatch) -> list[tuple[Settings, str]]:
    """Capture run_bot() calls instead of starting a server."""
    calls: list[tuple[Settings, str]] = []

    def fake_run_bot(settings: Settings, *, host: str) -> None:
        calls.append((settings, host))

    monkeypatch.setattr("crp_bot.app.run_bot", fake_run_bot)
    return calls


class TestMain:
    def test_missing_environment_exits_with_error(
        self, runs: list[tuple[Settings, str]]
    ) -> None:
        runner = CliRunner()
        env = {**ENV, "GITHUB_TOKEN": None}

        with runner.isolated_filesystem():
            result = runner.invoke(main, [], env=env)

        assert result.exit_code == 1
        assert "GITHUB_TOKEN" in result.output
        assert runs == []

    def test_starts_server_with_loaded_settings(self, runs: list[tuple[Settings, str]]) -> None:
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ["--host", "127.0.0.1"], env=ENV)

        assert result.exit_code == 0, result.output
        settings, host = runs[0]
        assert host == "127.0.0.1"
        assert settings.port == 3000
        assert list(settings.clients) == ["acme"]

    def test_port_option_overrides_environment(self, runs: list[tuple[Settings, str]]) -> None:
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ["--port", "8123"], env={**ENV, "PORT": "9000"})

        assert result.exit_code == 0, result.output
        assert runs[0][0].port == 8123
        assert "port 8123" in result.output

    def test_reads_env_file(
        self, runs: list[tuple[Settings, str]], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        runner = CliRunner()
        env = {**ENV, "GITHUB_DEFAULT_BRANCH": None}

        with runner.isolated_filesystem():
            with open("custom.env", "w", encoding="utf-8") as f:
                f.write("GITHUB_DEFAULT_BRANCH=develop\n")
            result = runner.invoke(main, ["--env-file", "custom.env"], env=env)
            monkeypatch.delenv("GITHUB_DEFAULT_BRANCH", raising=False)

        assert result.exit_code == 0, result.output
        assert runs[0][0].default_branch == "develop"
