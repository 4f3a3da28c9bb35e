"""Integration tests for the ``wish`` command line.

Runs the real Typer application through :class:`typer.testing.CliRunner`.
HTTP is replaced by passing a :class:`RecordingFetch` in ``obj["fetch"]``,
which :func:`wish.commands.load_flow` hands to the flow engine.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest
from typer.testing import CliRunner

from wish import __version__
from wish.app import app
from wish.exceptions import NetworkError


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A config file with a default provider and a custom Google key."""
    path = tmp_path / "wish.json"
    data: dict[str, Any] = {
        "provider": "github",
        "providers": {
            "github": {"clientId": "abc", "clientSecret": "def"},
            "work-google": {
                "type": "google",
                "clientId": "work-id",
                "clientSecret": "work-secret",
                "redirect": "https://work.example.com/cb",
            },
        },
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Root options
# ---------------------------------------------------------------------------


class TestRoot:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"wish {__version__}" in result.output

    def test_no_args_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])
        assert "redirect" in result.output
        assert "exchange" in result.output

    def test_missing_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.json"), "redirect"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output


# ---------------------------------------------------------------------------
# redirect
# ---------------------------------------------------------------------------


class TestRedirect:
    def test_default_provider(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "redirect"])
        assert result.exit_code == 0
        url = result.stdout.strip()
        assert url.startswith("https://github.com/login/oauth/authorize?")
        assert "client_id=abc" in url
        assert "scope=user%3Aemail" in url

    def test_custom_key_with_state(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--config", str(config_file), "redirect", "work-google", "--state", "xyz"]
        )
        assert result.exit_code == 0
        query = parse_qs(urlsplit(result.stdout.strip()).query)
        assert query["client_id"] == ["work-id"]
        assert query["state"] == ["xyz"]

    def test_pkce_prints_verifier(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "redirect", "--pkce"])
        assert result.exit_code == 0
        assert "code_challenge_method=S256" in result.output
        assert "code_verifier:" in result.output

    def test_env_credentials(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GITHUB_CLIENT_ID", "env-id")
        result = runner.invoke(app, ["redirect", "github"])
        assert result.exit_code == 0
        assert "client_id=env-id" in result.stdout

    def test_unknown_provider(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--config", str(config_file), "redirect", "gitlab"])
        assert result.exit_code == 2
        assert "not a supported provider" in result.output

    def test_no_provider_selected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["redirect"])
        assert result.exit_code == 2
        assert "No provider selected" in result.output


# ---------------------------------------------------------------------------
# exchange / profile / user
# ---------------------------------------------------------------------------


class TestExchange:
    def test_prints_token_response(
        self, runner: CliRunner, config_file: Path, make_fetch
    ) -> None:
        fetch = make_fetch({"access_token": "tok1", "token_type": "bearer"})
        result = runner.invoke(
            app,
            ["--json", "--config", str(config_file), "exchange", "codeX"],
            obj={"fetch": fetch},
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"access_token": "tok1", "token_type": "bearer"}
        assert fetch.calls[0]["params"]["code"] == "codeX"

    def test_code_verifier_forwarded(
        self, runner: CliRunner, config_file: Path, make_fetch
    ) -> None:
        fetch = make_fetch({"access_token": "ya29", "id_token": "eyJ"})
        result = runner.invoke(
            app,
            [
                "--json",
                "--config",
                str(config_file),
                "exchange",
                "4/0A",
                "work-google",
                "--code-verifier",
                "ver",
            ],
            obj={"fetch": fetch},
        )
        assert result.exit_code == 0
        assert fetch.calls[0]["data"]["code_verifier"] == "ver"

    def test_empty_code(self, runner: CliRunner, config_file: Path, make_fetch) -> None:
        fetch = make_fetch()
        result = runner.invoke(
            app, ["--config", str(config_file), "exchange", ""], obj={"fetch": fetch}
        )
        assert result.exit_code == 3
        assert "not a valid code" in result.output
        assert fetch.calls == []

    def test_network_error(self, runner: CliRunner, config_file: Path, make_fetch) -> None:
        fetch = make_fetch(NetworkError("HTTP 500 from token endpoint", status_code=500))
        result = runner.invoke(
            app, ["--config", str(config_file), "exchange", "codeX"], obj={"fetch": fetch}
        )
        assert result.exit_code == 6
        assert "HTTP 500" in result.output


class TestProfile:
    def test_github(self, runner: CliRunner, config_file: Path, make_fetch) -> None:
        fetch = make_fetch({"login": "octocat"})
        result = runner.invoke(
            app,
            ["--json", "--config", str(config_file), "profile", "--access-token", "tok1"],
            obj={"fetch": fetch},
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"login": "octocat"}
        assert fetch.calls[0]["headers"] == {"Authorization": "token tok1"}

    def test_google_without_id_token(
        self, runner: CliRunner, config_file: Path, make_fetch
    ) -> None:
        result = runner.invoke(
            app,
            ["--config", str(config_file), "profile", "work-google", "--access-token", "x"],
            obj={"fetch": make_fetch()},
        )
        assert result.exit_code == 3
        assert "not a valid ID token" in result.output


class TestUser:
    def test_attaches_tokens(self, runner: CliRunner, config_file: Path, make_fetch) -> None:
        fetch = make_fetch({"access_token": "tok1"}, {"login": "octocat", "id": 1})
        result = runner.invoke(
            app,
            ["--json", "--config", str(config_file), "user", "codeX"],
            obj={"fetch": fetch},
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"login": "octocat", "id": 1, "accessToken": "tok1"}

    def test_plain_output(self, runner: CliRunner, config_file: Path, make_fetch) -> None:
        fetch = make_fetch({"access_token": "tok1"}, {"login": "octocat"})
        result = runner.invoke(
            app,
            ["--plain", "--config", str(config_file), "user", "codeX"],
            obj={"fetch": fetch},
        )
        assert result.exit_code == 0
        assert result.stdout.strip().split("\n") == ["login\toctocat", "accessToken\ttok1"]


# ---------------------------------------------------------------------------
# providers / show
# ---------------------------------------------------------------------------


class TestProviders:
    def test_lists_configured_and_builtin(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(app, ["--json", "--config", str(config_file), "providers"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert {"key": "github", "type": "github", "default": "yes"} in rows
        assert {"key": "work-google", "type": "google", "default": ""} in rows
        assert {"key": "google", "type": "google", "default": ""} in rows

    def test_invalid_type_is_reported(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "wish.json"
        path.write_text(json.dumps({"providers": {"corp": {"type": "okta"}}}), encoding="utf-8")
        result = runner.invoke(app, ["--json", "--config", str(path), "providers"])
        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        corp = next(row for row in rows if row["key"] == "corp")
        assert corp["type"].startswith("invalid")


class TestShow:
    def test_secret_masked(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--json", "--config", str(config_file), "show", "work-google"]
        )
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["type"] == "google"
        assert data["client_id"] == "work-id"
        assert data["client_secret"] == "wo*******et"
        assert data["scope_separator"] == " "

    def test_reveal(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(
            app, ["--json", "--config", str(config_file), "show", "github", "--reveal"]
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout)["client_secret"] == "def"

    def test_missing_credentials_warned(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--plain", "show", "google"])
        assert result.exit_code == 0
        assert "'client_id' is not set" in result.output
        assert "'redirect' is not set" in result.output


# ---------------------------------------------------------------------------
# state / pkce
# ---------------------------------------------------------------------------


class TestGenerators:
    def test_state_default_length(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["state"])
        assert result.exit_code == 0
        assert len(result.stdout.strip()) == 20
        assert result.stdout.strip().isalnum()

    def test_state_length(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["state", "--length", "48"])
        assert len(result.stdout.strip()) == 48

    def test_state_rejects_zero(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["state", "--length", "0"])
        assert result.exit_code != 0

    def test_pkce(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--json", "pkce"])
        assert result.exit_code == 0
        pair = json.loads(result.stdout)
        assert pair["code_challenge_method"] == "S256"
        assert len(pair["code_verifier"]) == 43
