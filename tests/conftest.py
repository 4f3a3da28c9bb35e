"""Shared test fixtures for wish.

Provides an isolated environment (no provider credentials or config path
leaking in from the developer's shell), a recording stand-in for the HTTP
fetcher, and ready-made configurations.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest

from wish.models import WishConfig
from wish.output import reset_output

PROVIDER_ENV_VARS = [
    "GITHUB_CLIENT_ID",
    "GITHUB_CLIENT_SECRET",
    "GITHUB_CALLBACK_URL",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_CALLBACK_URL",
    "WISH_CONFIG",
]


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear provider env vars and point XDG_CONFIG_HOME at tmp_path."""
    for var in PROVIDER_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time, which
    go stale once CliRunner restores the real streams.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake fetcher
# ---------------------------------------------------------------------------


class RecordingFetch:
    """Stand-in for :class:`wish.client.JSONFetcher`.

    Returns the queued responses in order and records every call. A queued
    exception is raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        data: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        self.calls.append(
            {"url": url, "method": method, "headers": headers, "params": params, "data": data}
        )
        if not self.responses:
            raise AssertionError(f"unexpected fetch: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def make_fetch():
    """Factory for :class:`RecordingFetch` instances."""
    return RecordingFetch


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------


@pytest.fixture
def github_config() -> WishConfig:
    return WishConfig.model_validate(
        {"providers": {"github": {"clientId": "abc", "clientSecret": "def"}}}
    )


@pytest.fixture
def google_config() -> WishConfig:
    return WishConfig.model_validate(
        {
            "providers": {
                "google": {
                    "clientId": "gid.apps.googleusercontent.com",
                    "clientSecret": "gsecret",
                    "redirect": "https://app.example.com/auth/google/callback",
                }
            }
        }
    )


@pytest.fixture
def multi_config() -> WishConfig:
    """Two keys of the same type plus a default provider."""
    return WishConfig.model_validate(
        {
            "provider": "github",
            "providers": {
                "github": {"clientId": "abc", "clientSecret": "def"},
                "work-google": {
                    "type": "google",
                    "clientId": "work-id",
                    "clientSecret": "work-secret",
                    "redirect": "https://work.example.com/cb",
                },
                "personal-google": {
                    "type": "google",
                    "clientId": "home-id",
                    "clientSecret": "home-secret",
                    "redirect": "https://home.example.com/cb",
                },
            },
        }
    )
