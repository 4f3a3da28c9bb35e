"""GitHub OAuth App provider.

GitHub takes the client credentials and code as query parameters on the
token endpoint and only answers with JSON when asked via ``Accept``. The
user-info endpoint uses the legacy ``token`` authorization scheme.
"""

from __future__ import annotations

from typing import Any, Optional

from wish.client import FetchJSON
from wish.models import EffectiveProviderConfig, ProviderType, TokenExchangeResult
from wish.providers.base import OAuthProvider, token_result

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"


class GitHubProvider(OAuthProvider):
    """Authorization code flow against github.com."""

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GITHUB

    @property
    def authorize_url(self) -> str:
        return AUTHORIZE_URL

    def redirect_params(self, config: EffectiveProviderConfig) -> dict[str, str]:
        return {
            "scope": config.scope,
            "client_id": config.client_id or "",
        }

    def exchange_code(
        self,
        config: EffectiveProviderConfig,
        code: str,
        fetch: FetchJSON,
        code_verifier: Optional[str] = None,
    ) -> TokenExchangeResult:
        """POST the code to the token endpoint with credentials in the query string."""
        params = {
            "client_id": config.client_id or "",
            "client_secret": config.client_secret or "",
            "code": code,
        }
        if code_verifier is not None:
            params["code_verifier"] = code_verifier
        payload = fetch(
            config.token_url,
            method="POST",
            headers={"Accept": "application/json"},
            params=params,
        )
        return token_result(payload)

    def fetch_profile(
        self,
        config: EffectiveProviderConfig,
        tokens: TokenExchangeResult,
        fetch: FetchJSON,
    ) -> dict[str, Any]:
        return fetch(
            config.user_url,
            headers={"Authorization": f"token {tokens.access_token}"},
        )
