"""Google OAuth 2.0 / OpenID Connect provider.

The redirect asks for offline access and forces the consent prompt so that
Google issues a refresh token every time. The token endpoint takes a
form-encoded body and answers with both an access token and an ID token;
the user-info call needs both.
"""

from __future__ import annotations

from typing import Any, Optional

from wish.client import FetchJSON
from wish.exceptions import InvalidIdTokenError
from wish.models import EffectiveProviderConfig, ProviderType, TokenExchangeResult
from wish.providers.base import OAuthProvider, token_result

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"


class GoogleProvider(OAuthProvider):
    """Authorization code flow against accounts.google.com."""

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GOOGLE

    @property
    def authorize_url(self) -> str:
        return AUTHORIZE_URL

    @property
    def required_fields(self) -> tuple[str, ...]:
        return ("client_id", "client_secret", "redirect")

    def redirect_params(self, config: EffectiveProviderConfig) -> dict[str, str]:
        return {
            "redirect_uri": config.redirect or "",
            "client_id": config.client_id or "",
            "access_type": "offline",
            "response_type": "code",
            "prompt": "consent",
            "scope": config.scope,
        }

    def exchange_code(
        self,
        config: EffectiveProviderConfig,
        code: str,
        fetch: FetchJSON,
        code_verifier: Optional[str] = None,
    ) -> TokenExchangeResult:
        """POST a form-encoded ``authorization_code`` grant to the token endpoint."""
        data = {
            "code": code,
            "client_id": config.client_id or "",
            "client_secret": config.client_secret or "",
            "redirect_uri": config.redirect or "",
            "grant_type": "authorization_code",
        }
        if code_verifier is not None:
            data["code_verifier"] = code_verifier
        payload = fetch(
            config.token_url,
            method="POST",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data=data,
        )
        return token_result(payload)

    def fetch_profile(
        self,
        config: EffectiveProviderConfig,
        tokens: TokenExchangeResult,
        fetch: FetchJSON,
    ) -> dict[str, Any]:
        if not tokens.id_token:
            raise InvalidIdTokenError(tokens.id_token)
        return fetch(
            config.user_url,
            headers={"Authorization": f"Bearer {tokens.id_token}"},
            params={"access_token": tokens.access_token or ""},
        )
