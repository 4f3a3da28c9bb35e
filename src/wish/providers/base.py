"""Abstract base class for OAuth2 provider implementations.

Each supported :class:`~wish.models.ProviderType` has exactly one
:class:`OAuthProvider` subclass that shapes the three protocol steps for
that provider:

1. :meth:`~OAuthProvider.build_redirect_url` -- the authorization URL the
   host redirects the user to. No network.
2. :meth:`~OAuthProvider.exchange_code` -- trade the returned code for
   tokens.
3. :meth:`~OAuthProvider.fetch_profile` -- fetch the user-info document.

Implementations are stateless: everything they need arrives in the
:class:`~wish.models.EffectiveProviderConfig` and the ``fetch`` callable, so
one instance serves every provider key of its type.

To add a provider type, add the enum member and registry entries, subclass
:class:`OAuthProvider`, and register the instance in
:func:`wish.providers.default_providers`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional
from urllib.parse import urlencode

from wish.client import FetchJSON
from wish.models import EffectiveProviderConfig, PkcePair, ProviderType, TokenExchangeResult


class OAuthProvider(ABC):
    """Request/response shaping for one provider type."""

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Return the :class:`~wish.models.ProviderType` this implementation handles."""
        ...

    @property
    @abstractmethod
    def authorize_url(self) -> str:
        """Return the provider's authorization endpoint (without query)."""
        ...

    @abstractmethod
    def redirect_params(self, config: EffectiveProviderConfig) -> dict[str, str]:
        """Return the provider-specific query parameters of the redirect URL."""
        ...

    def build_redirect_url(
        self,
        config: EffectiveProviderConfig,
        state: Optional[str] = None,
        pkce: Optional[PkcePair] = None,
    ) -> str:
        """Build the authorization URL for *config*.

        Parameters are form-encoded (spaces as ``+``). ``state`` and the PKCE
        challenge are appended only when given.

        Args:
            config: The resolved provider configuration.
            state: Opaque value echoed back on the callback.
            pkce: Pair whose ``code_challenge`` binds this request to the
                later token exchange.

        Returns:
            The absolute redirect URL.
        """
        params = self.redirect_params(config)
        if state is not None:
            params["state"] = state
        if pkce is not None:
            params["code_challenge"] = pkce.code_challenge
            params["code_challenge_method"] = pkce.code_challenge_method
        return f"{self.authorize_url}?{urlencode(params)}"

    @abstractmethod
    def exchange_code(
        self,
        config: EffectiveProviderConfig,
        code: str,
        fetch: FetchJSON,
        code_verifier: Optional[str] = None,
    ) -> TokenExchangeResult:
        """Exchange an authorization code for tokens.

        Raises:
            NetworkError: Propagated unchanged from *fetch*.
        """
        ...

    @abstractmethod
    def fetch_profile(
        self,
        config: EffectiveProviderConfig,
        tokens: TokenExchangeResult,
        fetch: FetchJSON,
    ) -> dict[str, Any]:
        """Fetch the authenticated user's profile, unmodified.

        Raises:
            InvalidIdTokenError: If the provider needs an ID token and none
                was given.
            NetworkError: Propagated unchanged from *fetch*.
        """
        ...

    def validate_config(self, config: EffectiveProviderConfig) -> list[str]:
        """Report credentials that are missing after the merge.

        The flow never calls this; a missing credential surfaces when the
        provider rejects the request. It exists for diagnostics such as
        ``wish show``.

        Returns:
            Human-readable problems. Empty if nothing is missing.
        """
        errors: list[str] = []
        for field in self.required_fields:
            if not getattr(config, field):
                errors.append(f"{config.key}: '{field}' is not set")
        return errors

    @property
    def required_fields(self) -> tuple[str, ...]:
        """Config fields the provider needs to complete a flow."""
        return ("client_id", "client_secret")


def token_result(payload: dict[str, Any]) -> TokenExchangeResult:
    """Wrap a token endpoint response in a :class:`~wish.models.TokenExchangeResult`."""
    return TokenExchangeResult(
        access_token=payload.get("access_token"),
        id_token=payload.get("id_token"),
        raw=payload,
    )
