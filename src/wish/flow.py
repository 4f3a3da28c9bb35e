"""OAuth flow engine -- provider selection and the three protocol steps.

:class:`OAuthFlow` ties the pieces together: it resolves the provider key
with :func:`wish.config.resolve_config`, looks up the
:class:`~wish.providers.base.OAuthProvider` for the resolved type, and
delegates request/response shaping to it. The configuration is re-resolved
on every call.

The only state the engine holds is the active provider key. Hosts serving
concurrent requests for different providers should not share that state;
pass ``provider_key=`` to each call or bind a per-request engine with
:meth:`OAuthFlow.for_provider`::

    flow = OAuthFlow(config)

    # chaining, single-provider hosts
    url = flow.select_provider("github").build_redirect_url()

    # explicit, safe under concurrency
    user = flow.complete_authorization(code, provider_key="work-google")
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Optional

from wish.client import FetchJSON, JSONFetcher
from wish.config import resolve_config, resolve_type
from wish.exceptions import (
    InvalidAccessTokenError,
    InvalidCodeError,
    NoProviderSelectedError,
    UnsupportedProviderTypeError,
)
from wish.models import (
    EffectiveProviderConfig,
    PkcePair,
    ProviderType,
    TokenExchangeResult,
    WishConfig,
)
from wish.providers import OAuthProvider, default_providers

logger = logging.getLogger(__name__)


class OAuthFlow:
    """Authorization code grant client for the configured providers.

    Args:
        config: Host configuration. Defaults to an empty
            :class:`~wish.models.WishConfig` (compiled defaults plus
            environment only).
        fetch: HTTP collaborator. Defaults to a :class:`~wish.client.JSONFetcher`.
        environ: Environment mapping for the env-var tier. Defaults to
            :data:`os.environ`, read at call time.
        providers: Provider implementations by type. Defaults to
            :func:`~wish.providers.default_providers`.
    """

    def __init__(
        self,
        config: Optional[WishConfig] = None,
        fetch: Optional[FetchJSON] = None,
        environ: Optional[Mapping[str, str]] = None,
        providers: Optional[dict[ProviderType, OAuthProvider]] = None,
    ) -> None:
        self.config = config if config is not None else WishConfig()
        self._owned_fetcher: Optional[JSONFetcher] = None
        if fetch is None:
            fetch = self._owned_fetcher = JSONFetcher()
        self._fetch: FetchJSON = fetch
        self._environ = environ
        self._providers = providers if providers is not None else default_providers()
        self._active_provider_key: Optional[str] = None
        logger.debug(
            "Initializing wish (providers: %s)",
            ", ".join(sorted(self.config.providers)) or "defaults only",
        )

    # ------------------------------------------------------------------ #
    # Provider selection
    # ------------------------------------------------------------------ #

    def select_provider(self, key: str) -> OAuthFlow:
        """Make *key* the active provider and return ``self`` for chaining.

        Overwrites any earlier selection.

        Raises:
            UnresolvableProviderKeyError: If *key* has no ``type`` and is not
                a type name.
            UnsupportedProviderTypeError: If *key*'s ``type`` is unknown.
        """
        resolve_type(key, self.config)
        self._active_provider_key = key
        return self

    def for_provider(self, key: str) -> OAuthFlow:
        """Return a new engine bound to *key*, sharing config and fetcher.

        The receiver's own selection is left untouched.
        """
        bound = OAuthFlow(
            self.config,
            fetch=self._fetch,
            environ=self._environ,
            providers=self._providers,
        )
        return bound.select_provider(key)

    def current_provider_key(self) -> str:
        """Return the active key, else the configured default key.

        Raises:
            NoProviderSelectedError: If neither is set.
        """
        if self._active_provider_key is not None:
            return self._active_provider_key
        if self.config.provider:
            return self.config.provider
        raise NoProviderSelectedError()

    def resolve(self, provider_key: Optional[str] = None) -> EffectiveProviderConfig:
        """Resolve the effective configuration for *provider_key* or the current provider."""
        key = provider_key if provider_key is not None else self.current_provider_key()
        environ = self._environ if self._environ is not None else os.environ
        return resolve_config(key, self.config, environ)

    def provider_for(self, config: EffectiveProviderConfig) -> OAuthProvider:
        """Return the implementation registered for ``config.type``.

        Raises:
            UnsupportedProviderTypeError: If no implementation is registered.
        """
        provider = self._providers.get(config.type)
        if provider is None:
            available = sorted(t.value for t in self._providers)
            raise UnsupportedProviderTypeError(config.type.value, available, key=config.key)
        return provider

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> OAuthFlow:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the default fetcher, if this engine created it.

        An injected ``fetch`` belongs to the caller and is left open, as is
        the fetcher shared with engines from :meth:`for_provider`.
        """
        if self._owned_fetcher is not None:
            self._owned_fetcher.close()

    # ------------------------------------------------------------------ #
    # Protocol steps
    # ------------------------------------------------------------------ #

    def build_redirect_url(
        self,
        provider_key: Optional[str] = None,
        *,
        state: Optional[str] = None,
        pkce: Optional[PkcePair] = None,
    ) -> str:
        """Build the provider's authorization URL. No network access.

        Args:
            provider_key: Overrides the active provider for this call.
            state: Optional opaque ``state`` parameter.
            pkce: Optional PKCE pair; its challenge is sent with method S256.

        Raises:
            ProviderError: If provider resolution fails.
        """
        config = self.resolve(provider_key)
        return self.provider_for(config).build_redirect_url(config, state=state, pkce=pkce)

    def exchange_code_for_token(
        self,
        code: Optional[str],
        provider_key: Optional[str] = None,
        *,
        code_verifier: Optional[str] = None,
    ) -> TokenExchangeResult:
        """Exchange an authorization code for tokens.

        Args:
            code: The ``code`` query parameter from the provider's callback.
            provider_key: Overrides the active provider for this call.
            code_verifier: The PKCE verifier, when the redirect carried a
                challenge.

        Raises:
            InvalidCodeError: If *code* is empty or ``None``.
            ProviderError: If provider resolution fails.
            NetworkError: If the token request fails.
        """
        if not code:
            raise InvalidCodeError(code)
        config = self.resolve(provider_key)
        logger.debug("Exchanging authorization code with %s", config.key)
        return self.provider_for(config).exchange_code(
            config, code, self._fetch, code_verifier=code_verifier
        )

    def fetch_user_profile(
        self,
        access_token: Optional[str],
        id_token: Optional[str] = None,
        provider_key: Optional[str] = None,
    ) -> dict[str, Any]:
        """Fetch the user-info document for *access_token*, unmodified.

        Raises:
            InvalidAccessTokenError: If *access_token* is empty or ``None``.
            InvalidIdTokenError: If the provider needs an ID token (Google)
                and *id_token* is empty.
            ProviderError: If provider resolution fails.
            NetworkError: If the user-info request fails.
        """
        if not access_token:
            raise InvalidAccessTokenError(access_token)
        config = self.resolve(provider_key)
        tokens = TokenExchangeResult(access_token=access_token, id_token=id_token)
        logger.debug("Fetching user profile from %s", config.key)
        return self.provider_for(config).fetch_profile(config, tokens, self._fetch)

    def complete_authorization(
        self,
        code: Optional[str],
        provider_key: Optional[str] = None,
        *,
        code_verifier: Optional[str] = None,
    ) -> dict[str, Any]:
        """Exchange *code* and return the user profile with the tokens attached.

        The returned dict is the provider's user-info payload plus
        ``accessToken`` and, when issued, ``idToken``.

        The provider key is resolved once, so a concurrent
        :meth:`select_provider` cannot switch providers between the two
        requests.

        Raises:
            InvalidCodeError: If *code* is empty.
            InvalidAccessTokenError: If the token response had no access token.
            InvalidIdTokenError: If Google returned no ID token.
            ProviderError: If provider resolution fails.
            NetworkError: If either request fails.
        """
        if not code:
            raise InvalidCodeError(code)
        key = provider_key if provider_key is not None else self.current_provider_key()
        tokens = self.exchange_code_for_token(code, key, code_verifier=code_verifier)
        profile = dict(
            self.fetch_user_profile(tokens.access_token, tokens.id_token, provider_key=key)
        )
        profile["accessToken"] = tokens.access_token
        if tokens.id_token:
            profile["idToken"] = tokens.id_token
        return profile

    user = complete_authorization
