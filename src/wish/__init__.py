"""wish -- OAuth2 authorization code grant client for GitHub and Google.

The package builds the provider's authorization redirect URL, exchanges the
returned code for tokens, and fetches the signed-in user's profile. It is
meant to be embedded in a host application that already serves HTTP; it
keeps no sessions and stores no tokens.

Typical usage::

    from wish import OAuthFlow, WishConfig, generate_random_string

    flow = OAuthFlow(WishConfig.model_validate({
        "providers": {"github": {"clientId": "abc", "clientSecret": "def"}},
    }))
    state = generate_random_string()
    url = flow.build_redirect_url("github", state=state)
    # ... redirect, validate state on the callback, then:
    user = flow.complete_authorization(code, "github")

Modules:
    flow: The :class:`OAuthFlow` engine.
    config: Config file loading and precedence resolution.
    registry: Built-in provider defaults and environment variable names.
    providers: Per-provider request/response shaping.
    pkce: Random ``state`` and PKCE helpers.
    client: The default :mod:`httpx`-based JSON fetcher.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer CLI entry point.
"""

__version__ = "0.3.0"

from wish.client import JSONFetcher
from wish.config import load_config, resolve_config, resolve_type
from wish.exceptions import (
    ConfigError,
    InvalidAccessTokenError,
    InvalidCodeError,
    InvalidIdTokenError,
    NetworkError,
    NoProviderSelectedError,
    UnresolvableProviderKeyError,
    UnsupportedProviderTypeError,
    WishError,
)
from wish.flow import OAuthFlow
from wish.models import (
    EffectiveProviderConfig,
    PkcePair,
    ProviderSettings,
    ProviderType,
    TokenExchangeResult,
    WishConfig,
)
from wish.pkce import generate_pkce_pair, generate_random_string

__all__ = [
    "ConfigError",
    "EffectiveProviderConfig",
    "InvalidAccessTokenError",
    "InvalidCodeError",
    "InvalidIdTokenError",
    "JSONFetcher",
    "NetworkError",
    "NoProviderSelectedError",
    "OAuthFlow",
    "PkcePair",
    "ProviderSettings",
    "ProviderType",
    "TokenExchangeResult",
    "UnresolvableProviderKeyError",
    "UnsupportedProviderTypeError",
    "WishConfig",
    "WishError",
    "generate_pkce_pair",
    "generate_random_string",
    "load_config",
    "resolve_config",
    "resolve_type",
]
