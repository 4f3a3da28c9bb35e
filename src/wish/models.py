"""Canonical Pydantic models shared across all wish modules.

The models fall into three groups:

**Static provider knowledge** -- immutable records built once at import time
by :mod:`wish.registry`:
    :class:`ProviderType`, :class:`ProviderDefaults`, :class:`EnvVarMapping`.

**Configuration models** -- what the host supplies, typically loaded from
JSON by :func:`wish.config.load_config`:
    :class:`ProviderSettings` and :class:`WishConfig`.

**Flow values** -- produced per call by the resolver and the flow engine:
    :class:`EffectiveProviderConfig`, :class:`TokenExchangeResult`, and
    :class:`PkcePair`.

Configuration models accept both ``snake_case`` field names and the
``camelCase`` spellings used by JavaScript-era config files (``clientId``,
``tokenUrl``...). Unknown keys are preserved in ``model_extra``.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Static provider knowledge ---


class ProviderType(str, enum.Enum):
    """Identity provider families with built-in request/response shaping.

    Adding a member requires a matching entry in
    :data:`wish.registry.PROVIDER_DEFAULTS`, :data:`wish.registry.ENV_VARS`,
    and an :class:`~wish.providers.base.OAuthProvider` implementation.
    """

    GITHUB = "github"
    GOOGLE = "google"


class ProviderDefaults(BaseModel):
    """Compiled-in defaults for one :class:`ProviderType`. Never mutated."""

    model_config = ConfigDict(frozen=True)

    scope_separator: str
    scopes: tuple[str, ...]
    token_url: str
    user_url: str


class EnvVarMapping(BaseModel):
    """Environment variable names that may supply credentials for a provider type."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    redirect: str


# --- Configuration ---


class ProviderSettings(BaseModel):
    """Caller-supplied configuration for one provider key.

    Every field is optional. Fields that are explicitly present win over both
    environment variables and compiled defaults when the resolver merges the
    tiers; fields left out fall through to the lower tiers.

    ``type`` is kept as a plain string so that an unknown value surfaces as
    :class:`~wish.exceptions.UnsupportedProviderTypeError` at resolution
    time rather than as a validation error while loading the file.

    Example::

        ProviderSettings(type="google", clientId="abc", clientSecret="def")
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: Optional[str] = Field(
        default=None, description="Provider type; defaults to the provider key itself"
    )
    client_id: Optional[str] = Field(default=None, alias="clientId")
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    redirect: Optional[str] = Field(
        default=None, description="Callback URL registered with the provider"
    )
    scopes: Optional[list[str]] = None
    scope_separator: Optional[str] = Field(default=None, alias="scopeSeparator")
    token_url: Optional[str] = Field(default=None, alias="tokenUrl")
    user_url: Optional[str] = Field(default=None, alias="userUrl")


class WishConfig(BaseModel):
    """Host-level configuration.

    Attributes:
        provider: Default provider key used when none has been selected.
        providers: Per-key :class:`ProviderSettings`.
    """

    model_config = ConfigDict(extra="allow")

    provider: Optional[str] = Field(
        default=None, description="Default provider key"
    )
    providers: dict[str, ProviderSettings] = Field(default_factory=dict)


# --- Flow values ---


class EffectiveProviderConfig(BaseModel):
    """The merged configuration used for a single flow step.

    Produced by :func:`wish.config.resolve_config` and recomputed on every
    call so that configuration changes take effect immediately. Credentials
    may still be ``None`` after the merge; see
    :meth:`~wish.providers.base.OAuthProvider.validate_config`.
    """

    key: str
    type: ProviderType
    scope_separator: str
    scopes: list[str]
    token_url: str
    user_url: str
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect: Optional[str] = None

    @property
    def scope(self) -> str:
        """Scopes joined with the provider's separator."""
        return self.scope_separator.join(self.scopes)


class TokenExchangeResult(BaseModel):
    """Tokens returned by a provider's token endpoint.

    ``id_token`` is only issued by providers that speak OpenID Connect
    (Google). The full response body is kept on ``raw`` for callers that
    need ``refresh_token`` or ``expires_in``.
    """

    access_token: Optional[str] = None
    id_token: Optional[str] = None
    raw: dict[str, Any] = Field(default_factory=dict)


class PkcePair(BaseModel):
    """A PKCE ``code_verifier`` / ``code_challenge`` pair (:rfc:`7636`).

    The caller must keep ``code_verifier`` until the token exchange.
    """

    model_config = ConfigDict(frozen=True)

    code_verifier: str
    code_challenge: str

    @property
    def code_challenge_method(self) -> str:
        return "S256"
