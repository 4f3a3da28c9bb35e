"""Static knowledge of the supported provider types.

Two tables keyed by :class:`~wish.models.ProviderType`:

- :data:`PROVIDER_DEFAULTS` -- scopes, scope separator, token and user-info
  endpoints.
- :data:`ENV_VARS` -- the environment variables that may supply
  ``client_id``, ``client_secret``, and ``redirect``.

Lookups are pure. Unknown types raise
:class:`~wish.exceptions.UnsupportedProviderTypeError`; callers that only
want a yes/no answer use :func:`is_supported_type`.
"""

from __future__ import annotations

from typing import Any

from wish.exceptions import UnsupportedProviderTypeError
from wish.models import EnvVarMapping, ProviderDefaults, ProviderType

PROVIDER_DEFAULTS: dict[ProviderType, ProviderDefaults] = {
    ProviderType.GITHUB: ProviderDefaults(
        scope_separator=",",
        scopes=("user:email",),
        token_url="https://github.com/login/oauth/access_token",
        user_url="https://api.github.com/user",
    ),
    ProviderType.GOOGLE: ProviderDefaults(
        scope_separator=" ",
        scopes=(
            "https://www.googleapis.com/auth/userinfo.profile",
            "https://www.googleapis.com/auth/userinfo.email",
        ),
        token_url="https://oauth2.googleapis.com/token",
        user_url="https://www.googleapis.com/oauth2/v2/userinfo?alt=json",
    ),
}
"""Compiled-in defaults per provider type."""

ENV_VARS: dict[ProviderType, EnvVarMapping] = {
    ProviderType.GITHUB: EnvVarMapping(
        client_id="GITHUB_CLIENT_ID",
        client_secret="GITHUB_CLIENT_SECRET",
        redirect="GITHUB_CALLBACK_URL",
    ),
    ProviderType.GOOGLE: EnvVarMapping(
        client_id="GOOGLE_CLIENT_ID",
        client_secret="GOOGLE_CLIENT_SECRET",
        redirect="GOOGLE_CALLBACK_URL",
    ),
}
"""Environment variable names per provider type."""


def supported_types() -> list[str]:
    """Return the supported provider type names in declaration order."""
    return [t.value for t in ProviderType]


def is_supported_type(value: Any) -> bool:
    """Return ``True`` if *value* names a known :class:`ProviderType`."""
    if isinstance(value, ProviderType):
        return True
    return isinstance(value, str) and value in supported_types()


def _coerce(provider_type: ProviderType | str) -> ProviderType:
    if not is_supported_type(provider_type):
        raise UnsupportedProviderTypeError(str(provider_type), supported_types())
    return ProviderType(provider_type)


def defaults_for(provider_type: ProviderType | str) -> ProviderDefaults:
    """Return the compiled defaults for *provider_type*.

    Raises:
        UnsupportedProviderTypeError: If the type is unknown.
    """
    return PROVIDER_DEFAULTS[_coerce(provider_type)]


def env_mapping_for(provider_type: ProviderType | str) -> EnvVarMapping:
    """Return the environment variable names for *provider_type*.

    Raises:
        UnsupportedProviderTypeError: If the type is unknown.
    """
    return ENV_VARS[_coerce(provider_type)]
