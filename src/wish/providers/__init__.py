"""Provider implementations, one per :class:`~wish.models.ProviderType`.

The flow engine never branches on the provider type; it looks the
implementation up in the mapping returned by :func:`default_providers`.

Typical usage::

    from wish.providers import default_providers

    providers = default_providers()
    url = providers[ProviderType.GITHUB].build_redirect_url(config)
"""

from __future__ import annotations

from wish.models import ProviderType
from wish.providers.base import OAuthProvider
from wish.providers.github import GitHubProvider
from wish.providers.google import GoogleProvider


def default_providers() -> dict[ProviderType, OAuthProvider]:
    """Return a fresh mapping of every built-in provider implementation."""
    providers: list[OAuthProvider] = [GitHubProvider(), GoogleProvider()]
    return {p.provider_type: p for p in providers}


__all__ = ["OAuthProvider", "GitHubProvider", "GoogleProvider", "default_providers"]
