"""GitHub provider implementation.

Exports:
    :class:`GitHubProvider` -- request/response shaping for github.com.
"""

from wish.providers.github.provider import GitHubProvider

__all__ = ["GitHubProvider"]
