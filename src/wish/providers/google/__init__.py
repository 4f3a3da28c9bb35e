"""Google provider implementation.

Exports:
    :class:`GoogleProvider` -- request/response shaping for Google accounts.
"""

from wish.providers.google.provider import GoogleProvider

__all__ = ["GoogleProvider"]
