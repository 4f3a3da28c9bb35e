"""Exception hierarchy for wish.

All exceptions inherit from :class:`WishError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`wish.exit_codes`.
The flow engine never recovers from any of them: every failure aborts the
current step and surfaces to the host unchanged. The CLI entry point
:func:`wish.app.main` catches ``WishError`` and exits with its code.

Subclass hierarchy::

    WishError (exit 1)
    +-- ProviderError (exit 2)
    |   +-- UnresolvableProviderKeyError
    |   +-- UnsupportedProviderTypeError
    |   +-- NoProviderSelectedError
    +-- CredentialError (exit 3)
    |   +-- InvalidCodeError
    |   +-- InvalidAccessTokenError
    |   +-- InvalidIdTokenError
    +-- NetworkError (exit 6)
    +-- ConfigError (exit 1)
"""

from __future__ import annotations

from typing import Optional

from wish.exit_codes import (
    EXIT_CREDENTIAL_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_NETWORK_ERROR,
    EXIT_PROVIDER_ERROR,
)


class WishError(Exception):
    """Base exception for all wish errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ProviderError(WishError):
    """Base class for provider resolution failures."""

    exit_code = EXIT_PROVIDER_ERROR


class UnresolvableProviderKeyError(ProviderError):
    """Raised when a provider key declares no ``type`` and is not itself a known type."""

    def __init__(self, key: str, supported: list[str]):
        self.key = key
        super().__init__(
            f"{key!r} is not a supported provider. "
            f"Supported providers are {', '.join(supported)}"
        )


class UnsupportedProviderTypeError(ProviderError):
    """Raised when a provider's explicit ``type`` is not in the registry."""

    def __init__(self, provider_type: str, supported: list[str], key: str | None = None):
        self.provider_type = provider_type
        self.key = key
        where = f" (provider {key!r})" if key is not None else ""
        super().__init__(
            f"Unsupported provider type {provider_type!r}{where}. "
            f"Supported types are {', '.join(supported)}"
        )


class NoProviderSelectedError(ProviderError):
    """Raised when a flow step runs with no selected and no default provider."""

    def __init__(self) -> None:
        super().__init__(
            "No provider selected. Call select_provider() or set 'provider' in the configuration"
        )


class CredentialError(WishError):
    """Base class for missing or empty flow inputs (codes and tokens)."""

    exit_code = EXIT_CREDENTIAL_ERROR


class InvalidCodeError(CredentialError):
    """Raised when the authorization code is empty or missing."""

    def __init__(self, code: Optional[str]) -> None:
        super().__init__(f"{code!r} is not a valid code")


class InvalidAccessTokenError(CredentialError):
    """Raised when the access token is empty or missing."""

    def __init__(self, token: Optional[str]) -> None:
        super().__init__(f"{token!r} is not a valid access token")


class InvalidIdTokenError(CredentialError):
    """Raised when a provider that needs an ID token (Google) gets none."""

    def __init__(self, token: Optional[str]) -> None:
        super().__init__(f"{token!r} is not a valid ID token")


class NetworkError(WishError):
    """Raised on transport failures, non-2xx responses, or malformed JSON bodies.

    Attributes:
        status_code: The HTTP status when the provider answered, else ``None``.
        url: The request URL.
    """

    exit_code = EXIT_NETWORK_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ConfigError(WishError):
    """Raised for configuration problems (missing file, invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
