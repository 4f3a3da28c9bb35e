"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~wish.exceptions.WishError` subclass. Shell scripts
wrapping the ``wish`` CLI can inspect the exit code to tell a bad provider
key from a rejected token exchange without parsing stderr.

Example::

    $ wish redirect work-gitlab
    $ echo $?
    2   # EXIT_PROVIDER_ERROR -- key does not resolve to a provider type
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including configuration errors)."""

EXIT_PROVIDER_ERROR = 2
"""The provider key could not be resolved or no provider was selected."""

EXIT_CREDENTIAL_ERROR = 3
"""An authorization code, access token, or ID token was missing or empty."""

EXIT_NETWORK_ERROR = 6
"""The identity provider could not be reached or rejected the request."""
