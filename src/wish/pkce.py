"""Random state and PKCE helpers for hardening the authorization code flow.

- :func:`generate_random_string` -- opaque alphanumeric ``state`` values.
  Uses :mod:`random`, so the result is not suitable as a secret.
- :func:`generate_pkce_pair` -- a ``code_verifier`` / ``code_challenge``
  pair using the S256 method from :rfc:`7636`.

Neither function keeps state; validating ``state`` on the callback and
storing the verifier until the token exchange are the caller's job.
"""

from __future__ import annotations

import base64
import hashlib
import random
import secrets
import string

from wish.models import PkcePair

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
"""The 62 characters :func:`generate_random_string` samples from."""

VERIFIER_BYTES = 32


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def generate_random_string(length: int = 20) -> str:
    """Return *length* characters sampled uniformly from :data:`ALPHABET`.

    Args:
        length: Number of characters. ``0`` yields an empty string.

    Raises:
        ValueError: If *length* is negative.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return "".join(random.choice(ALPHABET) for _ in range(length))


def code_challenge_for(code_verifier: str) -> str:
    """Compute the S256 ``code_challenge`` for *code_verifier*."""
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return _b64url(digest)


def generate_pkce_pair() -> PkcePair:
    """Generate a PKCE ``code_verifier`` / ``code_challenge`` pair (S256).

    The verifier is 32 bytes from :func:`secrets.token_bytes`, base64url
    encoded without padding (43 characters). The challenge is the base64url
    SHA-256 digest of the verifier's ASCII bytes, also unpadded.

    Returns:
        A :class:`~wish.models.PkcePair`.
    """
    code_verifier = _b64url(secrets.token_bytes(VERIFIER_BYTES))
    return PkcePair(
        code_verifier=code_verifier,
        code_challenge=code_challenge_for(code_verifier),
    )
