"""Helpers for generating ``state`` values and PKCE pairs from the shell."""

from __future__ import annotations

import typer

from wish.output import get_output, print_data
from wish.pkce import generate_pkce_pair, generate_random_string


def state_command(
    length: int = typer.Option(20, "--length", "-l", min=1, help="Number of characters."),
) -> None:
    """Print a random alphanumeric ``state`` value."""
    print_data(generate_random_string(length))


def pkce_command() -> None:
    """Print a fresh PKCE code verifier and S256 code challenge."""
    pair = generate_pkce_pair()
    get_output().format_response(
        {
            "code_verifier": pair.code_verifier,
            "code_challenge": pair.code_challenge,
            "code_challenge_method": pair.code_challenge_method,
        }
    )
