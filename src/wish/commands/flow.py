"""Flow commands -- run the authorization code grant step by step.

Useful while registering an OAuth app or debugging a deployment::

    wish redirect github --state "$(wish state)"
    # ... sign in, copy ?code=... from the callback URL ...
    wish user <code> github
"""

from __future__ import annotations

from typing import Optional

import typer

from wish.commands import load_flow
from wish.exceptions import WishError
from wish.models import PkcePair
from wish.output import error, get_output, info, print_data, suggest
from wish.pkce import generate_pkce_pair


def redirect_command(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="Provider key (defaults to the configured provider)."),
    state: Optional[str] = typer.Option(None, "--state", help="Value for the 'state' parameter."),
    pkce: bool = typer.Option(False, "--pkce", help="Attach a fresh PKCE challenge."),
) -> None:
    """Print the provider's authorization URL.

    With ``--pkce`` the matching code verifier is printed to stderr; pass it
    to ``wish exchange --code-verifier`` afterwards.
    """
    pair: Optional[PkcePair] = generate_pkce_pair() if pkce else None
    try:
        with load_flow(ctx) as flow:
            url = flow.build_redirect_url(key, state=state, pkce=pair)
    except WishError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_data(url)
    if pair is not None:
        info(f"code_verifier: {pair.code_verifier}")
        suggest("Pass it to 'wish exchange --code-verifier' with the returned code.")


def exchange_command(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Authorization code from the callback."),
    key: Optional[str] = typer.Argument(None, help="Provider key (defaults to the configured provider)."),
    code_verifier: Optional[str] = typer.Option(None, "--code-verifier", help="PKCE code verifier."),
) -> None:
    """Exchange an authorization code for tokens and print the token response."""
    try:
        with load_flow(ctx) as flow:
            tokens = flow.exchange_code_for_token(code, key, code_verifier=code_verifier)
    except WishError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().format_response(tokens.raw)


def profile_command(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="Provider key (defaults to the configured provider)."),
    access_token: str = typer.Option(..., "--access-token", help="Access token."),
    id_token: Optional[str] = typer.Option(None, "--id-token", help="ID token (required for Google)."),
) -> None:
    """Fetch and print the user profile for an access token."""
    try:
        with load_flow(ctx) as flow:
            profile = flow.fetch_user_profile(access_token, id_token, provider_key=key)
    except WishError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().format_response(profile)


def user_command(
    ctx: typer.Context,
    code: str = typer.Argument(..., help="Authorization code from the callback."),
    key: Optional[str] = typer.Argument(None, help="Provider key (defaults to the configured provider)."),
    code_verifier: Optional[str] = typer.Option(None, "--code-verifier", help="PKCE code verifier."),
) -> None:
    """Exchange a code and print the user profile with the tokens attached."""
    try:
        with load_flow(ctx) as flow:
            profile = flow.complete_authorization(code, key, code_verifier=code_verifier)
    except WishError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    get_output().format_response(profile)
