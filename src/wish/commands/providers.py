"""Provider commands -- inspect configured providers.

Typical usage::

    wish providers           # list keys and their types
    wish show work-google    # resolved configuration for one key
"""

from __future__ import annotations

from typing import Optional

import typer

from wish.commands import load_flow
from wish.config import load_config, resolve_type
from wish.exceptions import WishError
from wish.output import error, get_output, print_table, warning
from wish.registry import supported_types


def _mask(value: str | None) -> str:
    if not value:
        return ""
    if len(value) <= 4:
        return "****"
    return f"{value[:2]}{'*' * (len(value) - 4)}{value[-2:]}"


def providers_command(ctx: typer.Context) -> None:
    """List configured provider keys and the built-in provider types.

    Keys from the config file are listed with their resolved type; built-in
    types with no entry of their own are listed as usable through defaults
    and environment variables.
    """
    try:
        config = load_config((ctx.obj or {}).get("config_path"))
    except WishError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    default_key = config.provider
    rows: list[list[str]] = []
    for key in sorted(config.providers):
        try:
            provider_type = resolve_type(key, config).value
        except WishError as exc:
            provider_type = f"invalid ({exc})"
        rows.append([key, provider_type, "yes" if key == default_key else ""])
    for provider_type in supported_types():
        if provider_type not in config.providers:
            rows.append([provider_type, provider_type, "yes" if provider_type == default_key else ""])

    print_table(["key", "type", "default"], rows, title="Providers")


def show_command(
    ctx: typer.Context,
    key: Optional[str] = typer.Argument(None, help="Provider key (defaults to the configured provider)."),
    reveal: bool = typer.Option(False, "--reveal", help="Print client secrets unmasked."),
) -> None:
    """Show the effective configuration for a provider key.

    Credentials that are still missing after merging defaults, environment
    variables, and the config file are reported as warnings.
    """
    try:
        with load_flow(ctx) as flow:
            config = flow.resolve(key)
            problems = flow.provider_for(config).validate_config(config)
    except WishError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    data = config.model_dump(mode="json")
    if not reveal:
        data["client_secret"] = _mask(config.client_secret)
    get_output().format_response(data)

    for problem in problems:
        warning(problem)
