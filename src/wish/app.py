"""Typer application and CLI entry point for wish.

The ``wish`` command is an operator tool around the library: it prints
redirect URLs, generates ``state`` values and PKCE pairs, and runs the token
exchange and profile fetch by hand so a deployment's provider configuration
can be checked before the host application goes live.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. :class:`~wish.exceptions.WishError` instances that escape
a command end the process with the error's ``exit_code``.

See Also:
    :mod:`wish.config`: Config file location and precedence resolution.
    :mod:`wish.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer

from wish import __version__
from wish.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="wish",
    help="OAuth2 authorization code flow for GitHub and Google.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from wish.commands.flow import exchange_command, profile_command, redirect_command, user_command  # noqa: E402
from wish.commands.pkce import pkce_command, state_command  # noqa: E402
from wish.commands.providers import providers_command, show_command  # noqa: E402

app.command("providers")(providers_command)
app.command("show")(show_command)
app.command("redirect")(redirect_command)
app.command("exchange")(exchange_command)
app.command("profile")(profile_command)
app.command("user")(user_command)
app.command("state")(state_command)
app.command("pkce")(pkce_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"wish {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config_path: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to the JSON config file."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~wish.output.OutputManager` from the
    flags and stores the config path in ``ctx.obj`` for the commands. With
    ``--verbose`` the library's :mod:`logging` output goes to stderr.
    """
    from wish.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``wish`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from wish.exceptions import WishError
        from wish.output import error

        error(str(exc))
        if isinstance(exc, WishError):
            sys.exit(exc.exit_code)
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
