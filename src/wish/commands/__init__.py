"""Built-in CLI commands for wish.

* :mod:`~wish.commands.providers` -- list provider keys and show the
  resolved configuration of one.
* :mod:`~wish.commands.flow` -- run the protocol steps by hand
  (``redirect``, ``exchange``, ``profile``, ``user``).
* :mod:`~wish.commands.pkce` -- generate ``state`` strings and PKCE pairs.

Each module exports plain callback functions that :mod:`wish.app`
registers on the root application.
"""

from __future__ import annotations

import typer

from wish.config import load_config
from wish.flow import OAuthFlow


def load_flow(ctx: typer.Context) -> OAuthFlow:
    """Build an :class:`~wish.flow.OAuthFlow` from the root callback's options.

    ``ctx.obj["config_path"]`` selects the config file; ``ctx.obj["fetch"]``,
    when present, replaces the default HTTP fetcher.
    Callers use the engine as a context manager so the default fetcher is
    closed when the command ends.

    Raises:
        ConfigError: If the config file cannot be loaded.
    """
    obj = ctx.obj or {}
    config = load_config(obj.get("config_path"))
    return OAuthFlow(config, fetch=obj.get("fetch"))
