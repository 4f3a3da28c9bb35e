"""Configuration loading and provider precedence resolution.

This module handles two concerns:

* **Host configuration** -- :func:`load_config` reads a
  :class:`~wish.models.WishConfig` from a JSON file. The file is located by
  explicit path, the ``WISH_CONFIG`` environment variable, or the XDG
  config directory (:func:`get_config_dir`), in that order.
* **Precedence resolution** -- :func:`resolve_type` maps a provider key to
  its :class:`~wish.models.ProviderType` and :func:`resolve_config` merges
  the three configuration tiers into an
  :class:`~wish.models.EffectiveProviderConfig`.

Precedence (high to low)::

    1. Caller config   (WishConfig.providers[key])
    2. Environment     (GITHUB_CLIENT_ID, GOOGLE_CALLBACK_URL, ...)
    3. Defaults        (wish.registry.PROVIDER_DEFAULTS)

Operators set shared secrets once in the environment while deployments and
tests can still override them per key without touching the environment.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Any, Mapping, Optional

from wish.exceptions import ConfigError, UnresolvableProviderKeyError, UnsupportedProviderTypeError
from wish.models import EffectiveProviderConfig, ProviderSettings, ProviderType, WishConfig
from wish.registry import defaults_for, env_mapping_for, is_supported_type, supported_types

_APP_NAME = "wish"
_CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "WISH_CONFIG"

_CREDENTIAL_FIELDS = ("client_id", "client_secret", "redirect")
_OVERLAY_FIELDS = (
    "client_id",
    "client_secret",
    "redirect",
    "scopes",
    "scope_separator",
    "token_url",
    "user_url",
)


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform follows the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def get_config_dir() -> Path:
    """Return the configuration directory. The directory is not created.

    On Linux/BSD: ``$XDG_CONFIG_HOME/wish/`` (default ``~/.config/wish/``).
    On macOS/Windows: ``~/.wish/``.
    """
    if _is_xdg_platform():
        env_value = os.environ.get("XDG_CONFIG_HOME", "")
        base = Path(env_value) if env_value else Path.home() / ".config"
        return base / _APP_NAME
    return Path.home() / f".{_APP_NAME}"


def default_config_path() -> Path:
    """Path to the config file in the XDG config directory."""
    return get_config_dir() / _CONFIG_FILENAME


# --- Host configuration ---


def load_config(path: Optional[str | Path] = None) -> WishConfig:
    """Load the host configuration from JSON.

    Args:
        path: Explicit file path. When ``None``, ``$WISH_CONFIG`` is used,
            then :func:`default_config_path`.

    Returns:
        The validated :class:`~wish.models.WishConfig`. An empty config is
        returned when no path was given and the default file does not exist.

    Raises:
        ConfigError: If an explicitly named file (argument or
            ``$WISH_CONFIG``) does not exist, or any file contains invalid
            JSON or fails validation.
    """
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV_VAR))
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        resolved = Path(env_path) if env_path else default_config_path()
    else:
        resolved = Path(path)
    resolved = resolved.expanduser()

    if not resolved.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {resolved}")
        return WishConfig()
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
        return WishConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {resolved}: {exc}") from exc


def _settings_for(key: str, config: Optional[WishConfig]) -> Optional[ProviderSettings]:
    if config is None:
        return None
    return config.providers.get(key)


# --- Precedence resolution ---


def resolve_type(provider_key: str, config: Optional[WishConfig] = None) -> ProviderType:
    """Map *provider_key* to its provider type.

    An explicit ``type`` in the key's settings wins; otherwise the key must
    itself name a supported type.

    Raises:
        UnsupportedProviderTypeError: If the explicit ``type`` is unknown.
        UnresolvableProviderKeyError: If there is no ``type`` and the key is
            not a type name.
    """
    settings = _settings_for(provider_key, config)
    if settings is not None and settings.type is not None:
        if not is_supported_type(settings.type):
            raise UnsupportedProviderTypeError(
                settings.type, supported_types(), key=provider_key
            )
        return ProviderType(settings.type)
    if is_supported_type(provider_key):
        return ProviderType(provider_key)
    raise UnresolvableProviderKeyError(provider_key, supported_types())


def resolve_config(
    provider_key: str,
    config: Optional[WishConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EffectiveProviderConfig:
    """Merge defaults, environment, and caller config for *provider_key*.

    Credentials are not checked for presence: a deployment missing
    ``client_id`` still resolves and fails later, when the provider rejects
    the request.

    Args:
        provider_key: The provider key to resolve.
        config: Host configuration. ``None`` means defaults and environment only.
        environ: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        A fresh :class:`~wish.models.EffectiveProviderConfig`.
    """
    if environ is None:
        environ = os.environ
    provider_type = resolve_type(provider_key, config)

    # 3. Defaults
    defaults = defaults_for(provider_type)
    merged: dict[str, Any] = {
        "key": provider_key,
        "type": provider_type,
        "scope_separator": defaults.scope_separator,
        "scopes": list(defaults.scopes),
        "token_url": defaults.token_url,
        "user_url": defaults.user_url,
    }

    # 2. Environment variables (set and non-empty only)
    env_names = env_mapping_for(provider_type)
    for field in _CREDENTIAL_FIELDS:
        value = environ.get(getattr(env_names, field))
        if value:
            merged[field] = value

    # 1. Caller config, field by field
    settings = _settings_for(provider_key, config)
    if settings is not None:
        for field in _OVERLAY_FIELDS:
            if field not in settings.model_fields_set:
                continue
            value = getattr(settings, field)
            if value is None and field not in _CREDENTIAL_FIELDS:
                # Endpoints and scopes cannot be unset, only replaced.
                continue
            merged[field] = list(value) if field == "scopes" else value

    return EffectiveProviderConfig.model_validate(merged)
