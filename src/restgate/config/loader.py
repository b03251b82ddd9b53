"""Configuration loading: TOML files, env var overrides, merge logic.

Discovery order (later overrides earlier):
    1. Built-in defaults (Pydantic model defaults)
    2. User config: ``~/.config/restgate/config.toml``
    3. Project-local config: ``./restgate.toml``
    4. ``$RESTGATE_CONFIG`` environment variable (explicit path)
    5. Explicit ``path`` argument
    6. Deployment environment variables (``SUPABASE_URL``, ``PORT``,
       ``HOST_URL``)
    7. Programmatic overrides (passed to ``load_config``)

The service credential is resolved last: if ``backend.service_role_key``
is not set by any of the above, the env var named by
``backend.service_role_key_env`` is read.  A gateway without a
credential cannot talk to its backing service, so its absence is a
:class:`ConfigError` unless the caller opts out.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from restgate.core.errors import ConfigError

from .schema import GatewayConfig

# env var -> (section, key)
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "SUPABASE_URL": ("backend", "url"),
    "PORT": ("server", "port"),
    "HOST_URL": ("server", "public_url"),
}


def _user_config_path() -> Path:
    """Return XDG-compliant user config path."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "restgate" / "config.toml"


def _project_config_path() -> Path:
    """Return project-local config path."""
    return Path.cwd() / "restgate.toml"


def _discover_config_files() -> list[Path]:
    """Return config files in merge order (first = lowest priority)."""
    paths: list[Path] = []

    user = _user_config_path()
    if user.is_file():
        paths.append(user)

    project = _project_config_path()
    if project.is_file():
        paths.append(project)

    env_path = os.environ.get("RESTGATE_CONFIG")
    if env_path:
        p = Path(env_path)
        if not p.is_file():
            msg = f"RESTGATE_CONFIG points to non-existent file: {env_path}"
            raise ConfigError(msg)
        paths.append(p)

    return paths


def _read_toml(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file."""
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override wins on conflicts."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _env_overrides() -> dict[str, Any]:
    """Collect deployment env vars into a config-shaped dict."""
    data: dict[str, Any] = {}
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value:
            data.setdefault(section, {})[key] = value
    return data


def _resolve_service_key(config: GatewayConfig) -> GatewayConfig:
    """Fill the service credential from its env var when not set explicitly."""
    backend = config.backend
    if backend.service_role_key or not backend.service_role_key_env:
        return config
    key = os.environ.get(backend.service_role_key_env)
    if not key:
        return config
    return config.model_copy(
        update={"backend": backend.model_copy(update={"service_role_key": key})}
    )


def load_config(
    path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
    *,
    require_credential: bool = True,
) -> GatewayConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file path (highest file priority).
        overrides: Dict of overrides merged last (highest overall priority).
        require_credential: Fail when no service credential is resolved.

    Returns:
        Validated, immutable GatewayConfig instance.

    Raises:
        ConfigError: On invalid TOML, missing files, validation failure,
            or a missing service credential.
    """
    merged: dict[str, Any] = {}

    files = _discover_config_files()

    if path is not None:
        p = Path(path)
        if not p.is_file():
            msg = f"Config file not found: {path}"
            raise ConfigError(msg)
        files.append(p)

    for config_file in files:
        data = _read_toml(config_file)
        merged = _deep_merge(merged, data)

    merged = _deep_merge(merged, _env_overrides())

    if overrides:
        merged = _deep_merge(merged, overrides)

    try:
        config = GatewayConfig.model_validate(merged)
    except Exception as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e

    config = _resolve_service_key(config)

    if require_credential and not config.backend.service_role_key:
        msg = (
            f"{config.backend.service_role_key_env} environment variable is required"
        )
        raise ConfigError(msg)

    return config
