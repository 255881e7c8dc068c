"""Central configuration: packaged YAML defaults plus per-user overrides."""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from market_eod.data.exceptions import MissingRequiredFieldError


# --- Settings models ---


class ApiSettings(BaseModel):
    access_key: str | None = None  # literal key or ${ENV_VAR} reference
    eod_path: str = "/eod/"
    max_limit: int = 1000
    max_symbols: int = 100

    def resolved_access_key(self) -> str:
        """Return the access key with any env var reference resolved."""
        value = _resolve_env(self.access_key or "")
        if not value:
            raise MissingRequiredFieldError("access_key", model="ApiSettings")
        return value


class ClientSettings(BaseModel):
    is_free_tier: bool = False


class Settings(BaseModel):
    """Merged settings: packaged defaults overlaid with the user file."""

    api: ApiSettings = Field(default_factory=ApiSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)


# --- Loading ---

_DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"
_USER_CONFIG_PATH = Path.home() / ".market_eod" / "config.yaml"

_ENV_REF = re.compile(r"^\$\{?([A-Z_][A-Z0-9_]*)\}?$")

_cached_settings: Settings | None = None


def _resolve_env(value: str) -> str:
    """Resolve ``${ENV_VAR}`` or ``$ENV_VAR`` references. Unset resolves to ``""``."""
    if not value:
        return value
    match = _ENV_REF.match(value)
    if match:
        return os.getenv(match.group(1), "")
    return value


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base. Returns new dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(
    user_config_path: Path | None = None,
    _force_reload: bool = False,
) -> Settings:
    """Load defaults.yaml, merge ~/.market_eod/config.yaml if present.

    Args:
        user_config_path: Override path for user config file.
        _force_reload: Bypass cache (for testing).

    Returns:
        Merged Settings instance.
    """
    global _cached_settings
    if _cached_settings is not None and not _force_reload:
        return _cached_settings

    # Layer 1: package defaults
    with open(_DEFAULTS_PATH) as f:
        defaults = yaml.safe_load(f) or {}

    # Layer 2: user overrides
    user_path = user_config_path or _USER_CONFIG_PATH
    if user_path.exists():
        with open(user_path) as f:
            user = yaml.safe_load(f) or {}
        merged = _deep_merge(defaults, user)
    else:
        merged = defaults

    _cached_settings = Settings(**merged)
    return _cached_settings


def get_settings() -> Settings:
    """Get cached settings (singleton). Loads on first call."""
    return load_settings()


def reset_settings() -> None:
    """Clear cached settings. Next get_settings() will reload from YAML."""
    global _cached_settings
    _cached_settings = None
