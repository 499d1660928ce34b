"""Configuration management for pwr-notify.

Settings come from three layers, later ones winning: ``DEFAULTS``, the JSON
config file, then command line flags. The result is an immutable
``Settings`` that is handed to the monitor once at startup.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from pwr_notify.core.errors import ConfigError
from pwr_notify.core.types import Settings
from pwr_notify.notifier import BACKENDS

log = logging.getLogger(__name__)


# Default configuration values
DEFAULTS = {
    # Batteries under /sys/class/power_supply to combine
    "batteries": ["BAT1"],

    # Alert when the combined level drops below this percentage
    "threshold": 20,

    "notifications": {
        "timeout": 10,  # Seconds the critical notification stays, 0 = until closed
        "icon": "battery",
        "app_name": "pwr-notify",
        "backend": "notify-send",  # "notify-send" or "dbus"
    },

    "polling": {
        "interval_seconds": 180,
    },

    "power_supply_dir": "/sys/class/power_supply",
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "pwr-notify"
    return Path.home() / ".config" / "pwr-notify"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration from file, merging with defaults.

    A missing file is not an error. An unreadable or malformed file is
    logged and ignored.
    """
    config_path = Path(path) if path else get_config_path()

    if not config_path.exists():
        log.debug("No config file at %s, using defaults", config_path)
        return _deep_merge(DEFAULTS, {})

    try:
        with open(config_path, "r") as f:
            user_config = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Could not load config from %s: %s", config_path, e)
        return _deep_merge(DEFAULTS, {})

    if not isinstance(user_config, dict):
        log.warning("Ignoring config %s: top level must be an object", config_path)
        return _deep_merge(DEFAULTS, {})

    log.debug("Loaded config from %s", config_path)
    return _deep_merge(DEFAULTS, user_config)


def get(config: dict, key: str, default: Any = None) -> Any:
    """Get a config value using dot notation (e.g., 'notifications.timeout')."""
    value = config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def _as_int(config: dict, key: str) -> int:
    value = get(config, key)
    # bool is an int subclass, but "threshold": true is a mistake
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    return value


def build_settings(config: dict) -> Settings:
    """Validate a merged config dict and freeze it into Settings."""
    batteries = get(config, "batteries")
    if isinstance(batteries, str):
        batteries = [batteries]
    if not batteries or not all(isinstance(b, str) and b for b in batteries):
        raise ConfigError("batteries must be a non-empty list of names")
    for b in batteries:
        if "/" in b or b in (".", ".."):
            raise ConfigError(f"Invalid battery name: {b!r}")

    threshold = _as_int(config, "threshold")
    if not 0 <= threshold <= 100:
        raise ConfigError(f"threshold must be between 0 and 100, got {threshold}")

    timeout = _as_int(config, "notifications.timeout")
    if timeout < 0:
        raise ConfigError(f"notifications.timeout must not be negative, got {timeout}")

    interval = _as_int(config, "polling.interval_seconds")
    if interval <= 0:
        raise ConfigError(f"polling.interval_seconds must be positive, got {interval}")

    backend = get(config, "notifications.backend")
    if backend not in BACKENDS:
        raise ConfigError(
            f"notifications.backend must be one of {', '.join(BACKENDS)}, got {backend!r}"
        )

    return Settings(
        batteries=tuple(batteries),
        threshold=threshold,
        timeout=timeout,
        polling_interval=interval,
        icon=str(get(config, "notifications.icon")),
        app_name=str(get(config, "notifications.app_name")),
        backend=backend,
        power_supply_dir=Path(get(config, "power_supply_dir")),
    )


def resolve_settings(path: Optional[Path] = None,
                     overrides: Optional[dict] = None) -> Settings:
    """Load the config file, apply command line overrides and validate."""
    return build_settings(_deep_merge(load_config(path), overrides or {}))
