"""Configuration management module.

Handles loading, saving, and accessing the snipkeep configuration.
Config is stored at ~/.config/snipkeep/config.toml

Usage:
    from snipkeep.config import load_config, get_page_size, get_data_file

    config = load_config()
    page_size = get_page_size(config)
"""

import tomllib
from pathlib import Path

import tomli_w

from .paths import CONFIG_FILE, DATA_FILE, ensure_config_dir
from .schema import SnipkeepConfig
from .template import CONFIG_TEMPLATE

# Re-export for convenience
__all__ = [
    "load_config",
    "save_config",
    "init_config",
    "get_page_size",
    "get_data_file",
    "set_config_value",
    "CONFIG_FILE",
    "DEFAULT_PAGE_SIZE",
]

DEFAULT_PAGE_SIZE = 12

# Module-level cache for loaded config.
# Avoids repeated disk reads during a single CLI invocation.
_cached_config: SnipkeepConfig | None = None


def load_config(*, force_reload: bool = False) -> SnipkeepConfig:
    """Load configuration from disk.

    Returns empty dict if config file doesn't exist.
    Uses module-level caching to avoid repeated disk reads.

    Args:
        force_reload: Bypass cache and read from disk (useful after saving).

    Returns:
        The configuration dictionary.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    if not CONFIG_FILE.exists():
        _cached_config = {}
        return _cached_config

    with open(CONFIG_FILE, "rb") as f:
        _cached_config = tomllib.load(f)

    return _cached_config


def save_config(config: SnipkeepConfig) -> None:
    """Save configuration to disk.

    Creates config directory if needed. Updates the module cache.

    Args:
        config: The configuration dictionary to save.
    """
    global _cached_config

    ensure_config_dir()

    with open(CONFIG_FILE, "wb") as f:
        tomli_w.dump(config, f)

    # Keep cache in sync with disk
    _cached_config = config


def init_config(*, overwrite: bool = False) -> bool:
    """Initialize config directory and create template config file.

    Args:
        overwrite: If True, overwrite existing config file.

    Returns:
        True if config was created, False if it already existed.
    """
    ensure_config_dir()

    if CONFIG_FILE.exists() and not overwrite:
        return False

    CONFIG_FILE.write_text(CONFIG_TEMPLATE)
    return True


def get_page_size(config: SnipkeepConfig) -> int:
    """Page size for the visible view, falling back to the default."""
    return config.get("defaults", {}).get("page_size", DEFAULT_PAGE_SIZE)


def get_data_file(config: SnipkeepConfig) -> Path:
    """Resolve the snippet data file.

    Args:
        config: The loaded configuration dictionary.

    Returns:
        Expanded path from storage.data_file, or the default data file.
    """
    data_file = config.get("storage", {}).get("data_file")

    if not data_file:
        return DATA_FILE

    return Path(data_file).expanduser()


def set_config_value(key: str, value: str) -> None:
    """Set a configuration value using dot notation.

    Examples:
        set_config_value("defaults.page_size", "24")
        set_config_value("storage.data_file", "~/snippets.json")

    Args:
        key: Dot-separated key path (e.g., "defaults.page_size").
        value: Value to set (will be type-converted for known fields).

    Raises:
        ValueError: If value cannot be converted to expected type.
    """
    config = load_config(force_reload=True)

    parts = key.split(".")

    # Navigate to parent dict, creating intermediate dicts as needed
    current: dict = config
    for part in parts[:-1]:
        if part not in current:
            current[part] = {}
        current = current[part]

    final_key = parts[-1]
    current[final_key] = _convert_value(final_key, value)

    save_config(config)


def _convert_value(key: str, value: str) -> str | int:
    """Convert string value to appropriate type based on field name.

    Known integer fields are converted to int, everything else stays str.

    Raises:
        ValueError: If value cannot be converted to expected type.
    """
    int_fields = {"page_size"}

    if key in int_fields:
        return int(value)

    return value
