"""Path constants and directory utilities for snipkeep config.

Follows the XDG Base Directory specification:
- Config: ~/.config/snipkeep/
- Snippet data: ~/.config/snipkeep/snippets.json (unless overridden)
"""

from pathlib import Path


# XDG-compliant config directory
CONFIG_DIR = Path.home() / ".config" / "snipkeep"
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Default location of the snippet collection and style object
DATA_FILE = CONFIG_DIR / "snippets.json"


def ensure_config_dir() -> Path:
    """Create config directory if it doesn't exist.

    Returns the config directory path.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR
