"""XDG-compliant path management for connectorctl.

User-level configuration lives under ``$XDG_CONFIG_HOME/connectorctl/``
(``~/.config/connectorctl/`` by default). A repository can carry its own
``connectorctl.toml`` at its root, which takes precedence.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "connectorctl"

# Settings file looked up at the repository root
REPO_CONFIG_NAME = "connectorctl.toml"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/connectorctl/ (or XDG_CONFIG_HOME/connectorctl/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_config_path() -> Path:
    """Get the user-level settings file path.

    Returns:
        Path to ~/.config/connectorctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/connectorctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_repo_config_path(repo_root: Path) -> Path:
    """Get the repository-local settings file path."""
    return repo_root / REPO_CONFIG_NAME


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
