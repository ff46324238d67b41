"""XDG-compliant path management for ignorectl.

User-level settings follow the XDG Base Directory Specification:
- Config: ~/.config/ignorectl/

Per-workspace settings live next to the rule file in ``.ignorectl.toml``.
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "ignorectl"

# Per-workspace settings file name
WORKSPACE_CONFIG_NAME = ".ignorectl.toml"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/ignorectl/ (or XDG_CONFIG_HOME/ignorectl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_user_config_path() -> Path:
    """Get the user-level settings file path.

    Returns:
        Path to ~/.config/ignorectl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_workspace_config_path(workspace: Path) -> Path:
    """Get the workspace-level settings file path.

    Returns:
        Path to <workspace>/.ignorectl.toml.
    """
    return workspace / WORKSPACE_CONFIG_NAME


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/ignorectl/theme.toml.
    """
    return get_config_dir() / "theme.toml"
