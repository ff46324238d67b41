"""Formatting policies and settings I/O.

Settings are read from up to two TOML files, later ones overriding
earlier ones key by key:

1. User settings: ~/.config/ignorectl/config.toml
2. Workspace settings: <workspace>/.ignorectl.toml

Missing files are not errors; the defaults apply.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ignorectl.core.paths import get_user_config_path, get_workspace_config_path
from ignorectl.rules.models import CleaningOptions

logger = logging.getLogger(__name__)

# macOS Finder metadata, ignored by default in every workspace
DEFAULT_BASE_ENTRIES: list[str] = [".DS_Store"]


class IgnoreConfig(BaseModel):
    """Formatting policies for a workspace rule file.

    Attributes:
        base_entries: Entries that must always be present, in prepend order.
        add_with_leading_slash: Anchor added entries to the workspace root.
        trailing_slash_for_folders: Write folders with a trailing ``/``.
        remove_empty_lines: Drop blank lines when cleaning.
        remove_comments: Drop comment lines when cleaning.
        sort_when_cleaning: Sort lines when cleaning.
    """

    model_config = ConfigDict(extra="forbid")

    base_entries: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_BASE_ENTRIES),
            description="Entries that are always kept in the rule file",
        ),
    ]
    add_with_leading_slash: Annotated[
        bool,
        Field(description="Anchor added entries with a leading slash"),
    ] = True
    trailing_slash_for_folders: Annotated[
        bool,
        Field(description="Append a trailing slash to folder entries"),
    ] = True
    remove_empty_lines: Annotated[
        bool,
        Field(description="Remove blank lines when cleaning"),
    ] = False
    remove_comments: Annotated[
        bool,
        Field(description="Remove comment lines when cleaning"),
    ] = False
    sort_when_cleaning: Annotated[
        bool,
        Field(description="Sort entries when cleaning"),
    ] = False

    @field_validator("base_entries")
    @classmethod
    def normalize_base_entries(cls, value: list[str]) -> list[str]:
        """Trim entries and drop blanks and duplicates, keeping order."""
        normalized: list[str] = []
        for raw in value:
            entry = raw.strip()
            if entry and entry not in normalized:
                normalized.append(entry)
        return normalized

    def cleaning_options(
        self,
        *,
        sort: bool | None = None,
        remove_empty_lines: bool | None = None,
        remove_comments: bool | None = None,
        trailing_slash_for_folders: bool | None = None,
    ) -> CleaningOptions:
        """Build cleaning options, applying per-invocation overrides.

        Any override left as None falls back to the configured value.
        """
        return CleaningOptions(
            sort=self.sort_when_cleaning if sort is None else sort,
            remove_empty_lines=(
                self.remove_empty_lines if remove_empty_lines is None else remove_empty_lines
            ),
            remove_comments=self.remove_comments if remove_comments is None else remove_comments,
            trailing_slash_for_folders=(
                self.trailing_slash_for_folders
                if trailing_slash_for_folders is None
                else trailing_slash_for_folders
            ),
        )


class ConfigError(Exception):
    """Base exception for settings errors."""


class ConfigParseError(ConfigError):
    """Raised when a settings file cannot be parsed."""


def _read_toml(path: Path) -> dict[str, Any] | None:
    """Read a TOML settings file, returning None if it does not exist."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read settings {path}: {e}") from e


def get_config_sources(workspace: Path | None = None) -> list[Path]:
    """List the settings files consulted for a workspace, lowest priority first."""
    sources = [get_user_config_path()]
    if workspace is not None:
        sources.append(get_workspace_config_path(workspace))
    return sources


def load_config(workspace: Path | None = None) -> IgnoreConfig:
    """Load settings for a workspace.

    Args:
        workspace: Workspace root. If None, only user settings are read.

    Returns:
        Validated IgnoreConfig with all layers applied.

    Raises:
        ConfigParseError: If a settings file has invalid TOML syntax.
        ConfigError: If the merged content does not match the schema.
    """
    data: dict[str, Any] = {}
    for path in get_config_sources(workspace):
        layer = _read_toml(path)
        if layer is None:
            continue
        logger.debug("Loaded settings from %s", path)
        data.update(layer)

    try:
        return IgnoreConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid settings content: {e}") from e


def save_config(config: IgnoreConfig, path: Path) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The settings to save.
        path: Destination file.

    Returns:
        Path where the settings were saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write settings: {e}") from e

    return path


def _config_to_dict(config: IgnoreConfig) -> dict[str, object]:
    """Convert settings to a dictionary for TOML serialization.

    ``base_entries`` is always written; other keys only when they differ
    from the defaults.
    """
    defaults = IgnoreConfig()
    result: dict[str, object] = {"base_entries": list(config.base_entries)}
    for name in (
        "add_with_leading_slash",
        "trailing_slash_for_folders",
        "remove_empty_lines",
        "remove_comments",
        "sort_when_cleaning",
    ):
        value = getattr(config, name)
        if value != getattr(defaults, name):
            result[name] = value
    return result
