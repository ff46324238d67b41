"""Shared types and utilities for CLI commands.

This module provides common option types and helper functions used
across multiple CLI command modules to avoid code duplication.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ignorectl.core.config import ConfigError, IgnoreConfig, load_config
from ignorectl.utils.formatting import print_error

WorkspaceOption = Annotated[
    Path | None,
    typer.Option(
        "--workspace",
        "-w",
        help="Workspace root containing the .gitignore (default: current directory).",
        file_okay=False,
    ),
]


def resolve_workspace(workspace: Path | None) -> Path:
    """Return the absolute workspace root, defaulting to the current directory.

    Raises:
        typer.Exit: If the workspace is not an existing directory.
    """
    root = (workspace or Path.cwd()).absolute()
    if not root.is_dir():
        print_error(f"Workspace is not a directory: {escape(str(root))}")
        raise typer.Exit(code=1)
    return root


def require_config(workspace: Path) -> IgnoreConfig:
    """Load settings or exit with a helpful error message.

    Args:
        workspace: Workspace root whose settings file is consulted.

    Returns:
        Loaded and validated IgnoreConfig.

    Raises:
        typer.Exit: If the settings cannot be loaded.
    """
    try:
        return load_config(workspace)
    except ConfigError as e:
        print_error(f"Failed to load settings: {escape(str(e))}")
        raise typer.Exit(code=1) from e


def is_verbose(ctx: typer.Context) -> bool:
    """Read the global --verbose flag from the context."""
    obj = ctx.find_root().obj
    return bool(obj and obj.get("verbose"))


def is_quiet(ctx: typer.Context) -> bool:
    """Read the global --quiet flag from the context."""
    obj = ctx.find_root().obj
    return bool(obj and obj.get("quiet"))
