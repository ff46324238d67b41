"""Add command implementation.

Adds the canonical .gitignore entry for each selected file or folder.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ignorectl.cli.display import print_operation_summary
from ignorectl.cli.types import (
    WorkspaceOption,
    is_quiet,
    is_verbose,
    require_config,
    resolve_workspace,
)
from ignorectl.rules.editor import add_paths
from ignorectl.rules.models import OperationStatus
from ignorectl.rules.storage import RuleFileError
from ignorectl.utils.formatting import print_error


def add(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or folders to ignore."),
    ],
    workspace: WorkspaceOption = None,
) -> None:
    """Add files or folders to the workspace .gitignore.

    The .gitignore is created with the base entries if it does not exist.
    Paths inside a symlinked folder are recorded as the symlink itself.
    Relative paths are resolved against the current directory, not the
    workspace.

    Examples:
        ignorectl add build/ .env
        ignorectl add -w ~/src/app ~/src/app/docs/generated
    """
    root = resolve_workspace(workspace)
    config = require_config(root)

    try:
        results = add_paths(root, paths, config)
    except RuleFileError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if not is_quiet(ctx) or any(r.failed for r in results):
        print_operation_summary(results, OperationStatus.ADDED, verbose=is_verbose(ctx))

    if any(r.failed for r in results):
        raise typer.Exit(code=1)
