"""Remove command implementation.

Removes every .gitignore entry matching the selected files or folders,
whatever anchoring or trailing-slash style they were written in.
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
from ignorectl.rules.editor import remove_paths
from ignorectl.rules.models import OperationStatus
from ignorectl.rules.storage import RuleFileError, RuleFileNotFoundError
from ignorectl.utils.formatting import print_error, print_warning


def remove(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or folders to stop ignoring."),
    ],
    workspace: WorkspaceOption = None,
) -> None:
    """Remove files or folders from the workspace .gitignore.

    Base entries are managed automatically and are never removed.
    """
    root = resolve_workspace(workspace)
    config = require_config(root)

    try:
        results = remove_paths(root, paths, config)
    except RuleFileNotFoundError:
        print_warning(f".gitignore not found in workspace {escape(str(root))}.")
        return
    except RuleFileError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if not is_quiet(ctx) or any(r.failed for r in results):
        print_operation_summary(results, OperationStatus.REMOVED, verbose=is_verbose(ctx))

    if any(r.failed for r in results):
        raise typer.Exit(code=1)
