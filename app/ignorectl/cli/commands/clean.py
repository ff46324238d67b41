"""Clean command implementation.

Normalizes the workspace .gitignore: removes duplicate entries, renders
each entry in canonical form, restores base entries and optionally
removes blank lines and comments and sorts the result.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from ignorectl.cli.display import format_cleaning_summary
from ignorectl.cli.types import WorkspaceOption, is_quiet, require_config, resolve_workspace
from ignorectl.rules.editor import clean_rule_file
from ignorectl.rules.lines import serialize_lines
from ignorectl.rules.storage import RuleFileError, RuleFileNotFoundError, get_rule_file_path
from ignorectl.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def clean(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Argument(help="Rule file to clean; must be the workspace root .gitignore."),
    ] = None,
    workspace: WorkspaceOption = None,
    sort: Annotated[
        bool | None,
        typer.Option("--sort/--no-sort", help="Sort entries alphabetically."),
    ] = None,
    remove_empty_lines: Annotated[
        bool | None,
        typer.Option(
            "--remove-empty-lines/--keep-empty-lines",
            help="Remove blank lines.",
        ),
    ] = None,
    remove_comments: Annotated[
        bool | None,
        typer.Option("--remove-comments/--keep-comments", help="Remove comment lines."),
    ] = None,
    trailing_slash: Annotated[
        bool | None,
        typer.Option(
            "--trailing-slash/--no-trailing-slash",
            help="Write folders with a trailing slash.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Print the cleaned file without writing it."),
    ] = False,
) -> None:
    """Clean the workspace .gitignore.

    Options not given on the command line come from the settings files.

    Examples:
        ignorectl clean
        ignorectl clean --sort --remove-empty-lines
        ignorectl clean --dry-run
    """
    root = resolve_workspace(workspace)

    if file is not None and not _is_root_rule_file(file, root):
        print_warning("Clean can only be run on the workspace root .gitignore file.")
        return

    config = require_config(root)
    options = config.cleaning_options(
        sort=sort,
        remove_empty_lines=remove_empty_lines,
        remove_comments=remove_comments,
        trailing_slash_for_folders=trailing_slash,
    )

    try:
        outcome = clean_rule_file(root, config, options, dry_run=dry_run)
    except RuleFileNotFoundError:
        print_warning(f".gitignore not found in workspace {escape(str(root))}.")
        return
    except RuleFileError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    if not outcome.changed:
        if not is_quiet(ctx):
            print_info(".gitignore is already clean.")
        return

    if dry_run:
        console.print(
            serialize_lines(outcome.result.lines),
            end="",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        print_info(f"Dry-run: {format_cleaning_summary(outcome.result)}")
        return

    if not is_quiet(ctx):
        print_success(format_cleaning_summary(outcome.result))


def _is_root_rule_file(file: Path, workspace: Path) -> bool:
    """Check whether ``file`` is the rule file at the workspace root."""
    expected = os.path.normpath(get_rule_file_path(workspace).absolute())
    return os.path.normpath(file.absolute()) == expected
