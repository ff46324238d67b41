"""Settings commands.

Shows the effective settings for a workspace and writes a workspace
settings file.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from ignorectl.cli.types import WorkspaceOption, require_config, resolve_workspace
from ignorectl.core.config import ConfigError, get_config_sources, save_config
from ignorectl.core.paths import get_workspace_config_path
from ignorectl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize ignorectl settings.",
    no_args_is_help=True,
)


@app.command()
def show(workspace: WorkspaceOption = None) -> None:
    """Show the effective settings for a workspace."""
    root = resolve_workspace(workspace)
    config = require_config(root)

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")

    base = ", ".join(config.base_entries) if config.base_entries else "(none)"
    table.add_row("base_entries", escape(base))
    table.add_row("add_with_leading_slash", str(config.add_with_leading_slash).lower())
    table.add_row("trailing_slash_for_folders", str(config.trailing_slash_for_folders).lower())
    table.add_row("remove_empty_lines", str(config.remove_empty_lines).lower())
    table.add_row("remove_comments", str(config.remove_comments).lower())
    table.add_row("sort_when_cleaning", str(config.sort_when_cleaning).lower())
    console.print(table)

    for source in get_config_sources(root):
        state = "loaded" if source.exists() else "not found"
        console.print(f"[dim]{escape(str(source))} ({state})[/dim]")


@app.command()
def init(
    workspace: WorkspaceOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write the effective settings to the workspace settings file."""
    root = resolve_workspace(workspace)
    path = get_workspace_config_path(root)

    if path.exists() and not force:
        print_info(
            f"Settings file already exists: {escape(str(path))} (use --force to overwrite)"
        )
        return

    config = require_config(root)
    try:
        save_config(config, path)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {escape(str(path))}")
