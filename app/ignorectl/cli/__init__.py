"""CLI package for ignorectl.

This package contains the Typer application and all subcommands.
"""

from ignorectl.cli.main import app

__all__ = ["app"]
