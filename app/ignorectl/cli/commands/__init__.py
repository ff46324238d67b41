"""CLI commands for ignorectl.

This package contains all subcommand implementations.
"""

from ignorectl.cli.commands import add, clean, config, remove

__all__ = ["add", "clean", "config", "remove"]
