"""Rule file storage.

Reads and writes the raw text of a rule file. Writes are atomic: the
content goes to a temporary file in the same directory which then
replaces the target, so a failed write never leaves a partial file.
"""

import os
import stat
from abc import ABC, abstractmethod
from pathlib import Path
from tempfile import NamedTemporaryFile

# Name of the rule file at the workspace root
RULE_FILE_NAME = ".gitignore"

_DEFAULT_MODE = 0o644


class RuleFileError(Exception):
    """Base exception for rule file errors."""


class RuleFileNotFoundError(RuleFileError):
    """Raised when the rule file does not exist."""


class InvalidTargetError(RuleFileError):
    """Raised when a selected path cannot be managed in the rule file."""


class RuleFileStorage(ABC):
    """Abstract base class for rule file storage backends."""

    @abstractmethod
    def read(self, path: Path) -> str:
        """Read the rule file content.

        Raises:
            RuleFileNotFoundError: If the file does not exist.
            RuleFileError: If the file cannot be read.
        """

    @abstractmethod
    def write(self, path: Path, content: str) -> None:
        """Replace the rule file content.

        Raises:
            RuleFileError: If the file cannot be written.
        """


class LocalStorage(RuleFileStorage):
    """Stores rule files on the local filesystem as UTF-8."""

    def read(self, path: Path) -> str:
        try:
            return path.read_bytes().decode("utf-8")
        except FileNotFoundError as e:
            raise RuleFileNotFoundError(f"Rule file not found: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise RuleFileError(f"Failed to read {path}: {e}") from e

    def write(self, path: Path, content: str) -> None:
        tmp_path: Path | None = None
        try:
            # Write through a symlinked rule file instead of replacing the link
            target = path.resolve()
            with NamedTemporaryFile(
                mode="wb",
                dir=target.parent,
                prefix=f"{target.name}.",
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                f.write(content.encode("utf-8"))
            # Temporary files are created 0600; keep the rule file readable
            mode = stat.S_IMODE(target.stat().st_mode) if target.exists() else _DEFAULT_MODE
            os.chmod(tmp_path, mode)
            os.replace(str(tmp_path), str(target))
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise RuleFileError(f"Failed to write {path}: {e}") from e


def get_rule_file_path(workspace: Path) -> Path:
    """Get the rule file path for a workspace.

    Returns:
        Path to ``<workspace>/.gitignore``.
    """
    return workspace / RULE_FILE_NAME
