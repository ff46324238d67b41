"""Rule file domain models.

This module defines the data structures used while parsing, cleaning and
editing a .gitignore rule file: line classification, per-key accumulators,
path types reported by the probe, cleaning options and operation reports.
"""

from dataclasses import dataclass, field
from enum import Enum


class LineKind(str, Enum):
    """Classification of a single rule file line.

    Attributes:
        BLANK: Trimmed text is empty.
        COMMENT: Trimmed text begins with ``#``.
        PATTERN: Glob or negation line, preserved verbatim.
        LITERAL: A concrete file or directory path.
    """

    BLANK = "blank"
    COMMENT = "comment"
    PATTERN = "pattern"
    LITERAL = "literal"


class PathKind(str, Enum):
    """Type of a workspace path as reported by a path probe.

    Attributes:
        DIRECTORY: Real directory (not a symlink to one).
        FILE: Regular file.
        SYMLINK: Symbolic link, regardless of what it points to.
        NOT_FOUND: Path does not exist.
        UNKNOWN: Path could not be inspected.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"

    @property
    def is_directory(self) -> bool:
        """True only for real directories."""
        return self is PathKind.DIRECTORY

    @property
    def is_file_or_symlink(self) -> bool:
        """True for paths that are always rendered without a trailing slash."""
        return self in (PathKind.FILE, PathKind.SYMLINK)

    @property
    def is_resolved(self) -> bool:
        """True when the probe produced an authoritative answer."""
        return self.is_directory or self.is_file_or_symlink


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """A trimmed rule file line tagged with its kind."""

    kind: LineKind
    text: str


@dataclass(frozen=True, slots=True)
class Variant:
    """Formatting style a literal entry was written in.

    Attributes:
        trailing_slash: The line ended with ``/``.
        anchored: The line started with ``/``.
    """

    trailing_slash: bool
    anchored: bool

    @classmethod
    def of(cls, text: str) -> "Variant":
        """Build the variant of a trimmed literal line."""
        return cls(trailing_slash=text.endswith("/"), anchored=text.startswith("/"))


@dataclass(slots=True)
class EntryMeta:
    """Per-key accumulator built during a single cleaning pass.

    Attributes:
        saw_folder_syntax: Any variant of the key ended with ``/``.
        status: Probe result for the key; authoritative when resolved.
    """

    saw_folder_syntax: bool = False
    status: PathKind = PathKind.UNKNOWN

    @property
    def is_folder(self) -> bool:
        """Whether the key should be rendered as a folder.

        Probe results win over syntax. Unresolved keys fall back to
        whatever the user wrote.
        """
        if self.status.is_resolved:
            return self.status.is_directory
        return self.saw_folder_syntax


@dataclass(frozen=True, slots=True)
class CleaningOptions:
    """Formatting policies applied by a cleaning pass."""

    sort: bool = False
    remove_empty_lines: bool = False
    remove_comments: bool = False
    trailing_slash_for_folders: bool = True


@dataclass(frozen=True, slots=True)
class CleaningResult:
    """Outcome of a cleaning pass.

    The counters are a report only; ``lines`` is the cleaned content.
    """

    lines: list[str]
    duplicates_removed: int = 0
    empty_lines_removed: int = 0
    comments_removed: int = 0
    sorted_applied: bool = False
    base_entries_added: bool = False

    @property
    def has_updates(self) -> bool:
        """True if any counter reports a change."""
        return bool(
            self.duplicates_removed
            or self.empty_lines_removed
            or self.comments_removed
            or self.sorted_applied
            or self.base_entries_added
        )


@dataclass(frozen=True, slots=True)
class CleanOutcome:
    """Result of cleaning a rule file on disk.

    Attributes:
        path: Rule file location.
        result: The cleaning report.
        changed: Whether the cleaned lines differ from the original ones.
        written: Whether the new content was written to storage.
    """

    path: str
    result: CleaningResult
    changed: bool
    written: bool


class OperationStatus(str, Enum):
    """Outcome of adding or removing a single target path."""

    ADDED = "added"
    REMOVED = "removed"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Result of a single add or remove operation.

    Attributes:
        entry: Rule line (or display path on error) the operation concerned.
        status: What happened.
        detail: Human-readable explanation for skipped or failed targets.
    """

    entry: str
    status: OperationStatus
    detail: str | None = None

    @property
    def failed(self) -> bool:
        """True if the operation raised an error."""
        return self.status == OperationStatus.ERROR


@dataclass(frozen=True, slots=True)
class EntryInfo:
    """Canonical rule line built for a single target path.

    Attributes:
        entry: The rendered rule line.
        relative_path: Workspace-relative path the entry was built from.
        is_directory: Whether the entry was rendered as a folder.
        substituted_from: Original target when a symlinked ancestor replaced it.
    """

    entry: str
    relative_path: str
    is_directory: bool
    substituted_from: str | None = None


@dataclass(slots=True)
class RuleFileState:
    """Working copy of a rule file during an add or remove invocation.

    Attributes:
        path: Rule file location.
        lines: Current lines, mutated in place by operations.
        dirty: Whether the lines must be written back.
        created: Whether the file did not exist before this invocation.
    """

    path: str
    lines: list[str] = field(default_factory=list)
    dirty: bool = False
    created: bool = False
