"""Rule file engine.

This package parses, cleans and edits a workspace .gitignore: line
classification, canonical-key deduplication, directory and symlink aware
formatting, base entry enforcement and single-path entry building.
"""

from ignorectl.rules.builder import build_entry_for_add, build_entry_for_remove, get_relative_path
from ignorectl.rules.cleaner import clean_entries, enforce_base_entries, render_canonical_line
from ignorectl.rules.lines import classify_line, normalization_key, parse_lines, serialize_lines
from ignorectl.rules.models import (
    CleaningOptions,
    CleaningResult,
    LineKind,
    OperationResult,
    OperationStatus,
    PathKind,
)
from ignorectl.rules.probe import FilesystemProbe, PathProbe
from ignorectl.rules.storage import (
    InvalidTargetError,
    LocalStorage,
    RuleFileError,
    RuleFileNotFoundError,
    RuleFileStorage,
)

__all__ = [
    "CleaningOptions",
    "CleaningResult",
    "FilesystemProbe",
    "InvalidTargetError",
    "LineKind",
    "LocalStorage",
    "OperationResult",
    "OperationStatus",
    "PathKind",
    "PathProbe",
    "RuleFileError",
    "RuleFileNotFoundError",
    "RuleFileStorage",
    "build_entry_for_add",
    "build_entry_for_remove",
    "classify_line",
    "clean_entries",
    "enforce_base_entries",
    "get_relative_path",
    "normalization_key",
    "parse_lines",
    "render_canonical_line",
    "serialize_lines",
]
