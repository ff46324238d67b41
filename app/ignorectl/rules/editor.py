"""Read-compute-write workflows on a workspace rule file.

Every workflow reloads the rule file from storage, computes the new
content in memory and writes it back at most once. Nothing is cached
between invocations, and an error before the write leaves the file
untouched.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from ignorectl.core.config import IgnoreConfig
from ignorectl.rules.builder import build_entry_for_add, build_entry_for_remove, get_relative_path
from ignorectl.rules.cleaner import clean_entries, enforce_base_entries, has_entry
from ignorectl.rules.lines import cleanup_lines, entry_identity, parse_lines, serialize_lines
from ignorectl.rules.models import (
    CleaningOptions,
    CleanOutcome,
    OperationResult,
    OperationStatus,
    RuleFileState,
)
from ignorectl.rules.probe import FilesystemProbe, PathProbe
from ignorectl.rules.storage import (
    LocalStorage,
    RuleFileError,
    RuleFileNotFoundError,
    RuleFileStorage,
    get_rule_file_path,
)

logger = logging.getLogger(__name__)

TargetHandler = Callable[[RuleFileState, str, PathProbe, IgnoreConfig], OperationResult]


def add_entry(lines: list[str], entry: str) -> bool:
    """Append ``entry`` unless an equivalent line already exists.

    Returns:
        True if the entry was appended.
    """
    if has_entry(lines, entry):
        return False
    lines.append(entry)
    return True


def remove_entry(lines: list[str], entry: str) -> list[str]:
    """Remove every line equivalent to ``entry`` in place.

    Literal entries match all anchoring and trailing-slash variants.

    Returns:
        The removed lines, in file order.
    """
    identity = entry_identity(entry)
    if identity is None:
        return []

    removed = [line for line in lines if entry_identity(line) == identity]
    if removed:
        lines[:] = [line for line in lines if entry_identity(line) != identity]
    return removed


def is_base_entry(entry: str, base_entries: list[str]) -> bool:
    """Check whether ``entry`` is one of the managed base entries."""
    identity = entry_identity(entry)
    return identity is not None and any(entry_identity(base) == identity for base in base_entries)


def load_rule_file(
    path: Path,
    storage: RuleFileStorage,
    base_entries: list[str],
    *,
    create: bool = True,
) -> RuleFileState:
    """Load a rule file into a working state.

    Base entries are enforced immediately. A missing file is seeded with
    the base entries when ``create`` is set; it is written later together
    with any other change.

    Raises:
        RuleFileNotFoundError: If the file is missing and ``create`` is False.
        RuleFileError: If the file cannot be read.
    """
    try:
        content = storage.read(path)
    except RuleFileNotFoundError:
        if not create:
            raise
        logger.info("Creating %s with %d base entries", path, len(base_entries))
        return RuleFileState(path=str(path), lines=list(base_entries), dirty=True, created=True)

    lines = parse_lines(content)
    dirty = enforce_base_entries(lines, base_entries)
    return RuleFileState(path=str(path), lines=lines, dirty=dirty)


def add_target(
    state: RuleFileState,
    relative_path: str,
    probe: PathProbe,
    config: IgnoreConfig,
) -> OperationResult:
    """Add the canonical entry for one workspace-relative path."""
    info = build_entry_for_add(
        relative_path,
        probe,
        add_with_leading_slash=config.add_with_leading_slash,
        trailing_slash_for_folders=config.trailing_slash_for_folders,
    )

    if is_base_entry(info.entry, config.base_entries):
        return OperationResult(
            entry=info.entry,
            status=OperationStatus.SKIPPED,
            detail="Entry is managed automatically.",
        )

    if add_entry(state.lines, info.entry):
        state.dirty = True
        return OperationResult(entry=info.entry, status=OperationStatus.ADDED)

    return OperationResult(
        entry=info.entry,
        status=OperationStatus.SKIPPED,
        detail="Entry already exists in .gitignore.",
    )


def remove_target(
    state: RuleFileState,
    relative_path: str,
    probe: PathProbe,
    config: IgnoreConfig,
) -> OperationResult:
    """Remove every entry matching one workspace-relative path."""
    info = build_entry_for_remove(
        relative_path,
        probe,
        add_with_leading_slash=config.add_with_leading_slash,
        trailing_slash_for_folders=config.trailing_slash_for_folders,
    )

    if is_base_entry(info.entry, config.base_entries):
        return OperationResult(
            entry=info.entry,
            status=OperationStatus.SKIPPED,
            detail="This entry is managed automatically and cannot be removed.",
        )

    removed = remove_entry(state.lines, info.entry)
    if removed:
        state.dirty = True
        return OperationResult(entry=removed[0].strip(), status=OperationStatus.REMOVED)

    return OperationResult(
        entry=info.entry,
        status=OperationStatus.SKIPPED,
        detail="Entry not found in .gitignore.",
    )


def _unique_targets(targets: Iterable[Path]) -> list[Path]:
    """Drop repeated targets, keeping first occurrences in order."""
    seen: set[Path] = set()
    unique: list[Path] = []
    for target in targets:
        key = target.absolute()
        if key not in seen:
            seen.add(key)
            unique.append(target)
    return unique


def update_rule_file(
    workspace: Path,
    targets: Iterable[Path],
    config: IgnoreConfig,
    handler: TargetHandler,
    *,
    storage: RuleFileStorage | None = None,
    probe: PathProbe | None = None,
    create: bool = True,
) -> list[OperationResult]:
    """Apply ``handler`` to each target and write the rule file once.

    Failures for one target are recorded as error results and do not
    stop the others. Storage errors propagate unchanged.

    Args:
        workspace: Workspace root containing the rule file.
        targets: Selected paths, absolute or relative to the current directory.
        config: Formatting policies.
        handler: Per-target operation (:func:`add_target` or :func:`remove_target`).
        storage: Rule file storage. Defaults to the local filesystem.
        probe: Path probe. Defaults to probing below ``workspace``.
        create: Seed a missing rule file with the base entries.

    Returns:
        One OperationResult per unique target.
    """
    storage = storage or LocalStorage()
    probe = probe or FilesystemProbe(workspace)
    path = get_rule_file_path(workspace)

    state = load_rule_file(path, storage, config.base_entries, create=create)

    results: list[OperationResult] = []
    for target in _unique_targets(targets):
        try:
            relative = get_relative_path(target, workspace)
            results.append(handler(state, relative, probe, config))
        except RuleFileError as e:
            logger.debug("Operation failed for %s: %s", target, e)
            results.append(
                OperationResult(entry=str(target), status=OperationStatus.ERROR, detail=str(e))
            )

    state.dirty = enforce_base_entries(state.lines, config.base_entries) or state.dirty
    cleaned = cleanup_lines(state.lines)
    if cleaned != state.lines:
        state.lines = cleaned
        state.dirty = True

    if state.dirty:
        storage.write(path, serialize_lines(state.lines))
        logger.info("Wrote %s (%d lines)", path, len(state.lines))

    return results


def add_paths(
    workspace: Path,
    targets: Iterable[Path],
    config: IgnoreConfig,
    *,
    storage: RuleFileStorage | None = None,
    probe: PathProbe | None = None,
) -> list[OperationResult]:
    """Add entries for ``targets``, creating the rule file if needed."""
    return update_rule_file(
        workspace, targets, config, add_target, storage=storage, probe=probe, create=True
    )


def remove_paths(
    workspace: Path,
    targets: Iterable[Path],
    config: IgnoreConfig,
    *,
    storage: RuleFileStorage | None = None,
    probe: PathProbe | None = None,
) -> list[OperationResult]:
    """Remove entries for ``targets``.

    Raises:
        RuleFileNotFoundError: If the workspace has no rule file.
    """
    return update_rule_file(
        workspace, targets, config, remove_target, storage=storage, probe=probe, create=False
    )


def clean_rule_file(
    workspace: Path,
    config: IgnoreConfig,
    options: CleaningOptions | None = None,
    *,
    storage: RuleFileStorage | None = None,
    probe: PathProbe | None = None,
    dry_run: bool = False,
) -> CleanOutcome:
    """Clean the workspace rule file in place.

    The file is only rewritten when the cleaned lines differ from the
    original ones.

    Args:
        workspace: Workspace root containing the rule file.
        config: Settings providing base entries and default policies.
        options: Cleaning policies. Defaults to those derived from ``config``.
        storage: Rule file storage. Defaults to the local filesystem.
        probe: Path probe. Defaults to probing below ``workspace``.
        dry_run: Compute the result without writing.

    Returns:
        CleanOutcome describing the result.

    Raises:
        RuleFileNotFoundError: If the workspace has no rule file.
        RuleFileError: If the file cannot be read or written.
    """
    storage = storage or LocalStorage()
    probe = probe or FilesystemProbe(workspace)
    options = options or config.cleaning_options()
    path = get_rule_file_path(workspace)

    original = parse_lines(storage.read(path))
    result = clean_entries(original, options, config.base_entries, probe)
    changed = result.lines != original

    written = False
    if changed and not dry_run:
        storage.write(path, serialize_lines(result.lines))
        written = True
        logger.info("Cleaned %s", path)

    return CleanOutcome(path=str(path), result=result, changed=changed, written=written)
