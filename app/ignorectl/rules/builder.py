"""Canonical rule lines for single target paths.

Turns a file or folder selected by the user into the one rule line that
should represent it, using the same rendering rules as cleaning.

Anything inside a symlinked directory is not separately addressable by
git, so when an ancestor of the target is a symlink the ancestor itself
becomes the entry. The shallowest symlinked ancestor wins.
"""

import logging
import os
from pathlib import Path

from ignorectl.rules.cleaner import render_canonical_line
from ignorectl.rules.lines import escape_path, normalization_key
from ignorectl.rules.models import EntryInfo, PathKind, Variant
from ignorectl.rules.probe import PathProbe, safe_probe
from ignorectl.rules.storage import RULE_FILE_NAME, InvalidTargetError

logger = logging.getLogger(__name__)


def get_relative_path(target: Path, workspace: Path) -> str:
    """Compute the ``/``-separated workspace-relative path of a target.

    Symlinks are not resolved: the path is normalized lexically so a
    link inside the workspace stays inside it.

    Args:
        target: Selected path, absolute or relative to the current directory.
        workspace: Workspace root.

    Returns:
        Relative path such as ``src/app.py``.

    Raises:
        InvalidTargetError: If the target is the workspace root, lies
            outside the workspace, or is the rule file itself.
    """
    absolute_target = os.path.normpath(os.path.abspath(target))
    absolute_root = os.path.normpath(os.path.abspath(workspace))
    relative = os.path.relpath(absolute_target, absolute_root)

    if relative in ("", "."):
        msg = "Select a file or folder inside the workspace, not the workspace root."
        raise InvalidTargetError(msg)
    if relative == ".." or relative.startswith(".." + os.sep) or os.path.isabs(relative):
        msg = f"Selected item is not inside the workspace: {target}"
        raise InvalidTargetError(msg)

    normalized = Path(relative).as_posix()
    if normalized == RULE_FILE_NAME:
        msg = f"Managing the {RULE_FILE_NAME} file itself is not supported."
        raise InvalidTargetError(msg)
    return normalized


def find_symlinked_ancestor(relative_path: str, probe: PathProbe) -> str | None:
    """Return the shallowest ancestor of ``relative_path`` that is a symlink.

    Ancestors are probed from the workspace root downward and the walk
    stops at the first symlink. The target itself is not an ancestor.

    Args:
        relative_path: Workspace-relative target path.
        probe: Probe used to inspect each ancestor.

    Returns:
        Relative path of the symlinked ancestor, or None.
    """
    parts = relative_path.split("/")
    for depth in range(1, len(parts)):
        ancestor = "/".join(parts[:depth])
        if safe_probe(probe, ancestor) == PathKind.SYMLINK:
            return ancestor
    return None


def format_entry(
    relative_path: str,
    is_directory: bool,
    *,
    add_with_leading_slash: bool = True,
    trailing_slash_for_folders: bool = True,
) -> str:
    """Render a workspace-relative path as a rule line.

    Args:
        relative_path: Unescaped workspace-relative path.
        is_directory: Render as a folder.
        add_with_leading_slash: Anchor the entry to the workspace root.
        trailing_slash_for_folders: Append ``/`` to folders.

    Returns:
        The rule line.
    """
    key = normalization_key(escape_path(relative_path))
    variant = Variant(trailing_slash=False, anchored=add_with_leading_slash)
    return render_canonical_line(key, is_directory, variant, trailing_slash_for_folders)


def build_entry_for_add(
    relative_path: str,
    probe: PathProbe,
    *,
    add_with_leading_slash: bool = True,
    trailing_slash_for_folders: bool = True,
) -> EntryInfo:
    """Build the rule line for a path being added.

    Args:
        relative_path: Workspace-relative target path.
        probe: Probe for the target and its ancestors.
        add_with_leading_slash: Anchoring policy.
        trailing_slash_for_folders: Trailing-slash policy.

    Returns:
        EntryInfo for the target, or for its symlinked ancestor.

    Raises:
        InvalidTargetError: If the target does not exist.
    """
    kind = safe_probe(probe, relative_path)
    if kind == PathKind.NOT_FOUND:
        msg = f"Path does not exist: {relative_path}"
        raise InvalidTargetError(msg)

    entry_path = relative_path
    is_directory = kind.is_directory
    substituted_from: str | None = None

    ancestor = find_symlinked_ancestor(relative_path, probe)
    if ancestor is not None:
        logger.debug("Using symlinked ancestor %s for %s", ancestor, relative_path)
        entry_path = ancestor
        is_directory = False
        substituted_from = relative_path

    entry = format_entry(
        entry_path,
        is_directory,
        add_with_leading_slash=add_with_leading_slash,
        trailing_slash_for_folders=trailing_slash_for_folders,
    )
    return EntryInfo(
        entry=entry,
        relative_path=entry_path,
        is_directory=is_directory,
        substituted_from=substituted_from,
    )


def build_entry_for_remove(
    relative_path: str,
    probe: PathProbe,
    *,
    add_with_leading_slash: bool = True,
    trailing_slash_for_folders: bool = True,
) -> EntryInfo:
    """Build the rule line for a path being removed.

    The target may no longer exist; it is then rendered as a file.
    Removal matches on the entry's key, so every anchoring and
    trailing-slash variant of the line is found.
    """
    kind = safe_probe(probe, relative_path)
    entry = format_entry(
        relative_path,
        kind.is_directory,
        add_with_leading_slash=add_with_leading_slash,
        trailing_slash_for_folders=trailing_slash_for_folders,
    )
    return EntryInfo(entry=entry, relative_path=relative_path, is_directory=kind.is_directory)
