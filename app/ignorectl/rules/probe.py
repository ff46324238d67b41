"""Path type probing.

A probe answers one question about a workspace-relative path: is it a
real directory, a symlink, a regular file, or missing? Symbolic links
are never reported as directories, matching how git treats them.

Probe failures never abort an operation. They degrade to
``PathKind.UNKNOWN`` and the caller keeps the user's original syntax.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ignorectl.rules.lines import unescape_path
from ignorectl.rules.models import PathKind

logger = logging.getLogger(__name__)

# Upper bound on concurrent probes for one cleaning pass
_MAX_PROBE_WORKERS = 16


class PathProbe(ABC):
    """Abstract base class for path type probes.

    Example:
        >>> probe = FilesystemProbe(Path("/srv/project"))
        >>> probe.probe("node_modules")
        <PathKind.DIRECTORY: 'directory'>
    """

    @abstractmethod
    def probe(self, relative_path: str) -> PathKind:
        """Report the type of a workspace-relative path.

        Must not raise for a missing path; return ``PathKind.NOT_FOUND``.

        Args:
            relative_path: Path relative to the workspace root, ``/`` separated.

        Returns:
            PathKind classification.
        """


class FilesystemProbe(PathProbe):
    """Probes paths on the local filesystem below a workspace root.

    Args:
        root: Workspace root directory that relative paths are resolved against.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Workspace root directory."""
        return self._root

    def probe(self, relative_path: str) -> PathKind:
        path = self._root / relative_path

        # is_symlink() must come first: is_dir() follows links
        if path.is_symlink():
            return PathKind.SYMLINK
        if path.is_dir():
            return PathKind.DIRECTORY
        if path.exists():
            return PathKind.FILE
        return PathKind.NOT_FOUND


def safe_probe(probe: PathProbe, relative_path: str) -> PathKind:
    """Run a probe, mapping any failure to ``PathKind.UNKNOWN``."""
    try:
        return probe.probe(relative_path)
    except (OSError, ValueError) as e:
        logger.debug("Cannot determine type of %s: %s", relative_path, e)
        return PathKind.UNKNOWN


def resolve_path_kinds(keys: Iterable[str], probe: PathProbe) -> dict[str, PathKind]:
    """Probe every key once, concurrently, and wait for all results.

    Keys are rule-file text, so gitignore escapes are removed before
    the path is probed.

    Args:
        keys: Normalization keys of literal entries.
        probe: Probe to query.

    Returns:
        Mapping of each key to its PathKind.
    """
    unique = list(dict.fromkeys(keys))
    if not unique:
        return {}

    workers = min(_MAX_PROBE_WORKERS, len(unique))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        kinds = list(pool.map(lambda key: safe_probe(probe, unescape_path(key)), unique))

    resolved = dict(zip(unique, kinds, strict=True))
    logger.debug("Resolved %d path type(s)", len(resolved))
    return resolved
