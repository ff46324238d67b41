"""Unit tests for path type probing."""

from pathlib import Path

from ignorectl.rules.models import PathKind
from ignorectl.rules.probe import FilesystemProbe, PathProbe, resolve_path_kinds, safe_probe


class _BrokenProbe(PathProbe):
    def probe(self, relative_path: str) -> PathKind:
        raise OSError("permission denied")


class TestFilesystemProbe:
    """Tests for FilesystemProbe."""

    def test_directory(self, workspace: Path) -> None:
        """Real directories are reported as directories."""
        (workspace / "build").mkdir()
        assert FilesystemProbe(workspace).probe("build") == PathKind.DIRECTORY

    def test_file(self, workspace: Path) -> None:
        """Regular files are reported as files."""
        (workspace / "notes.txt").write_text("x")
        assert FilesystemProbe(workspace).probe("notes.txt") == PathKind.FILE

    def test_nested_path(self, workspace: Path) -> None:
        """Relative paths with separators are resolved below the root."""
        (workspace / "src" / "pkg").mkdir(parents=True)
        assert FilesystemProbe(workspace).probe("src/pkg") == PathKind.DIRECTORY

    def test_missing(self, workspace: Path) -> None:
        """Missing paths are reported as not found."""
        assert FilesystemProbe(workspace).probe("ghost") == PathKind.NOT_FOUND

    def test_symlink_to_directory(self, workspace: Path, make_symlink) -> None:
        """Symlinks to directories are never reported as directories."""
        (workspace / "real").mkdir()
        make_symlink(workspace / "link", workspace / "real")

        assert FilesystemProbe(workspace).probe("link") == PathKind.SYMLINK

    def test_dangling_symlink(self, workspace: Path, make_symlink) -> None:
        """Broken symlinks are still symlinks."""
        make_symlink(workspace / "dangling", workspace / "nowhere")

        assert FilesystemProbe(workspace).probe("dangling") == PathKind.SYMLINK

    def test_root_property(self, workspace: Path) -> None:
        """The workspace root is exposed."""
        assert FilesystemProbe(workspace).root == workspace


class TestSafeProbe:
    """Tests for safe_probe."""

    def test_failure_is_unknown(self) -> None:
        """Probe errors degrade to UNKNOWN."""
        assert safe_probe(_BrokenProbe(), "anything") == PathKind.UNKNOWN

    def test_passes_through_result(self, fake_probe) -> None:
        """Successful results are returned unchanged."""
        assert safe_probe(fake_probe({"a": PathKind.FILE}), "a") == PathKind.FILE


class TestResolvePathKinds:
    """Tests for resolve_path_kinds."""

    def test_empty(self, fake_probe) -> None:
        """No keys, no probes."""
        probe = fake_probe()
        assert resolve_path_kinds([], probe) == {}
        assert probe.calls == []

    def test_each_key_once(self, fake_probe) -> None:
        """Repeated keys are probed once."""
        probe = fake_probe({"a": PathKind.DIRECTORY})

        kinds = resolve_path_kinds(["a", "b", "a"], probe)

        assert kinds == {"a": PathKind.DIRECTORY, "b": PathKind.NOT_FOUND}
        assert sorted(probe.calls) == ["a", "b"]

    def test_keys_unescaped_before_probing(self, fake_probe) -> None:
        """Results are keyed by rule text but probed by real path."""
        probe = fake_probe({"my dir": PathKind.DIRECTORY})

        kinds = resolve_path_kinds([r"my\ dir"], probe)

        assert kinds == {r"my\ dir": PathKind.DIRECTORY}

    def test_failures_do_not_abort(self) -> None:
        """A failing probe yields UNKNOWN for every key."""
        kinds = resolve_path_kinds(["a", "b"], _BrokenProbe())

        assert kinds == {"a": PathKind.UNKNOWN, "b": PathKind.UNKNOWN}

    def test_many_keys(self, workspace: Path) -> None:
        """Large batches resolve against the real filesystem."""
        for i in range(40):
            (workspace / f"dir{i}").mkdir()

        kinds = resolve_path_kinds([f"dir{i}" for i in range(40)], FilesystemProbe(workspace))

        assert len(kinds) == 40
        assert set(kinds.values()) == {PathKind.DIRECTORY}
