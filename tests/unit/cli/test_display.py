"""Unit tests for display helpers."""

from ignorectl.cli.display import (
    create_results_table,
    format_cleaning_summary,
    format_operation_summary,
)
from ignorectl.rules.models import CleaningResult, OperationResult, OperationStatus
from ignorectl.utils.formatting import join_summary, pluralize


class TestFormatOperationSummary:
    """Tests for format_operation_summary."""

    def test_added_only(self) -> None:
        """Only the success count is shown when nothing else happened."""
        results = [OperationResult("/a", OperationStatus.ADDED)]
        assert format_operation_summary(results, OperationStatus.ADDED) == "Added 1 entry."

    def test_mixed(self) -> None:
        """Skipped and failed counts follow the success count."""
        results = [
            OperationResult("/a", OperationStatus.ADDED),
            OperationResult("/b", OperationStatus.ADDED),
            OperationResult("/c", OperationStatus.SKIPPED, "exists"),
            OperationResult("d", OperationStatus.ERROR, "missing"),
        ]

        summary = format_operation_summary(results, OperationStatus.ADDED)

        assert summary == "Added 2 entries. 1 skipped. 1 failed."

    def test_removed(self) -> None:
        """The verb follows the operation."""
        results = [OperationResult("/a", OperationStatus.SKIPPED)]
        summary = format_operation_summary(results, OperationStatus.REMOVED)
        assert summary == "Removed 0 entries. 1 skipped."


class TestFormatCleaningSummary:
    """Tests for format_cleaning_summary."""

    def test_no_updates(self) -> None:
        """Nothing to report gives a bare message."""
        assert format_cleaning_summary(CleaningResult(lines=[])) == "Cleaned .gitignore."

    def test_single_update(self) -> None:
        """A single change is listed alone."""
        result = CleaningResult(lines=[], duplicates_removed=1)
        assert format_cleaning_summary(result) == "Cleaned .gitignore: 1 duplicate."

    def test_two_updates(self) -> None:
        """Two changes are joined with 'and'."""
        result = CleaningResult(lines=[], duplicates_removed=2, sorted_applied=True)
        assert (
            format_cleaning_summary(result)
            == "Cleaned .gitignore: 2 duplicates and sorted alphabetically."
        )

    def test_many_updates(self) -> None:
        """Longer lists use commas."""
        result = CleaningResult(
            lines=[], duplicates_removed=2, empty_lines_removed=1, comments_removed=3
        )
        assert (
            format_cleaning_summary(result)
            == "Cleaned .gitignore: 2 duplicates, 1 empty line, and 3 comments."
        )


class TestHelpers:
    """Tests for pluralize, join_summary and the results table."""

    def test_pluralize(self) -> None:
        """Counts pick the matching noun form."""
        assert pluralize(1, "entry", "entries") == "1 entry"
        assert pluralize(0, "entry", "entries") == "0 entries"
        assert pluralize(2, "comment") == "2 comments"

    def test_join_summary(self) -> None:
        """Parts are joined in natural language."""
        assert join_summary([]) == ""
        assert join_summary(["a", "b", "c"]) == "a, b, and c"

    def test_results_table(self) -> None:
        """One row is created per result."""
        results = [
            OperationResult("/a", OperationStatus.ADDED),
            OperationResult("[b]", OperationStatus.SKIPPED, "exists"),
        ]

        table = create_results_table(results, title="Results")

        assert table.row_count == 2
        assert table.title == "Results"
