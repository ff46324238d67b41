"""Shared Rich display functions for rule file results.

Provides the results table and summary messages used by the add,
remove and clean commands.
"""

from rich.markup import escape
from rich.table import Table

from ignorectl.rules.models import CleaningResult, OperationResult, OperationStatus
from ignorectl.utils.formatting import (
    console,
    err_console,
    join_summary,
    pluralize,
    print_success,
)

_STATUS_STYLES: dict[OperationStatus, str] = {
    OperationStatus.ADDED: "added",
    OperationStatus.REMOVED: "removed",
    OperationStatus.SKIPPED: "skipped",
    OperationStatus.ERROR: "error",
}


def create_results_table(results: list[OperationResult], title: str) -> Table:
    """Create a Rich table displaying per-target results.

    Args:
        results: Results to display.
        title: Table title.

    Returns:
        Rich Table with Status, Entry and Details columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Entry", no_wrap=True)
    table.add_column("Details")

    for result in results:
        style = _STATUS_STYLES[result.status]
        table.add_row(
            f"[{style}]{result.status.value}[/{style}]",
            f"[entry]{escape(result.entry)}[/entry]",
            f"[muted]{escape(result.detail or '')}[/muted]",
        )

    return table


def format_operation_summary(results: list[OperationResult], status: OperationStatus) -> str:
    """Build the one-line summary for an add or remove run.

    Example: ``Added 2 entries. 1 skipped.``
    """
    success_count = sum(1 for r in results if r.status == status)
    skipped_count = sum(1 for r in results if r.status == OperationStatus.SKIPPED)
    error_count = sum(1 for r in results if r.failed)

    parts = [f"{status.value.capitalize()} {pluralize(success_count, 'entry', 'entries')}."]
    if skipped_count:
        parts.append(f"{skipped_count} skipped.")
    if error_count:
        parts.append(f"{error_count} failed.")
    return " ".join(parts)


def print_operation_summary(
    results: list[OperationResult],
    status: OperationStatus,
    *,
    verbose: bool = False,
) -> None:
    """Print the outcome of an add or remove run.

    Errors are always listed individually. Skipped entries are listed
    when ``verbose`` is set.
    """
    if verbose:
        console.print(create_results_table(results, title="Results"))

    message = format_operation_summary(results, status)
    failures = [r for r in results if r.failed]
    if not failures:
        print_success(message)
        return

    err_console.print(f"[error]{message}[/]")
    for result in failures:
        err_console.print(
            f"[error]Failed to {'add' if status == OperationStatus.ADDED else 'remove'}"
            f"[/] {escape(result.entry)}: {escape(result.detail or 'Unknown error')}"
        )


def format_cleaning_summary(result: CleaningResult) -> str:
    """Build the summary message for a clean run.

    Example: ``Cleaned .gitignore: 2 duplicates and sorted alphabetically.``
    """
    updates: list[str] = []
    if result.duplicates_removed:
        updates.append(pluralize(result.duplicates_removed, "duplicate"))
    if result.empty_lines_removed:
        updates.append(pluralize(result.empty_lines_removed, "empty line"))
    if result.comments_removed:
        updates.append(pluralize(result.comments_removed, "comment"))
    if result.sorted_applied:
        updates.append("sorted alphabetically")
    if result.base_entries_added:
        updates.append("added base entries")

    detail = f": {join_summary(updates)}" if updates else ""
    return f"Cleaned .gitignore{detail}."
