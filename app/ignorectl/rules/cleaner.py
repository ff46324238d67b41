"""Rule file cleaning engine.

Cleaning runs in a fixed sequence:

1. Trim every line, optionally dropping blank and comment lines.
2. Accumulate per-key metadata for literal entries and probe every key
   once (all probes finish before any line is rendered).
3. Walk lines in order, keeping the first occurrence of each key and
   re-rendering it in canonical form. Pattern lines are deduplicated by
   exact text only.
4. Prepend missing base entries.
5. Optionally sort.
6. When blank lines are being removed, collapse any that remain.
"""

import logging

from ignorectl.rules.lines import (
    cleanup_lines,
    entry_identity,
    is_pattern_line,
    normalization_key,
    parse_rule_lines,
)
from ignorectl.rules.models import (
    CleaningOptions,
    CleaningResult,
    EntryMeta,
    LineKind,
    ParsedLine,
    Variant,
)
from ignorectl.rules.probe import PathProbe, resolve_path_kinds

logger = logging.getLogger(__name__)


def render_canonical_line(
    key: str,
    is_folder: bool,
    variant: Variant,
    trailing_slash_for_folders: bool,
) -> str:
    """Render the canonical rule line for a key.

    Args:
        key: Normalization key of the entry.
        is_folder: Render as a folder (real directory or folder syntax).
        variant: Style of the first occurrence; drives anchoring.
        trailing_slash_for_folders: Policy for appending ``/`` to folders.

    Returns:
        The rule line.
    """
    if is_pattern_line(key):
        return key

    core = key.rstrip("/")

    if is_folder:
        base = f"/{core}" if variant.anchored else core
        if trailing_slash_for_folders or variant.trailing_slash:
            return base if base.endswith("/") else f"{base}/"
        return base.rstrip("/")

    # Root-level dotfiles are conventionally written unanchored
    if "/" not in core and core.startswith("."):
        return core

    base = f"/{core}" if variant.anchored else core
    return base.rstrip("/")


def collect_entry_meta(lines: list[ParsedLine]) -> dict[str, EntryMeta]:
    """Build the per-key accumulator for all literal lines."""
    metas: dict[str, EntryMeta] = {}
    for line in lines:
        if line.kind != LineKind.LITERAL:
            continue
        meta = metas.setdefault(normalization_key(line.text), EntryMeta())
        if line.text.endswith("/"):
            meta.saw_folder_syntax = True
    return metas


def deduplicate_entries(
    lines: list[ParsedLine],
    metas: dict[str, EntryMeta],
    trailing_slash_for_folders: bool,
) -> tuple[list[str], int]:
    """Keep the first occurrence of each entry, rendered canonically.

    A later literal line that differs from the first occurrence only by
    its trailing slash, while the trailing-slash policy is off, is still
    dropped but is not counted as a duplicate: the summary treats it as
    a formatting difference.

    Args:
        lines: Classified lines in original order.
        metas: Per-key metadata from :func:`collect_entry_meta`.
        trailing_slash_for_folders: Trailing-slash policy.

    Returns:
        Tuple of (output lines, duplicates removed).
    """
    output: list[str] = []
    seen_patterns: set[str] = set()
    first_variants: dict[str, Variant] = {}
    duplicates = 0

    for line in lines:
        if line.kind == LineKind.BLANK:
            output.append("")
            continue
        if line.kind == LineKind.COMMENT:
            output.append(line.text)
            continue
        if line.kind == LineKind.PATTERN:
            if line.text in seen_patterns:
                duplicates += 1
                continue
            seen_patterns.add(line.text)
            output.append(line.text)
            continue

        key = normalization_key(line.text)
        variant = Variant.of(line.text)
        first = first_variants.get(key)
        if first is not None:
            slash_only = first.trailing_slash != variant.trailing_slash
            if not (slash_only and not trailing_slash_for_folders):
                duplicates += 1
            continue

        first_variants[key] = variant
        meta = metas.get(key) or EntryMeta(saw_folder_syntax=variant.trailing_slash)
        output.append(
            render_canonical_line(key, meta.is_folder, variant, trailing_slash_for_folders)
        )

    return output, duplicates


def enforce_base_entries(lines: list[str], base_entries: list[str]) -> bool:
    """Prepend any missing base entry to ``lines`` in place.

    Entries are checked in reverse configured order so that the final
    prefix keeps the configured order. Literal base entries match any
    anchoring or trailing-slash variant; pattern base entries need an
    identical line.

    Args:
        lines: Rule lines, modified in place.
        base_entries: Configured base entries. Empty disables enforcement.

    Returns:
        True if at least one entry was added.
    """
    added = False
    for entry in reversed(base_entries):
        if not has_entry(lines, entry):
            lines.insert(0, entry)
            added = True
    return added


def has_entry(lines: list[str], entry: str) -> bool:
    """Check whether ``lines`` already contain ``entry`` in any variant."""
    identity = entry_identity(entry)
    if identity is None:
        return any(line.strip() == entry.strip() for line in lines)
    return any(entry_identity(line) == identity for line in lines)


def _sort_key(line: str) -> tuple[str, str]:
    # Case-insensitive first; on ties lowercase sorts before uppercase
    return (line.casefold(), line.swapcase())


def sort_entries(lines: list[str]) -> tuple[list[str], bool]:
    """Sort lines case-insensitively.

    Lines that differ only in case put lowercase first, so ``build``
    sorts before ``Build``. No locale is consulted: punctuation and
    symbols keep code point order, so ``#c`` sorts before ``.a``.

    Returns:
        Tuple of (sorted lines, whether the order changed).
    """
    ordered = sorted(lines, key=_sort_key)
    return ordered, ordered != lines


def clean_entries(
    lines: list[str],
    options: CleaningOptions,
    base_entries: list[str],
    probe: PathProbe | None = None,
) -> CleaningResult:
    """Normalize, deduplicate and optionally sort rule lines.

    Args:
        lines: Raw lines as parsed from the rule file.
        options: Cleaning policies.
        base_entries: Entries that must always be present.
        probe: Path probe for directory detection. Without one, every
            entry keeps the folder syntax the user wrote.

    Returns:
        CleaningResult with the cleaned lines and change counters.
    """
    parsed = parse_rule_lines(lines)
    empty_count = sum(1 for line in parsed if line.kind == LineKind.BLANK)
    comment_count = sum(1 for line in parsed if line.kind == LineKind.COMMENT)

    kept = [
        line
        for line in parsed
        if not (options.remove_empty_lines and line.kind == LineKind.BLANK)
        and not (options.remove_comments and line.kind == LineKind.COMMENT)
    ]

    metas = collect_entry_meta(kept)
    if probe is not None:
        probe_keys = [key for key in metas if key]
        for key, kind in resolve_path_kinds(probe_keys, probe).items():
            metas[key].status = kind

    normalized, duplicates = deduplicate_entries(
        kept, metas, options.trailing_slash_for_folders
    )

    final = list(normalized)
    base_added = enforce_base_entries(final, base_entries)

    sorted_applied = False
    if options.sort:
        final, sorted_applied = sort_entries(final)

    if options.remove_empty_lines:
        final = cleanup_lines(final)

    result = CleaningResult(
        lines=final,
        duplicates_removed=duplicates,
        empty_lines_removed=empty_count if options.remove_empty_lines else 0,
        comments_removed=comment_count if options.remove_comments else 0,
        sorted_applied=sorted_applied,
        base_entries_added=base_added,
    )
    logger.debug(
        "Cleaned %d line(s) into %d: %d duplicate(s) removed",
        len(lines),
        len(final),
        duplicates,
    )
    return result
