"""Rule file text handling.

Parses raw file content into lines and back, classifies each line,
and computes the canonical key used to detect duplicate literal entries.

Parsing normalizes ``\\r\\n`` to ``\\n`` and drops the empty segment
produced by a final line terminator. Serialization always ends with
exactly one ``\\n`` unless there are no lines at all.
"""

import re

from ignorectl.rules.models import LineKind, ParsedLine

# Characters that give a line glob semantics
_PATTERN_CHARS = frozenset("*?[]")

# Characters escaped when a path is written as a rule line
_ESCAPE_RE = re.compile(r"([ #!*?\[\]])")
_UNESCAPE_RE = re.compile(r"\\([ #!*?\[\]])")

# A backslash-escaped character, which never has glob meaning
_ESCAPED_CHAR_RE = re.compile(r"\\.")


def parse_lines(content: str) -> list[str]:
    """Split raw content into lines.

    Args:
        content: Raw rule file content.

    Returns:
        Lines without terminators. Empty content yields an empty list.
    """
    if not content:
        return []
    segments = content.replace("\r\n", "\n").split("\n")
    if segments and segments[-1] == "":
        segments.pop()
    return segments


def serialize_lines(lines: list[str]) -> str:
    """Join lines into file content with a single trailing newline."""
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def is_pattern_line(line: str) -> bool:
    """Check whether a line carries glob or negation semantics.

    Escaped glob characters such as ``\\[`` are literal.
    """
    if line.startswith("!"):
        return True
    bare = _ESCAPED_CHAR_RE.sub("", line)
    return any(char in _PATTERN_CHARS for char in bare)


def classify_line(line: str) -> LineKind:
    """Classify a trimmed line.

    Checked in priority order: blank, comment, pattern, literal.
    """
    if line == "":
        return LineKind.BLANK
    if line.startswith("#"):
        return LineKind.COMMENT
    if is_pattern_line(line):
        return LineKind.PATTERN
    return LineKind.LITERAL


def parse_rule_lines(lines: list[str]) -> list[ParsedLine]:
    """Trim and classify every line."""
    parsed: list[ParsedLine] = []
    for line in lines:
        text = line.strip()
        parsed.append(ParsedLine(kind=classify_line(text), text=text))
    return parsed


def normalization_key(line: str) -> str:
    """Return the anchor and slash insensitive identity of a literal entry.

    ``node_modules``, ``/node_modules``, ``node_modules/`` and
    ``/node_modules/`` all map to ``node_modules``.
    """
    return line.strip().lstrip("/").rstrip("/")


def entry_identity(line: str) -> tuple[LineKind, str] | None:
    """Return what makes two rule lines the same entry.

    Literal entries compare by normalization key, pattern lines by exact
    text. Blank and comment lines have no identity.
    """
    text = line.strip()
    kind = classify_line(text)
    if kind == LineKind.LITERAL:
        return (kind, normalization_key(text))
    if kind == LineKind.PATTERN:
        return (kind, text)
    return None


def escape_path(value: str) -> str:
    """Escape characters that are special at the start of or inside a rule."""
    return _ESCAPE_RE.sub(r"\\\1", value)


def unescape_path(value: str) -> str:
    """Reverse :func:`escape_path` so the value can be looked up on disk."""
    return _UNESCAPE_RE.sub(r"\1", value)


def cleanup_lines(
    lines: list[str],
    *,
    collapse_empty: bool = True,
    trim_trailing: bool = True,
) -> list[str]:
    """Collapse runs of blank lines and drop trailing blank lines.

    Args:
        lines: Lines to clean up.
        collapse_empty: Reduce consecutive blank lines to a single one.
        trim_trailing: Remove blank lines at the end.

    Returns:
        A new list; ``lines`` is not modified.
    """
    cleaned: list[str] = []
    for line in lines:
        if collapse_empty and line.strip() == "" and cleaned and cleaned[-1].strip() == "":
            continue
        cleaned.append(line)

    if trim_trailing:
        while cleaned and cleaned[-1].strip() == "":
            cleaned.pop()

    return cleaned
