"""Regular expression helpers for line and path selection.

This module compiles the three patterns a scan run needs:

    1. Match pattern - selects the lines of interest (required)
    2. Ignore pattern - excludes lines before they are tested (optional)
    3. Skip paths - excludes files and directories from discovery (optional)

All three are compiled once, before any file is dispatched. A pattern that
fails to compile is a configuration error and raises ValueError.

Example:
    >>> from linepick.matching import compile_match_pattern, line_matches
    >>> pattern = compile_match_pattern(NON_ASCII_PATTERN)
    >>> line_matches(pattern, "αβγ".encode("utf-8"))
    True
"""

import re
from typing import Optional

from linepick.models import AnyPattern

# Hangul Jamo, Compatibility Jamo, Jamo Extended-A/B and Syllables
KOREAN_PATTERN = "[\u1100-\u11ff\u3130-\u318f\ua960-\ua97f\uac00-\ud7af\ud7b0-\ud7ff]"

# Any character outside 7-bit ASCII
NON_ASCII_PATTERN = r"[^\x00-\x7F]"

# Encoding used to turn raw line bytes into text for str patterns
LINE_ENCODING = "utf-8"


def _compile(pattern: str, kind: str) -> AnyPattern:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid {kind} pattern {pattern!r}: {e}") from e


def compile_match_pattern(pattern: str) -> AnyPattern:
    """Compile the pattern selecting lines of interest.

    Args:
        pattern: Regular expression source. Must not be empty.

    Returns:
        The compiled pattern.

    Raises:
        ValueError: If the pattern is empty or does not compile.
    """
    if not pattern:
        raise ValueError("Match pattern must not be empty")
    return _compile(pattern, "match")


def compile_ignore_pattern(pattern: Optional[str]) -> Optional[AnyPattern]:
    """Compile the pattern excluding lines, or return None when it is empty."""
    if not pattern:
        return None
    return _compile(pattern, "ignore")


def compile_skip_paths(value: Optional[str], separator: str = ",") -> Optional[AnyPattern]:
    """Join a separated list of path expressions into one alternation.

    Each item is a regular expression on its own; blank items are dropped.

    Args:
        value: Separated list such as ``"vendor/,_test\\.go$"``.
        separator: Item separator. Defaults to a comma.

    Returns:
        A pattern matching any of the items, or None if the list is empty.

    Raises:
        ValueError: If the joined expression does not compile.

    Example:
        >>> skip = compile_skip_paths("vendor/, node_modules/")
        >>> skip.pattern
        'vendor/|node_modules/'
    """
    if not value:
        return None
    items = [item.strip() for item in value.split(separator)]
    items = [item for item in items if item]
    if not items:
        return None
    return _compile("|".join(items), "skip path")


def line_matches(pattern: AnyPattern, line: bytes) -> bool:
    """Test raw line bytes against a compiled pattern.

    Bytes patterns see the raw bytes. Str patterns see the line decoded
    with ``surrogateescape`` so invalid sequences never raise.
    """
    if isinstance(pattern.pattern, bytes):
        return pattern.search(line) is not None
    text = line.decode(LINE_ENCODING, errors="surrogateescape")
    return pattern.search(text) is not None
