"""Pattern compilation for linepick.

This module exports the helpers that compile the match, ignore and
skip-path expressions, and the predicate applied to each scanned line.
"""

from .patterns import (
    KOREAN_PATTERN,
    NON_ASCII_PATTERN,
    compile_ignore_pattern,
    compile_match_pattern,
    compile_skip_paths,
    line_matches,
)

__all__ = [
    "KOREAN_PATTERN",
    "NON_ASCII_PATTERN",
    "compile_ignore_pattern",
    "compile_match_pattern",
    "compile_skip_paths",
    "line_matches",
]
