"""Line-by-line file scanning.

This module provides the LineScanner class for reading one file sequentially
and recording every line that matches a pattern, skipping lines selected by
an optional ignore pattern.

Lines are read in bounded chunks and reassembled, so a line longer than the
read buffer is still treated as a single logical line.

Example:
    >>> from linepick.scanning import LineScanner
    >>> from linepick.models import ScanTarget
    >>> scanner = LineScanner()
    >>> result = scanner.scan(ScanTarget("main.go", match_pattern))
    >>> for number, line in sorted(result.matched_lines.items()):
    ...     print(number, line)
"""

import logging
from typing import BinaryIO, Iterator

from linepick.matching import line_matches
from linepick.models import MatchSet, ScanResult, ScanTarget

# Buffer size for chunked line reading (8KB)
CHUNK_SIZE = 8192

logger = logging.getLogger(__name__)


def iter_lines(handle: BinaryIO, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """Yield logical lines from a binary file without their terminators.

    Each ``readline`` call returns at most ``chunk_size`` bytes. Pieces are
    accumulated until a newline or end of file, so line length is unbounded.
    A trailing ``\\r\\n`` or ``\\n`` is stripped; a final line without a
    terminator is still yielded.

    Args:
        handle: File object opened in binary mode.
        chunk_size: Maximum bytes requested per read.

    Yields:
        Raw line bytes.

    Raises:
        OSError: Propagated from the underlying read.
    """
    pieces = []
    while True:
        chunk = handle.readline(chunk_size)
        if not chunk:
            break
        if not chunk.endswith(b"\n"):
            # Line continues past the buffer, keep accumulating
            pieces.append(chunk)
            continue
        pieces.append(chunk)
        line = b"".join(pieces)
        pieces = []
        if line.endswith(b"\r\n"):
            yield line[:-2]
        else:
            yield line[:-1]

    if pieces:
        yield b"".join(pieces)


class LineScanner:
    """Scans a single file for lines matching a pattern.

    The scanner is stateless between calls and safe to share across threads;
    every call opens and owns its own file handle.

    Scanning fails atomically: an error while opening or reading the file
    yields a ScanResult carrying that error and no matched lines, even if
    some lines had already matched.

    Line numbering is 1-based and counts every physical line, including
    lines skipped by the ignore pattern, so reported numbers always agree
    with the file on disk.

    Attributes:
        chunk_size: Maximum bytes requested per read.

    Example:
        >>> scanner = LineScanner()
        >>> result = scanner.scan(target)
        >>> if result.failed:
        ...     print(f"{result.path}: {result.error_message}")
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        """Initialize the LineScanner.

        Args:
            chunk_size: Maximum bytes requested per read. Defaults to 8KB.

        Raises:
            ValueError: If chunk_size is not positive.
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def scan(self, target: ScanTarget) -> ScanResult:
        """Scan the target file and collect matched lines.

        Args:
            target: Path and compiled patterns to apply.

        Returns:
            ScanResult with the matched lines, or with the error that stopped
            the scan. A file with no matching lines is still a success.
        """
        try:
            handle = open(target.path, "rb")
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot open {target.path}: {e}")
            return ScanResult(path=target.path, error=e)

        with handle:
            try:
                matched_lines = self._scan_lines(handle, target)
            except OSError as e:
                logger.debug(f"Read error in {target.path}: {e}")
                return ScanResult(path=target.path, error=e)

        logger.debug(f"Scanned {target.path}: {len(matched_lines)} matched line(s)")
        return ScanResult(path=target.path, matched_lines=matched_lines)

    def _scan_lines(self, handle: BinaryIO, target: ScanTarget) -> MatchSet:
        """Apply the ignore and match patterns to every line of an open file.

        Args:
            handle: Binary file object positioned at the start.
            target: Patterns to apply.

        Returns:
            Mapping of line number to raw line bytes.
        """
        matched_lines: MatchSet = {}
        line_number = 0

        for line in iter_lines(handle, self.chunk_size):
            line_number += 1
            if target.ignore_pattern is not None and line_matches(target.ignore_pattern, line):
                continue
            if line_matches(target.match_pattern, line):
                matched_lines[line_number] = line

        return matched_lines
