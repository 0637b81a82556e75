"""
Core data models for the line pick audit tool.

This module contains the following dataclasses:
- ScanTarget: A file path plus the patterns used to scan it
- ScanResult: The outcome of scanning one file
- ReportEntry: A successfully scanned file with at least one matched line
- ScanCounters: Run-wide scanned / error / matched-file counters
- ScanConfig: Options collected from the command line
- ScanSummary: Summary of the scan workflow results
"""

from dataclasses import dataclass, field
from re import Pattern
from typing import Dict, List, Optional, Tuple, Union

# Line number (1-based) -> raw line bytes, without the line terminator
MatchSet = Dict[int, bytes]

AnyPattern = Union[Pattern[str], Pattern[bytes]]


@dataclass(frozen=True)
class ScanTarget:
    """A single file to scan together with its compiled patterns."""
    path: str                              # File path as dispatched
    match_pattern: AnyPattern              # Lines of interest
    ignore_pattern: Optional[AnyPattern] = None  # Lines excluded before matching


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scanning one file.

    Exactly one of ``matched_lines`` or ``error`` is meaningful. A result
    carrying an error always has an empty ``matched_lines``.
    """
    path: str
    matched_lines: MatchSet = field(default_factory=dict)
    error: Optional[Exception] = None      # OSError, or ValueError for an unusable path

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def has_matches(self) -> bool:
        return self.error is None and len(self.matched_lines) > 0

    @property
    def error_message(self) -> str:
        if self.error is None:
            return ""
        strerror = getattr(self.error, "strerror", None)
        if strerror:
            return strerror
        return str(self.error)


@dataclass(frozen=True)
class ReportEntry:
    """A file known to have at least one matched line, ordered by path."""
    path: str
    matched_lines: MatchSet

    @classmethod
    def from_result(cls, result: ScanResult) -> "ReportEntry":
        if not result.has_matches:
            raise ValueError(f"Result for {result.path} has no reportable matches")
        return cls(path=result.path, matched_lines=result.matched_lines)

    def sorted_lines(self) -> List[Tuple[int, bytes]]:
        """Return (line_number, line_bytes) pairs in ascending line order."""
        return sorted(self.matched_lines.items())

    def __lt__(self, other: "ReportEntry") -> bool:
        return self.path < other.path


@dataclass
class ScanCounters:
    """Counters incremented as results arrive, read after all batches finish."""
    scanned: int = 0                  # Results received
    errors: int = 0                   # Results carrying an error
    matched_files: int = 0            # Results inserted into the report

    @property
    def succeeded(self) -> int:
        return self.scanned - self.errors


@dataclass
class ScanConfig:
    """Options for one scan run, as collected by the CLI."""
    root: str                                  # Directory to search
    match: str                                 # Match regular expression
    ignore: str = ""                           # Ignore regular expression ("" disables)
    extension: str = ""                        # File extension without dot ("" = any)
    skip_paths: str = ""                       # Comma-separated path regexes
    batch_size: Optional[int] = None           # None = derive from descriptor limit
    workers: Optional[int] = None              # Thread pool size (None = executor default)
    interactive: bool = False                  # Ask before scanning
    verbose: bool = False                      # Per-file notifications
    error_only: bool = False                   # Print errors and counters only


@dataclass
class ScanSummary:
    """Summary of the scan workflow returned by ScanOrchestrator."""
    files_found: int = 0                       # Candidate files dispatched
    counters: ScanCounters = field(default_factory=ScanCounters)
    entries: List[ReportEntry] = field(default_factory=list)  # Sorted by path
    errors: List[str] = field(default_factory=list)  # "path: message" per failed file
    batches: int = 0                           # Number of batches processed
    batch_size: int = 0                        # Maximum files per batch
    duration_seconds: float = 0.0              # Total workflow duration
    cancelled: bool = False                    # User declined the confirmation


def pattern_text(pattern: Optional[AnyPattern]) -> str:
    """Return the source text of a compiled pattern for display."""
    if pattern is None:
        return ""
    source = pattern.pattern
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")
    return source
