"""Deterministic aggregation of scan results.

Results arrive in whatever order the scanning tasks finish. The
ResultAggregator counts every result, keeps the files with matches in a
min-heap keyed by path, and hands them back strictly in ascending path
order regardless of arrival order.
"""

import heapq
import threading
from typing import Callable, Iterable, Iterator, List, Optional

from linepick.models import ReportEntry, ScanCounters, ScanResult

ErrorFn = Callable[[ScanResult], None]


class ResultAggregator:
    """Counts scan results and orders matched files by path.

    Every result increments ``scanned``. A failed result increments
    ``errors`` and is handed to the optional ``on_error`` callback; it never
    reaches the report. A successful result with at least one matched line
    becomes a ReportEntry.

    ``add`` may be called from several threads; updates are serialized by
    an internal lock.

    Example:
        >>> aggregator = ResultAggregator()
        >>> aggregator.consume(coordinator.scan_batch(batch))
        >>> for entry in aggregator.drain():
        ...     print(entry.path)
    """

    def __init__(self, on_error: Optional[ErrorFn] = None) -> None:
        self._heap: List[ReportEntry] = []
        self._counters = ScanCounters()
        self._errors: List[str] = []
        self._on_error = on_error
        self._lock = threading.Lock()

    def add(self, result: ScanResult) -> None:
        """Account for one scan result."""
        with self._lock:
            self._counters.scanned += 1

            if result.failed:
                self._counters.errors += 1
                self._errors.append(f"{result.path}: {result.error_message}")
            elif result.has_matches:
                heapq.heappush(self._heap, ReportEntry.from_result(result))
                self._counters.matched_files += 1

        if result.failed and self._on_error is not None:
            self._on_error(result)

    def consume(self, results: Iterable[ScanResult]) -> None:
        """Add every result from a completion stream."""
        for result in results:
            self.add(result)

    def pop(self) -> ReportEntry:
        """Remove and return the entry with the smallest path.

        Raises:
            IndexError: If no entries remain.
        """
        with self._lock:
            if not self._heap:
                raise IndexError("pop from empty aggregator")
            return heapq.heappop(self._heap)

    def drain(self) -> Iterator[ReportEntry]:
        """Yield and remove entries in ascending path order until empty."""
        while len(self) > 0:
            yield self.pop()

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def counters(self) -> ScanCounters:
        """Snapshot of the scanned / error / matched-file counters."""
        with self._lock:
            return ScanCounters(
                scanned=self._counters.scanned,
                errors=self._counters.errors,
                matched_files=self._counters.matched_files,
            )

    def get_errors(self) -> List[str]:
        """Get ``"path: message"`` strings for every failed result."""
        return self._errors.copy()
