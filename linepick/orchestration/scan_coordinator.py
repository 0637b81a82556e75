"""Concurrent scanning of file batches.

This module provides the ScanCoordinator class, which scans one batch of
files at a time on a thread pool and yields each ScanResult as soon as its
file is done.

A batch is always finished, every task joined, before the next batch is
started. Batch size is what bounds the number of files open at once, so
batches never overlap.

Example:
    from linepick.orchestration import ScanCoordinator
    from linepick.scanning import chunk_paths

    coordinator = ScanCoordinator(match_pattern, ignore_pattern)
    for batch in chunk_paths(paths, 256):
        for result in coordinator.scan_batch(batch):
            print(result.path, len(result.matched_lines))
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, Iterator, List, Optional

from linepick.models import AnyPattern, ScanResult, ScanTarget
from linepick.scanning import LineScanner

logger = logging.getLogger(__name__)

# Per-file notification hooks, called from worker threads
BeforeScanFn = Callable[[str], None]
AfterScanFn = Callable[[str], None]


def _noop(path: str) -> None:
    pass


class ScanCoordinator:
    """Runs one scanning task per file and streams results as they complete.

    Each path in a batch is submitted as its own task. Results are yielded
    in completion order, not input order. The before/after hooks run on the
    worker threads, so they must be safe to call concurrently.

    Attributes:
        match_pattern: Compiled pattern selecting lines of interest.
        ignore_pattern: Optional compiled pattern excluding lines.
        max_workers: Thread pool size per batch, or None for the executor
            default.
    """

    def __init__(
        self,
        match_pattern: AnyPattern,
        ignore_pattern: Optional[AnyPattern] = None,
        scanner: Optional[LineScanner] = None,
        max_workers: Optional[int] = None,
        before_scan: Optional[BeforeScanFn] = None,
        after_scan: Optional[AfterScanFn] = None,
    ) -> None:
        """Initialize the ScanCoordinator.

        Args:
            match_pattern: Compiled pattern selecting lines of interest.
            ignore_pattern: Optional compiled pattern excluding lines.
            scanner: LineScanner to use. A new one is created if omitted.
            max_workers: Thread pool size per batch. Defaults to the
                ThreadPoolExecutor default.
            before_scan: Called with the path before each file is scanned.
            after_scan: Called with the path after each file is scanned,
                whether or not the scan failed.

        Raises:
            ValueError: If max_workers is given and less than 1.
        """
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.match_pattern = match_pattern
        self.ignore_pattern = ignore_pattern
        self.max_workers = max_workers
        self._scanner = scanner if scanner is not None else LineScanner()
        self._before_scan = before_scan or _noop
        self._after_scan = after_scan or _noop

    def scan_batch(self, paths: List[str]) -> Iterator[ScanResult]:
        """Scan every path in a batch concurrently.

        The generator finishes only after every task in the batch has
        produced exactly one result.

        Args:
            paths: File paths in the batch.

        Yields:
            ScanResult for each path, in completion order.
        """
        if not paths:
            return

        logger.info(f"Scanning batch of {len(paths)} file(s)")
        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="linepick-scan",
        ) as executor:
            futures = [executor.submit(self._scan_one, path) for path in paths]
            for future in as_completed(futures):
                yield future.result()

    def scan_batches(self, batches: Iterable[List[str]]) -> Iterator[ScanResult]:
        """Scan batches strictly one after another.

        Args:
            batches: Batches of paths, e.g. from chunk_paths.

        Yields:
            ScanResult for every path of every batch.
        """
        for index, batch in enumerate(batches, start=1):
            logger.debug(f"Starting batch {index}")
            yield from self.scan_batch(batch)
            logger.debug(f"Finished batch {index}")

    def _scan_one(self, path: str) -> ScanResult:
        """Scan a single file, firing the notification hooks around it.

        A failing hook is logged and otherwise ignored; the after hook fires
        even if the scan itself raises.
        """
        self._notify(self._before_scan, path)
        target = ScanTarget(
            path=path,
            match_pattern=self.match_pattern,
            ignore_pattern=self.ignore_pattern,
        )
        try:
            return self._scanner.scan(target)
        finally:
            self._notify(self._after_scan, path)

    def _notify(self, hook: BeforeScanFn, path: str) -> None:
        try:
            hook(path)
        except Exception as e:
            logger.warning(f"Scan notification failed for {path}: {e}")
