"""ScanOrchestrator for coordinating a complete scan run.

This module provides the ScanOrchestrator class that ties discovery,
batching, concurrent scanning, aggregation, display and logging together.

Example:
    from linepick.models import ScanConfig
    from linepick.orchestration import ScanOrchestrator

    config = ScanConfig(root="/src/project", match=r"[^\\x00-\\x7F]", extension="go")
    orchestrator = ScanOrchestrator(config)

    # Full workflow: find, confirm, scan, display, log
    summary = orchestrator.run()

    # Or scan an explicit list of paths
    summary = orchestrator.run_scan(["a.go", "b.go"])
"""

import logging
import time
from pathlib import Path
from typing import List, Optional

from linepick.matching import (
    compile_ignore_pattern,
    compile_match_pattern,
    compile_skip_paths,
)
from linepick.models import ScanConfig, ScanResult, ScanSummary, pattern_text
from linepick.orchestration.result_aggregator import ResultAggregator
from linepick.orchestration.scan_coordinator import ScanCoordinator
from linepick.orchestration.scan_logger import ScanLogger
from linepick.scanning import FileFinder, LineScanner, chunk_paths, max_open_files
from linepick.ui import ScanTUI

logger = logging.getLogger(__name__)


class ScanOrchestrator:
    """Orchestrates a one-shot scan of a directory tree.

    Every setup step that can fail for the whole run happens in the
    constructor, before any file is opened: the root directory is checked,
    all patterns are compiled, and the batch size is fixed (from the
    configuration or from the open file limit).

    Per-file errors never abort the run. They are counted, optionally shown,
    and listed in the returned ScanSummary.

    Attributes:
        config: Options of the run.
        root: Directory to search, as given.
        match_pattern: Compiled match pattern.
        ignore_pattern: Compiled ignore pattern, or None.
        skip_pattern: Compiled skip-path pattern, or None.
        batch_size: Maximum number of files scanned concurrently.
    """

    def __init__(
        self,
        config: ScanConfig,
        tui: Optional[ScanTUI] = None,
        logger_instance: Optional[ScanLogger] = None,
    ) -> None:
        """Initialize the ScanOrchestrator.

        Args:
            config: Options of the run.
            tui: ScanTUI used for all console output. A new one is created
                if omitted.
            logger_instance: Optional ScanLogger. It is entered and closed
                by ``run``.

        Raises:
            ValueError: If the root is missing or not a directory, a pattern
                does not compile, or batch_size/workers is less than 1.
            ResourceLimitError: If no batch size was configured and the
                open file limit cannot be read.
        """
        root = Path(config.root)
        if not root.exists():
            raise ValueError(f"Directory does not exist: {config.root}")
        if not root.is_dir():
            raise ValueError(f"Not a directory: {config.root}")

        if config.batch_size is not None and config.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {config.batch_size}")
        if config.workers is not None and config.workers < 1:
            raise ValueError(f"workers must be at least 1, got {config.workers}")

        self.config = config
        self.root = root
        self.match_pattern = compile_match_pattern(config.match)
        self.ignore_pattern = compile_ignore_pattern(config.ignore)
        self.skip_pattern = compile_skip_paths(config.skip_paths)
        self.batch_size = config.batch_size if config.batch_size is not None else max_open_files()

        self._tui = tui or ScanTUI()
        self._logger_instance = logger_instance
        self._finder = FileFinder(extension=config.extension, skip_pattern=self.skip_pattern)
        self._scanner = LineScanner()

    def find_files(self) -> List[str]:
        """Collect candidate files under the root directory.

        Directory walk errors are logged and, in verbose mode, displayed.
        """
        self._finder.clear_errors()
        paths = self._finder.find_files(self.root)

        walk_errors = self._finder.get_errors()
        for error in walk_errors:
            logger.warning(error)
        if self.config.verbose and walk_errors:
            self._tui.console.print(f"[dim]Discovery encountered {len(walk_errors)} warnings[/dim]")

        return paths

    def run(self) -> ScanSummary:
        """Execute the complete scan workflow.

        Phases:
        1. Discovery - collect candidate files
        2. Confirmation - ask the user (interactive mode only)
        3. Scan - batches scanned one after another, files within a
           batch concurrently
        4. Report - sorted report (unless error-only), counters, log file

        Returns:
            ScanSummary for the run. ``cancelled`` is True if the user
            declined the confirmation.
        """
        start_time = time.time()

        paths = self.find_files()
        self._tui.display_discovery(self.config.root, self.config.extension, len(paths))
        if not paths:
            return ScanSummary(batch_size=self.batch_size, duration_seconds=time.time() - start_time)

        if self.config.interactive and not self._tui.confirm_scan(len(paths)):
            return ScanSummary(
                files_found=len(paths),
                batch_size=self.batch_size,
                duration_seconds=time.time() - start_time,
                cancelled=True,
            )

        summary = self.run_scan(paths)
        summary.duration_seconds = time.time() - start_time

        if not self.config.error_only:
            self._tui.display_report(summary.entries)
        if summary.errors and not (self.config.verbose or self.config.error_only):
            # Individual errors were not printed while scanning
            self._tui.display_errors(summary.errors)
        self._tui.display_summary(summary)

        if self._logger_instance is not None:
            self._write_log(summary)

        return summary

    def run_scan(self, paths: List[str]) -> ScanSummary:
        """Scan an explicit list of paths.

        Args:
            paths: Candidate file paths in dispatch order.

        Returns:
            ScanSummary whose entries are sorted by path and whose counters
            account for every path exactly once.
        """
        start_time = time.time()
        batches = chunk_paths(paths, self.batch_size)

        coordinator = ScanCoordinator(
            match_pattern=self.match_pattern,
            ignore_pattern=self.ignore_pattern,
            scanner=self._scanner,
            max_workers=self.config.workers,
            before_scan=self._before_scan if self.config.verbose else None,
            after_scan=self._after_scan if self.config.verbose else None,
        )
        aggregator = ResultAggregator(on_error=self._on_scan_error)

        logger.info(f"Scanning {len(paths)} file(s) in {len(batches)} batch(es) of at most {self.batch_size}")
        aggregator.consume(coordinator.scan_batches(batches))

        return ScanSummary(
            files_found=len(paths),
            counters=aggregator.counters,
            entries=list(aggregator.drain()),
            errors=aggregator.get_errors(),
            batches=len(batches),
            batch_size=self.batch_size,
            duration_seconds=time.time() - start_time,
        )

    def _before_scan(self, path: str) -> None:
        self._tui.notify_before(path, pattern_text(self.match_pattern))

    def _after_scan(self, path: str) -> None:
        self._tui.notify_after(path)

    def _on_scan_error(self, result: ScanResult) -> None:
        logger.debug(f"Scan failed for {result.path}: {result.error_message}")
        if self.config.verbose or self.config.error_only:
            self._tui.display_scan_error(result)

    def _write_log(self, summary: ScanSummary) -> None:
        """Write the run to the configured log file."""
        with self._logger_instance as scan_logger:
            scan_logger.log_header()
            scan_logger.log_scan_phase(
                config=self.config,
                files_found=summary.files_found,
                batch_size=summary.batch_size,
                batches=summary.batches,
            )
            scan_logger.log_results(summary.entries)
            scan_logger.log_errors(summary.errors)
            scan_logger.log_summary(summary)

        if self.config.verbose:
            self._tui.console.print(f"[dim]Log file: {self._logger_instance.get_log_path()}[/dim]")
