"""ScanLogger for writing scan reports to a log file.

This module provides the ScanLogger class that writes a structured, plain
text record of one scan run: header, scan parameters, matched lines per
file, and summary counters.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from linepick.models import ReportEntry, ScanConfig, ScanSummary


class ScanLogger:
    """Logger for scan runs with structured output format.

    Usage:
        with ScanLogger(log_file_path) as logger:
            logger.log_header()
            logger.log_scan_phase(config, files_found, batch_size, batches)
            logger.log_results(summary.entries)
            logger.log_errors(summary.errors)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None, mode: str = "SCAN") -> None:
        """Initialize the ScanLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.
            mode: Mode label written in the header.

        Raises:
            OSError: If the log file path is not writable.
        """
        self._mode = mode
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"scan_log_{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Check that the log file can be created.

        Raises:
            OSError: If the directory is missing, not a directory, or not
                writable by this process.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Log directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Log location is not a directory: {parent}")
        if not os.access(parent, os.W_OK):
            raise OSError(f"Log directory is not writable: {parent}")

    def __enter__(self) -> "ScanLogger":
        self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._file_handle is not None:
            self._file_handle.close()
            self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp and mode."""
        self._write_separator()
        self._write_line("linepick - Scan Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line(f"Mode: {self._mode}")
        self._write_line("")

    def log_scan_phase(
        self,
        config: ScanConfig,
        files_found: int,
        batch_size: int,
        batches: int,
    ) -> None:
        """Write the scan parameters section.

        Args:
            config: Options of the run.
            files_found: Number of candidate files dispatched.
            batch_size: Maximum files scanned concurrently.
            batches: Number of batches.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Directory: {config.root}")
        self._write_line(f"Extension: {config.extension or '*'}")
        self._write_line(f"Match pattern: {config.match}")
        if config.ignore:
            self._write_line(f"Ignore pattern: {config.ignore}")
        if config.skip_paths:
            self._write_line(f"Skip paths: {config.skip_paths}")
        self._write_line(f"Files found: {files_found:,}")
        self._write_line(f"Batch size: {batch_size:,}")
        self._write_line(f"Batches: {batches}")
        self._write_line("")

    def log_results(self, entries: List[ReportEntry]) -> None:
        """Write every matched line, grouped by file in report order."""
        self._write_separator()
        self._write_line("RESULTS")
        self._write_separator()
        if not entries:
            self._write_line("No matching lines found.")
        for entry in entries:
            self._write_line(entry.path)
            for line_number, line in entry.sorted_lines():
                text = line.decode("utf-8", errors="replace")
                self._write_line(f"{line_number}: {text}", indent=2)
        self._write_line("")

    def log_errors(self, errors: List[str]) -> None:
        """Write the per-file scan errors, if any."""
        if not errors:
            return
        self._write_line("Errors:")
        for error in errors:
            self._write_line(f"- {error}", indent=2)
        self._write_line("")

    def log_summary(self, summary: ScanSummary) -> None:
        """Write the summary counters and duration."""
        counters = summary.counters
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Files scanned: {counters.scanned:,}")
        self._write_line(f"Errors: {counters.errors:,}")
        self._write_line(f"Succeeded: {counters.succeeded:,}")
        self._write_line(f"Files with matches: {counters.matched_files:,}")
        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration like "45s", "5m 23s" or "1h 5m 30s"."""
        minutes, secs = divmod(int(seconds), 60)
        hours, minutes = divmod(minutes, 60)
        if hours:
            return f"{hours}h {minutes}m {secs}s"
        if minutes:
            return f"{minutes}m {secs}s"
        return f"{secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        if self._file_handle is None:
            raise ValueError("Log file is not open; use ScanLogger as a context manager")
        self._file_handle.write(" " * indent + text + "\n")
