"""Terminal User Interface for linepick scan runs.

This module provides the ScanTUI class, a Rich-based console front end for
the scan workflow: discovery results, confirmation, verbose per-file
notifications, the sorted report and the final counters.

Example:
    from linepick.ui import ScanTUI

    tui = ScanTUI()
    tui.display_discovery(root, extension="go", files_found=120)
    tui.display_report(summary.entries)
    tui.display_summary(summary)
"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from linepick.models import ReportEntry, ScanResult, ScanSummary


class ScanTUI:
    """Rich-based console output for scan runs.

    The notification methods (``notify_before``, ``notify_after`` and
    ``display_scan_error``) are called from scanning threads. Rich's Console
    serializes writes, so they are safe to call concurrently.

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_discovery(self, root: str, extension: str, files_found: int) -> None:
        """Display what is about to be scanned.

        Args:
            root: Directory that was searched.
            extension: Extension filter, empty for all files.
            files_found: Number of candidate files.
        """
        pattern = f"*.{extension}" if extension else "*"
        if files_found == 0:
            self.console.print(
                f"No [{pattern}] files found in [{root}].",
                style="yellow",
                markup=False,
                soft_wrap=True,
            )
            return
        self.console.print(
            f"Found {files_found:,} [{pattern}] file(s) in [{root}]",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )

    def confirm_scan(self, files_found: int) -> bool:
        """Ask whether to scan the discovered files.

        Returns:
            True if the user confirms, False on refusal or Ctrl+C.
        """
        try:
            return Confirm.ask(
                f"Found {files_found:,} file(s). Do you want to scan them?",
                default=True,
                console=self.console,
            )
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Scan cancelled by user.[/yellow]")
            return False

    def notify_before(self, path: str, pattern: str) -> None:
        """Verbose notification fired before a file is scanned."""
        line = Text()
        line.append(f"[{path}]", style="dim")
        line.append(f' scanning for "{pattern}"')
        self.console.print(line, soft_wrap=True)

    def notify_after(self, path: str) -> None:
        """Verbose notification fired after a file is scanned."""
        line = Text()
        line.append(f"[{path}]", style="dim")
        line.append(" scanning done")
        self.console.print(line, soft_wrap=True)

    def display_scan_error(self, result: ScanResult) -> None:
        """Display a single per-file scan error."""
        line = Text()
        line.append(f"[{result.path}]", style="dim")
        line.append(" scanning error - ", style="red")
        line.append(result.error_message)
        self.console.print(line, soft_wrap=True)

    def display_report(self, entries: List[ReportEntry]) -> None:
        """Print every matched file in path order with its matched lines.

        Each file path is followed by ``<line number>: <line text>`` rows in
        ascending line order. Line bytes are decoded as UTF-8 with
        replacement characters for invalid sequences.
        """
        for entry in entries:
            self.console.print(Text(entry.path, style="bold cyan"), soft_wrap=True)
            for line_number, line in entry.sorted_lines():
                row = Text()
                row.append(f"{line_number}", style="green")
                row.append(": ")
                row.append(line.decode("utf-8", errors="replace"))
                self.console.print(row, soft_wrap=True)

    def display_summary(self, summary: ScanSummary) -> None:
        """Display the final counters in a table.

        Args:
            summary: ScanSummary with counters and duration.
        """
        counters = summary.counters

        table = Table(title="Scan Summary", show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Files scanned", f"{counters.scanned:,}")
        table.add_row("Errors", f"{counters.errors:,}")
        table.add_row("Succeeded", f"{counters.succeeded:,}")
        table.add_row("Files with matches", f"{counters.matched_files:,}")
        table.add_row("Batches", f"{summary.batches:,} (max {summary.batch_size:,} files)")
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(table)

    def display_errors(self, errors: List[str]) -> None:
        """Display error messages in a separate panel.

        Args:
            errors: List of error messages to display.
        """
        if not errors:
            return

        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = Text("\n".join(f"- {e}" for e in displayed_errors))
        if remaining > 0:
            error_text.append(f"\n\n... and {remaining} more errors")

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_duration(self, seconds: float) -> str:
        """Convert seconds to a short duration like "1.25s" or "5m 23s"."""
        if seconds < 0:
            seconds = 0
        if seconds < 60:
            return f"{seconds:.2f}s"
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
