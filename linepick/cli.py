"""
linepick - CLI Interface.

A command-line interface for auditing a source tree for lines written in a
given script (Korean by default), reported per file in sorted order.

Usage Examples:
    # Scan every .go file for Korean text
    linepick scan ./src --ext go

    # Any non-ASCII character, ignoring comment lines
    linepick scan ./src --match '[^\\x00-\\x7F]' --ignore '^\\s*//'

    # Skip vendored code and tests, confirm before scanning
    linepick scan ./src --skip-paths 'vendor/,_test\\.go$' --interactive

    # Only show files that could not be read
    linepick scan ./src --error-only

    # Write a log file and profiles
    linepick scan ./src --log-file scan.log --cpu-profile cpu.prof --mem-profile mem.txt
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from linepick import __version__
from linepick.matching import KOREAN_PATTERN
from linepick.models import ScanConfig
from linepick.orchestration import ScanLogger, ScanOrchestrator
from linepick.orchestration.profiling import cpu_profile, memory_profile
from linepick.ui import ScanTUI

# Initialize Typer app
app = typer.Typer(
    name="linepick",
    help="linepick - Find lines matching a pattern across a source tree.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"linepick v{__version__}")
        raise typer.Exit()


def validate_positive(value: Optional[int]) -> Optional[int]:
    """
    Validate that an optional count is at least 1.

    Raises:
        typer.BadParameter: If value is given and less than 1.
    """
    if value is not None and value < 1:
        raise typer.BadParameter("Must be at least 1")
    return value


def configure_logging(verbose: bool) -> None:
    """Route library log records to stderr; debug detail in verbose mode."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """linepick - Find lines matching a pattern across a source tree."""
    pass


@app.command()
def scan(
    directory: Path = typer.Argument(
        ...,
        help="Directory to search for files.",
        exists=False,  # We do our own validation
    ),
    ext: str = typer.Option(
        "",
        "--ext",
        "-e",
        help="Only scan files with this extension (e.g. 'go'). Empty scans every file.",
    ),
    skip_paths: str = typer.Option(
        "",
        "--skip-paths",
        "-s",
        help="Comma-separated regular expressions; matching paths are skipped.",
    ),
    match: str = typer.Option(
        KOREAN_PATTERN,
        "--match",
        "-m",
        help="Regular expression selecting lines to report (default: Hangul).",
        show_default=False,
    ),
    ignore: str = typer.Option(
        "",
        "--ignore",
        "-g",
        help="Regular expression; matching lines are never reported.",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Ask for confirmation before scanning.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Print a line before and after each file is scanned.",
    ),
    error_only: bool = typer.Option(
        False,
        "--error-only",
        "-E",
        help="Only print scan errors and counters.",
    ),
    batch_size: Optional[int] = typer.Option(
        None,
        "--batch-size",
        "-b",
        help="Maximum files open at once (default: derived from the open file limit).",
        callback=validate_positive,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Scanning threads per batch.",
        callback=validate_positive,
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    cpu_profile_path: Optional[Path] = typer.Option(
        None,
        "--cpu-profile",
        help="Write a cProfile CPU profile of the main thread to this file (scanning threads are not profiled).",
    ),
    mem_profile_path: Optional[Path] = typer.Option(
        None,
        "--mem-profile",
        help="Write a tracemalloc memory profile to this file.",
    ),
    fail_on_match: bool = typer.Option(
        False,
        "--fail-on-match",
        help="Exit with status 1 when any file has matching lines.",
    ),
) -> None:
    """
    Scan files under DIRECTORY for lines matching a pattern.

    Prints each file with matching lines, in path order, followed by its
    matching line numbers and text, then the scanned / error / success /
    matched-file counters.
    """
    configure_logging(verbose)

    # Create logger if log file specified
    logger_instance: Optional[ScanLogger] = None
    if log_file:
        try:
            logger_instance = ScanLogger(log_file, mode="ERROR ONLY" if error_only else "SCAN")
        except OSError as e:
            console.print(
                f"[yellow]Warning:[/yellow] Failed to create log file: {escape(str(e))}. "
                "Continuing without logging."
            )
            logger_instance = None

    config = ScanConfig(
        root=str(directory),
        match=match,
        ignore=ignore,
        extension=ext,
        skip_paths=skip_paths,
        batch_size=batch_size,
        workers=workers,
        interactive=interactive,
        verbose=verbose,
        error_only=error_only,
    )

    try:
        with cpu_profile(cpu_profile_path), memory_profile(mem_profile_path):
            orchestrator = ScanOrchestrator(
                config,
                tui=ScanTUI(console=console),
                logger_instance=logger_instance,
            )
            summary = orchestrator.run()

        if log_file and logger_instance and summary.counters.scanned:
            console.print(f"[dim]Log written to: {escape(str(log_file))}[/dim]")

        if fail_on_match and summary.counters.matched_files > 0:
            raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
