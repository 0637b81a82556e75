"""linepick - Source Tree Line Audit Tool.

A Python application for finding lines that match a pattern (Korean text
by default) across a source tree, scanning files concurrently in batches
sized to the open file limit and reporting matches in sorted path order.
"""

# Single source of the version; setup.py and the CLI read it from here
__version__ = "1.0.0"

from .models import (
    MatchSet,
    ReportEntry,
    ScanConfig,
    ScanCounters,
    ScanResult,
    ScanSummary,
    ScanTarget,
)

__all__ = [
    "__version__",
    "MatchSet",
    "ReportEntry",
    "ScanConfig",
    "ScanCounters",
    "ScanResult",
    "ScanSummary",
    "ScanTarget",
]


def main() -> None:
    """Entry point for the linepick CLI application.

    This function is called when the `linepick` command is invoked after
    package installation via pip. It imports and runs the Typer app
    from the linepick.cli module.
    """
    from linepick.cli import app
    app()
