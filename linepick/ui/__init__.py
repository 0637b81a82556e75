"""Console user interface for linepick."""

from .scan_tui import ScanTUI

__all__ = ["ScanTUI"]
