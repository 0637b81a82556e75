"""
Models package for the line pick audit tool.

This package provides convenient imports for all data models:
- ScanTarget: File path plus compiled patterns
- ScanResult: Per-file scan outcome (matches or error)
- ReportEntry: File with at least one matched line
- ScanCounters: Scanned / error / matched-file counters
- ScanConfig: Run options
- ScanSummary: Scan workflow summary
"""

from .data_models import (
    AnyPattern,
    MatchSet,
    ReportEntry,
    ScanConfig,
    ScanCounters,
    ScanResult,
    ScanSummary,
    ScanTarget,
    pattern_text,
)

__all__ = [
    "AnyPattern",
    "MatchSet",
    "ReportEntry",
    "ScanConfig",
    "ScanCounters",
    "ScanResult",
    "ScanSummary",
    "ScanTarget",
    "pattern_text",
]
