"""Workflow orchestration package for linepick.

This package contains the components that run a scan:
- ScanCoordinator: Scans one batch of files concurrently and streams results.
- ResultAggregator: Counts results and orders matched files by path.
- ScanLogger: Structured log file of a scan run.
- ScanOrchestrator: Central coordinator for the complete scan workflow.
"""

from linepick.orchestration.result_aggregator import ResultAggregator
from linepick.orchestration.scan_coordinator import ScanCoordinator
from linepick.orchestration.scan_logger import ScanLogger
from linepick.orchestration.scan_orchestrator import ScanOrchestrator

__all__ = ["ResultAggregator", "ScanCoordinator", "ScanLogger", "ScanOrchestrator"]
