"""CPU and memory profiling around a scan run.

Both profilers are optional and controlled from the command line. CPU
profiles are written in ``pstats`` format; memory profiles are written as
a plain text list of the largest allocation sites.
"""

import cProfile
import logging
import tracemalloc
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

# Allocation sites listed in a memory profile
TOP_ALLOCATIONS = 25


@contextmanager
def cpu_profile(output_path: Optional[Path]) -> Iterator[None]:
    """Profile the enclosed block with cProfile and dump stats to a file.

    Does nothing when ``output_path`` is None. Stats are written even if
    the block raises.

    Only the calling thread is profiled: work done on ScanCoordinator pool
    threads shows up as time spent waiting in ``as_completed``.
    """
    if output_path is None:
        yield
        return

    profiler = cProfile.Profile()
    profiler.enable()
    try:
        yield
    finally:
        profiler.disable()
        profiler.dump_stats(str(output_path))
        logger.info(f"CPU profile written to {output_path}")


@contextmanager
def memory_profile(output_path: Optional[Path], limit: int = TOP_ALLOCATIONS) -> Iterator[None]:
    """Trace allocations in the enclosed block and write the top sites.

    Does nothing when ``output_path`` is None.
    """
    if output_path is None:
        yield
        return

    already_tracing = tracemalloc.is_tracing()
    if not already_tracing:
        tracemalloc.start()
    try:
        yield
    finally:
        snapshot = tracemalloc.take_snapshot()
        current, peak = tracemalloc.get_traced_memory()
        if not already_tracing:
            tracemalloc.stop()
        _write_snapshot(output_path, snapshot, current, peak, limit)
        logger.info(f"Memory profile written to {output_path}")


def _write_snapshot(
    output_path: Path,
    snapshot: tracemalloc.Snapshot,
    current: int,
    peak: int,
    limit: int,
) -> None:
    stats = snapshot.statistics("lineno")
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(f"Current: {current:,} bytes\n")
        f.write(f"Peak: {peak:,} bytes\n\n")
        for stat in stats[:limit]:
            f.write(f"{stat}\n")
