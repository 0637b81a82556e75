"""Batch partitioning of candidate paths."""

from typing import List, Sequence


def chunk_paths(paths: Sequence[str], size: int) -> List[List[str]]:
    """Split paths into consecutive batches of at most ``size`` items.

    Order is preserved and nothing is reordered or deduplicated; joining the
    batches reproduces the input. The last batch may be smaller.

    Args:
        paths: Candidate file paths in dispatch order.
        size: Maximum batch size.

    Returns:
        List of batches, each a list of paths.

    Raises:
        ValueError: If size is less than 1.
    """
    if size < 1:
        raise ValueError(f"Batch size must be at least 1, got {size}")
    return [list(paths[start:start + size]) for start in range(0, len(paths), size)]
