"""
Unit tests for chunk_paths in linepick.scanning.chunker.

Tests cover:
- Concatenation of batches reproduces the input
- No batch exceeds the maximum size
- Last batch may be smaller
- Invalid sizes
"""

import pytest

from linepick.scanning import chunk_paths


@pytest.mark.unit
class TestChunkPaths:
    """Tests for chunk_paths."""

    @pytest.mark.parametrize("total,size", [(0, 3), (1, 1), (5, 2), (6, 3), (7, 10), (100, 7)])
    def test_batches_reproduce_input(self, total: int, size: int):
        """Concatenating every batch, in order, gives back the input list."""
        paths = [f"file{i:03d}.go" for i in range(total)]

        batches = chunk_paths(paths, size)

        assert [p for batch in batches for p in batch] == paths
        assert all(1 <= len(batch) <= size for batch in batches)

    def test_last_batch_smaller(self):
        batches = chunk_paths(["a", "b", "c", "d", "e"], 2)

        assert batches == [["a", "b"], ["c", "d"], ["e"]]

    def test_no_reordering_or_deduplication(self):
        paths = ["z", "a", "z", "m"]

        assert chunk_paths(paths, 3) == [["z", "a", "z"], ["m"]]

    def test_empty_input(self):
        assert chunk_paths([], 5) == []

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size: int):
        with pytest.raises(ValueError, match="Batch size must be at least 1"):
            chunk_paths(["a"], size)
