"""File scanning package for linepick.

This package provides the building blocks for reading candidate files:

- FileFinder: Walks a directory tree and collects candidate file paths,
  filtered by extension and skip-path pattern.
- LineScanner: Reads one file line by line and records matching lines.
- chunk_paths: Splits the candidate list into bounded batches.
- max_open_files: Derives the batch size from the open file limit.

Example:
    >>> from linepick.scanning import FileFinder, LineScanner, chunk_paths, max_open_files
    >>> from pathlib import Path
    >>>
    >>> paths = FileFinder(extension="go").find_files(Path("/src"))
    >>> for batch in chunk_paths(paths, max_open_files()):
    ...     print(len(batch))
"""

from .chunker import chunk_paths
from .file_finder import FileFinder
from .limits import ResourceLimitError, get_descriptor_limit, max_open_files
from .line_scanner import LineScanner, iter_lines

__all__ = [
    "FileFinder",
    "LineScanner",
    "ResourceLimitError",
    "chunk_paths",
    "get_descriptor_limit",
    "iter_lines",
    "max_open_files",
]
