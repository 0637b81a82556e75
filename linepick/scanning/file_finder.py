"""Candidate file discovery.

This module provides the FileFinder class for walking a directory tree and
collecting the files a scan run should read, filtered by extension and by
an optional skip-path pattern.

Example:
    >>> from linepick.scanning import FileFinder
    >>> finder = FileFinder(extension="go")
    >>> paths = finder.find_files(Path("/src/project"))
    >>> print(f"{len(paths)} candidate files")
"""

import os
from pathlib import Path
from typing import List, Optional, Set, Tuple

from linepick.models import AnyPattern


class FileFinder:
    """Walks a directory tree and returns candidate file paths.

    Directory symlinks are followed at most once: each directory is tracked
    by (device, inode) so a symlink pointing back into the tree cannot cause
    an endless walk. Directories matching the skip pattern are pruned; files
    matching it are dropped.

    Attributes:
        extension: File extension without the leading dot. Empty selects
            every file.
        skip_pattern: Compiled pattern tested against each joined path.
        _errors: List of error messages encountered during the walk.

    Example:
        >>> finder = FileFinder(extension="py", skip_pattern=compile_skip_paths("venv/"))
        >>> for path in finder.find_files(Path(".")):
        ...     print(path)
    """

    def __init__(self, extension: str = "", skip_pattern: Optional[AnyPattern] = None) -> None:
        """Initialize the FileFinder.

        Args:
            extension: File extension to select, with or without a leading
                dot. Empty selects every file.
            skip_pattern: Optional compiled pattern; matching paths are
                excluded.
        """
        self.extension = extension.lstrip(".")
        self.skip_pattern = skip_pattern
        self._errors: List[str] = []

    def find_files(self, root: Path) -> List[str]:
        """Collect candidate files under root.

        Args:
            root: Directory to walk.

        Returns:
            File paths as strings, in walk order.

        Raises:
            ValueError: If root does not exist or is not a directory.
        """
        if not root.exists():
            raise ValueError(f"Directory does not exist: {root}")
        if not root.is_dir():
            raise ValueError(f"Not a directory: {root}")

        result: List[str] = []

        # Track visited directories by (device, inode) to detect cycles
        visited_dirs: Set[Tuple[int, int]] = set()
        root_stat = root.stat()
        visited_dirs.add((root_stat.st_dev, root_stat.st_ino))

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=self._record_walk_error, followlinks=True
        ):
            dirs_to_remove = []
            for dirname in dirnames:
                dir_full_path = os.path.join(dirpath, dirname)
                if self._is_skipped(dir_full_path):
                    dirs_to_remove.append(dirname)
                    continue
                try:
                    dir_stat = os.stat(dir_full_path)
                except OSError as e:
                    self._errors.append(f"Error accessing {dir_full_path}: {e}")
                    dirs_to_remove.append(dirname)
                    continue
                dir_id = (dir_stat.st_dev, dir_stat.st_ino)
                if dir_id in visited_dirs:
                    # Already walked, e.g. a symlink back into the tree
                    dirs_to_remove.append(dirname)
                else:
                    visited_dirs.add(dir_id)

            for dirname in dirs_to_remove:
                dirnames.remove(dirname)

            for filename in filenames:
                if not self._has_extension(filename):
                    continue
                file_path = os.path.join(dirpath, filename)
                if self._is_skipped(file_path):
                    continue
                result.append(file_path)

        return result

    def _has_extension(self, filename: str) -> bool:
        if not self.extension:
            return True
        return filename.endswith(f".{self.extension}")

    def _is_skipped(self, path: str) -> bool:
        return self.skip_pattern is not None and self.skip_pattern.search(path) is not None

    def _record_walk_error(self, error: OSError) -> None:
        if isinstance(error, PermissionError):
            self._errors.append(f"Permission denied: {error.filename}")
        else:
            self._errors.append(f"Error walking {error.filename}: {error}")

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during discovery.

        Returns:
            List of error message strings.
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()
