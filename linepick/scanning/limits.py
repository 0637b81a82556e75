"""Open file descriptor budget.

Scanning opens one file per concurrent task, so the number of files scanned
at once must stay below the process's descriptor ceiling. This module reads
that ceiling and derives a safe batch size from it.

Example:
    >>> from linepick.scanning import max_open_files
    >>> batch_size = max_open_files()
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

# Headroom kept free for log files, sockets and library internals
RESERVED_DESCRIPTORS = 16

# Batch size used when the soft limit is unlimited
MAX_BATCH_SIZE = 4096

# Assumed usage when open descriptors cannot be listed (stdin, stdout, stderr)
DEFAULT_DESCRIPTORS_IN_USE = 3

_FD_DIRECTORIES = ("/proc/self/fd", "/dev/fd")


class ResourceLimitError(OSError):
    """Raised when the descriptor ceiling cannot be determined."""


def get_descriptor_limit() -> Optional[int]:
    """Return the soft limit on open file descriptors for this process.

    Returns:
        The soft RLIMIT_NOFILE value, or None when the limit is unlimited.

    Raises:
        ResourceLimitError: If the platform has no resource module or the
            query fails.
    """
    try:
        import resource
    except ImportError as e:
        raise ResourceLimitError("Open file limit is not available on this platform") from e

    try:
        soft, _hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    except (OSError, ValueError) as e:
        raise ResourceLimitError(f"Cannot read open file limit: {e}") from e

    if soft == resource.RLIM_INFINITY:
        return None
    return soft


def count_open_descriptors() -> int:
    """Count descriptors currently open in this process.

    Lists ``/proc/self/fd`` or ``/dev/fd``. Listing opens one descriptor of
    its own, which is not counted.

    Returns:
        Number of open descriptors, or DEFAULT_DESCRIPTORS_IN_USE if neither
        directory can be listed.
    """
    for fd_dir in _FD_DIRECTORIES:
        try:
            return max(len(os.listdir(fd_dir)) - 1, 0)
        except OSError:
            continue
    return DEFAULT_DESCRIPTORS_IN_USE


def max_open_files(reserved: int = RESERVED_DESCRIPTORS) -> int:
    """Derive how many files may safely be open at the same time.

    Args:
        reserved: Descriptors kept free on top of those already in use.

    Returns:
        Soft limit minus descriptors in use minus ``reserved``, at least 1.
        An unlimited soft limit yields MAX_BATCH_SIZE.

    Raises:
        ResourceLimitError: If the soft limit cannot be read.
    """
    soft = get_descriptor_limit()
    if soft is None:
        logger.info(f"Open file limit is unlimited, using {MAX_BATCH_SIZE}")
        return MAX_BATCH_SIZE

    in_use = count_open_descriptors()
    budget = max(min(soft - in_use - reserved, MAX_BATCH_SIZE), 1)
    logger.info(f"Open file limit {soft}, {in_use} in use, {reserved} reserved: batch size {budget}")
    return budget
