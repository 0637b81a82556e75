"""Pytest fixtures for linepick tests."""

import io
import os
import platform
import re
import tempfile
from pathlib import Path
from typing import Dict, Generator, Optional

import pytest
from rich.console import Console

from linepick.matching import NON_ASCII_PATTERN
from linepick.models import ScanConfig
from linepick.ui import ScanTUI


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests touching several components and the filesystem")


def can_restrict_permissions() -> bool:
    """Return True if chmod 000 actually prevents this process from reading."""
    if platform.system() == "Windows":
        return False
    # root ignores file permission bits
    return hasattr(os, "geteuid") and os.geteuid() != 0


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def non_ascii():
    """Compiled pattern matching any non-ASCII character."""
    return re.compile(NON_ASCII_PATTERN)


@pytest.fixture
def sample_tree(temp_dir: Path) -> Dict[str, Path]:
    """Create the two-file example tree.

    Creates:
        temp_dir/
        ├── a.txt  "αβγ\\nhello\\n"  (line 1 is non-ASCII)
        └── b.txt  "hello\\nworld\\n" (ASCII only)

    Returns:
        Dictionary mapping short names to file paths.
    """
    a = temp_dir / "a.txt"
    a.write_bytes("αβγ\nhello\n".encode("utf-8"))
    b = temp_dir / "b.txt"
    b.write_bytes(b"hello\nworld\n")
    return {"a": a, "b": b}


@pytest.fixture
def source_tree(temp_dir: Path) -> Path:
    """Create a small source tree for discovery and workflow tests.

    Creates:
        temp_dir/src/
        ├── main.go          Korean comment on line 2
        ├── util.go          ASCII only
        ├── notes.txt        Korean text, wrong extension
        ├── pkg/
        │   └── handler.go   Korean on lines 1 and 3, line 2 is an ignored comment
        └── vendor/
            └── lib.go       Korean text, skipped by "vendor/"

    Returns:
        Path to temp_dir/src.
    """
    root = temp_dir / "src"
    (root / "pkg").mkdir(parents=True)
    (root / "vendor").mkdir()

    (root / "main.go").write_text('package main\n// 안녕하세요\nfunc main() {}\n', encoding="utf-8")
    (root / "util.go").write_text("package main\n\nfunc util() {}\n", encoding="utf-8")
    (root / "notes.txt").write_text("메모\n", encoding="utf-8")
    (root / "pkg" / "handler.go").write_text(
        'msg := "한국어"\n// 주석\nerr := "오류"\n', encoding="utf-8"
    )
    (root / "vendor" / "lib.go").write_text("// 외부 코드\n", encoding="utf-8")
    return root


@pytest.fixture
def restricted_file(temp_dir: Path) -> Generator[Optional[Path], None, None]:
    """Create a file with no read permissions.

    Yields:
        Path to the restricted file, or None if permissions cannot be
        enforced (Windows, or running as root).
    """
    if not can_restrict_permissions():
        yield None
        return

    restricted = temp_dir / "restricted.txt"
    restricted.write_text("비밀\n", encoding="utf-8")

    original_mode = restricted.stat().st_mode
    os.chmod(restricted, 0o000)

    try:
        yield restricted
    finally:
        # Restore permissions for cleanup
        os.chmod(restricted, original_mode)


@pytest.fixture
def console_output() -> io.StringIO:
    """StringIO capturing Rich console output."""
    return io.StringIO()


@pytest.fixture
def tui(console_output: io.StringIO) -> ScanTUI:
    """ScanTUI writing plain text to console_output."""
    console = Console(file=console_output, force_terminal=False, width=200, color_system=None)
    return ScanTUI(console=console)


@pytest.fixture
def make_config():
    """Factory for ScanConfig with test-friendly defaults."""
    def _make(root: Path, **overrides) -> ScanConfig:
        options = {
            "root": str(root),
            "match": NON_ASCII_PATTERN,
            "batch_size": 10,
        }
        options.update(overrides)
        return ScanConfig(**options)

    return _make
