"""Unit tests for LineScanner and iter_lines."""

import io
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from linepick.models import ScanTarget
from linepick.scanning import LineScanner, iter_lines


class TestIterLines:
    """Logical line splitting."""

    def test_strips_terminators(self) -> None:
        handle = io.BytesIO(b"one\ntwo\r\nthree\n")
        assert list(iter_lines(handle)) == [b"one", b"two", b"three"]

    def test_final_line_without_newline(self) -> None:
        handle = io.BytesIO(b"one\ntwo")
        assert list(iter_lines(handle)) == [b"one", b"two"]

    def test_empty_file_has_no_lines(self) -> None:
        assert list(iter_lines(io.BytesIO(b""))) == []

    def test_blank_lines_are_kept(self) -> None:
        handle = io.BytesIO(b"\n\nx\n")
        assert list(iter_lines(handle)) == [b"", b"", b"x"]

    def test_long_line_is_reassembled(self) -> None:
        """A line longer than the chunk size is still one line."""
        long_line = b"x" * 100 + "가".encode("utf-8") + b"y" * 50
        handle = io.BytesIO(long_line + b"\nshort\n")

        lines = list(iter_lines(handle, chunk_size=7))

        assert lines == [long_line, b"short"]

    def test_long_final_line_without_newline(self) -> None:
        handle = io.BytesIO(b"z" * 33)
        assert list(iter_lines(handle, chunk_size=4)) == [b"z" * 33]


class TestLineScannerBasic:
    """Matching and numbering behaviour."""

    def test_records_matching_lines(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "a.txt"
        path.write_bytes("αβγ\nhello\n".encode("utf-8"))

        result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert result.error is None
        assert result.matched_lines == {1: "αβγ".encode("utf-8")}
        assert result.path == str(path)

    def test_no_matches_is_success(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "b.txt"
        path.write_bytes(b"hello\nworld\n")

        result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert not result.failed
        assert result.matched_lines == {}
        assert not result.has_matches

    def test_empty_file(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "empty.txt"
        path.touch()

        result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert not result.failed
        assert result.matched_lines == {}

    def test_ignored_lines_still_count(self, temp_dir: Path, non_ascii) -> None:
        """Ignored lines consume a line number."""
        path = temp_dir / "c.go"
        path.write_bytes("// αβγ\nδεζ\n".encode("utf-8"))
        target = ScanTarget(str(path), non_ascii, re.compile("^//"))

        result = LineScanner().scan(target)

        assert result.matched_lines == {2: "δεζ".encode("utf-8")}

    def test_numbering_after_several_ignored_lines(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "d.go"
        path.write_bytes("// 하나\n// 둘\nok\n셋\n".encode("utf-8"))
        target = ScanTarget(str(path), non_ascii, re.compile("^//"))

        result = LineScanner().scan(target)

        assert result.matched_lines == {4: "셋".encode("utf-8")}

    def test_values_are_raw_bytes_without_terminator(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "crlf.txt"
        path.write_bytes("x\r\n한글\r\n".encode("utf-8"))

        result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert result.matched_lines == {2: "한글".encode("utf-8")}

    def test_invalid_utf8_matches_non_ascii(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "latin1.txt"
        path.write_bytes(b"caf\xe9\nplain\n")

        result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert result.matched_lines == {1: b"caf\xe9"}

    def test_bytes_pattern_sees_raw_bytes(self, temp_dir: Path) -> None:
        path = temp_dir / "raw.bin"
        path.write_bytes(b"abc\n\xff\xfe\n")

        result = LineScanner().scan(ScanTarget(str(path), re.compile(rb"\xff")))

        assert result.matched_lines == {2: b"\xff\xfe"}

    def test_long_line_numbering(self, temp_dir: Path, non_ascii) -> None:
        """Lines longer than the buffer do not shift later line numbers."""
        path = temp_dir / "long.txt"
        path.write_bytes(b"a" * 20000 + b"\n" + "끝".encode("utf-8") + b"\n")

        result = LineScanner(chunk_size=512).scan(ScanTarget(str(path), non_ascii))

        assert result.matched_lines == {2: "끝".encode("utf-8")}

    def test_scanning_twice_is_identical(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "same.txt"
        path.write_bytes("하나\ntwo\n셋\n".encode("utf-8"))
        scanner = LineScanner()

        first = scanner.scan(ScanTarget(str(path), non_ascii))
        second = scanner.scan(ScanTarget(str(path), non_ascii))

        assert first.matched_lines == second.matched_lines


class TestLineScannerErrors:
    """Failure handling."""

    def test_missing_file(self, temp_dir: Path, non_ascii) -> None:
        path = temp_dir / "missing.txt"

        result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert result.failed
        assert isinstance(result.error, FileNotFoundError)
        assert result.matched_lines == {}

    def test_path_with_null_byte(self, temp_dir: Path, non_ascii) -> None:
        """An unusable path is a per-file failure, not an exception."""
        path = str(temp_dir / "bad\x00name.txt")

        result = LineScanner().scan(ScanTarget(path, non_ascii))

        assert result.failed
        assert isinstance(result.error, ValueError)
        assert "null byte" in result.error_message
        assert result.matched_lines == {}

    def test_directory_is_an_error(self, temp_dir: Path, non_ascii) -> None:
        result = LineScanner().scan(ScanTarget(str(temp_dir), non_ascii))

        assert result.failed
        assert result.error_message

    def test_permission_denied(self, restricted_file, non_ascii) -> None:
        if restricted_file is None:
            pytest.skip("Cannot restrict file permissions on this platform")

        result = LineScanner().scan(ScanTarget(str(restricted_file), non_ascii))

        assert isinstance(result.error, PermissionError)
        assert result.matched_lines == {}

    def test_read_error_discards_partial_matches(self, temp_dir: Path, non_ascii) -> None:
        """A mid-read failure yields the error and no matches."""
        path = temp_dir / "flaky.txt"
        path.write_bytes("가\n나\n다\n".encode("utf-8"))

        def failing_lines(handle, chunk_size):
            yield "가".encode("utf-8")
            yield "나".encode("utf-8")
            raise OSError(5, "Input/output error")

        with patch("linepick.scanning.line_scanner.iter_lines", side_effect=failing_lines):
            result = LineScanner().scan(ScanTarget(str(path), non_ascii))

        assert result.failed
        assert result.error_message == "Input/output error"
        assert result.matched_lines == {}

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError, match="chunk_size must be positive"):
            LineScanner(chunk_size=0)
