"""Tests for SeekableByteStream and FileSplit."""

import pytest

from split_line_reader.streams import FileSplit, SeekableByteStream


class TestSeekableByteStream:
    """Test cases for SeekableByteStream."""

    def test_open_at_offset(self, tmp_path) -> None:
        """Test that open() positions the stream at the requested offset."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"0123456789")

        stream = SeekableByteStream.open(str(path), offset=4)
        try:
            assert stream.tell() == 4
            assert stream.read(3) == b"456"
            assert stream.tell() == 7
        finally:
            stream.close()
        assert stream.closed

    def test_tell_is_exact_after_readline(self, tmp_path) -> None:
        """Test that tell() reflects consumed bytes, not read-ahead."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"ab\ncd\nef\n")

        stream = SeekableByteStream.open(str(path))
        try:
            assert stream.readline() == b"ab\n"
            assert stream.tell() == 3
            stream.seek(1)
            assert stream.readline(1) == b"b"
            assert stream.tell() == 2
        finally:
            stream.close()

    def test_missing_file_raises_oserror(self, tmp_path) -> None:
        """Test that file system errors propagate unchanged."""
        with pytest.raises(FileNotFoundError):
            SeekableByteStream.open(str(tmp_path / "missing.txt"))


class TestFileSplit:
    """Test cases for FileSplit."""

    def test_end_is_start_plus_length(self) -> None:
        """Test the derived end offset."""
        split = FileSplit("file.txt", 10, 5)
        assert split.end == 15

    def test_rejects_negative_values(self) -> None:
        """Test that negative start or length is rejected."""
        with pytest.raises(ValueError):
            FileSplit("file.txt", -1, 5)
        with pytest.raises(ValueError):
            FileSplit("file.txt", 0, -5)
