"""Tests for the key/value record adapter."""

from split_line_reader.records import LineRecordReader
from split_line_reader.streams.types import FileSplit


class TestLineRecordReader:
    """Test cases for LineRecordReader."""

    def test_fills_key_and_value(self, tmp_path) -> None:
        """Test that next() writes the line into the value and clears the key."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"aaa\nbbb\nccc\n")

        with LineRecordReader(FileSplit(str(path), 0, 4)) as records:
            key = records.create_key()
            value = records.create_value()
            key.extend(b"stale")

            assert records.next(key, value)
            assert key == b""
            assert value == b"aaa"
            assert records.get_pos() == 4

            assert records.next(key, value)
            assert value == b"bbb"
            assert records.get_progress() == 1.0

            assert not records.next(key, value)
            assert value == b"bbb"

    def test_second_split_skips_partial_line(self, tmp_path) -> None:
        """Test that the adapter follows the reader's boundary rule."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"aaa\nbbb\nccc\n")

        with LineRecordReader(FileSplit(str(path), 4, 8)) as records:
            key, value = records.create_key(), records.create_value()
            collected = []
            while records.next(key, value):
                collected.append(bytes(value))

        assert collected == [b"ccc"]
