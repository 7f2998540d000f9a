"""Tests for reading lists of splits."""

import logging

import pytest

from split_line_reader.codec.framed_zstd import compress_file
from split_line_reader.config import ReaderConfig
from split_line_reader.runner import read_split, read_splits, splits_are_contiguous
from split_line_reader.runner.execution import SLR_EXECUTOR_ENV
from split_line_reader.streams.types import FileSplit

LINES = [b"%04d|" % i + b"payload" * (i % 5) for i in range(400)]


def tile(path: str, boundaries: list[int]) -> list[FileSplit]:
    return [FileSplit(path, start, end - start) for start, end in zip(boundaries, boundaries[1:])]


class TestReadSplit:
    """Test cases for read_split."""

    def test_reports_aligned_start_and_end(self, tmp_path) -> None:
        """Test that the result carries the reader's final positions."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"aaa\nbbb\nccc\n")

        result = read_split(FileSplit(str(path), 6, 6))

        assert result.lines == [b"ccc"]
        assert result.aligned_start == 8
        assert result.end_pos == 12

    def test_applies_config(self, tmp_path) -> None:
        """Test that the maximum line length reaches the reader."""
        path = tmp_path / "data.txt"
        path.write_bytes(b"abcdef\n")

        result = read_split(FileSplit(str(path), 0, 7), ReaderConfig(max_line_length=2))
        assert result.lines == [b"ab"]


class TestReadSplits:
    """Test cases for read_splits."""

    @pytest.mark.parametrize("mode", ["serial", "threads", "processes"])
    def test_plain_file_in_split_order(self, tmp_path, monkeypatch, mode: str) -> None:
        """Test that every executor returns all lines once, in file order."""
        monkeypatch.setenv(SLR_EXECUTOR_ENV, mode)
        path = tmp_path / "data.txt"
        data = b"\n".join(LINES) + b"\n"
        path.write_bytes(data)

        boundaries = list(range(0, len(data), 777)) + [len(data)]
        assert read_splits(tile(str(path), boundaries), workers=2) == LINES

    def test_block_file(self, tmp_path, monkeypatch) -> None:
        """Test completeness for a .zblk file split on its block offsets."""
        monkeypatch.setenv(SLR_EXECUTOR_ENV, "threads")
        source = tmp_path / "data.txt"
        source.write_bytes(b"\n".join(LINES) + b"\n")
        target = tmp_path / "data.zblk"
        offsets = compress_file(str(source), str(target), block_size=500)
        size = target.stat().st_size

        splits = tile(str(target), [0] + offsets[1::3] + [size])
        assert read_splits(splits) == LINES

    def test_warns_on_gaps(self, tmp_path, monkeypatch, caplog) -> None:
        """Test that a non-contiguous split list is reported."""
        monkeypatch.setenv(SLR_EXECUTOR_ENV, "serial")
        path = tmp_path / "data.txt"
        path.write_bytes(b"aaa\nbbb\nccc\n")

        with caplog.at_level(logging.WARNING):
            lines = read_splits([FileSplit(str(path), 0, 4), FileSplit(str(path), 8, 4)])

        assert lines == [b"aaa", b"bbb"]
        assert "contiguously" in caplog.text


def test_splits_are_contiguous() -> None:
    assert splits_are_contiguous([])
    assert splits_are_contiguous([FileSplit("a.txt", 0, 5), FileSplit("a.txt", 5, 0), FileSplit("a.txt", 5, 3)])
    assert not splits_are_contiguous([FileSplit("a.txt", 1, 5)])
    assert not splits_are_contiguous([FileSplit("a.txt", 0, 5), FileSplit("a.txt", 6, 5)])
    assert not splits_are_contiguous([FileSplit("a.txt", 0, 5), FileSplit("b.txt", 5, 5)])
