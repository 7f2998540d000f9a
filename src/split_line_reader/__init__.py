"""Split Line Reader - Read lines of byte-range splits of plain or block-compressed files."""

from split_line_reader.config import ReaderConfig
from split_line_reader.errors import (
    CorruptStreamError,
    ReaderClosedError,
    SplitAlignmentError,
    SplitReaderError,
    UnsupportedFormatError,
)
from split_line_reader.reader import ReaderState, SplitLineReader
from split_line_reader.records import LineRecordReader
from split_line_reader.runner import read_split, read_splits
from split_line_reader.streams.types import FileSplit

__all__ = [
    "CorruptStreamError",
    "FileSplit",
    "LineRecordReader",
    "ReaderClosedError",
    "ReaderConfig",
    "ReaderState",
    "SplitAlignmentError",
    "SplitLineReader",
    "SplitReaderError",
    "UnsupportedFormatError",
    "read_split",
    "read_splits",
]
