"""Byte streams, split descriptors and line tokenizing."""

from split_line_reader.streams.stream import SeekableByteStream
from split_line_reader.streams.tokenizer import LineTokenizer
from split_line_reader.streams.types import FileSplit

__all__ = ["FileSplit", "LineTokenizer", "SeekableByteStream"]
