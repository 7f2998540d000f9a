"""Decoding filters and the codec registry."""

from split_line_reader.codec.base import Codec, DecodingFilter
from split_line_reader.codec.framed_zstd import (
    FramedZstdCodec,
    FramedZstdWriter,
    compress_file,
    read_block_index,
)
from split_line_reader.codec.plain import PlainTextCodec
from split_line_reader.codec.registry import CodecRegistry, default_registry

__all__ = [
    "Codec",
    "CodecRegistry",
    "DecodingFilter",
    "FramedZstdCodec",
    "FramedZstdWriter",
    "PlainTextCodec",
    "compress_file",
    "default_registry",
    "read_block_index",
]
