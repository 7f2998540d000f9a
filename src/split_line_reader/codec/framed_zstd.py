"""
Block-framed zstandard container.

Layout (all integers big-endian):

    header   "ZBLK" | version u8 | 3 reserved bytes | block size u32
    block    "ZBK1" | decoded length u32 | compressed length u32 | crc32 u32 | zstd frame
    ...
    footer   "ZIDX" | block count u32 | block offset u64 * count | footer length u32 | "ZEND"

Every block is an independent zstd frame, so a reader can start at any block
offset listed in the footer. Splits of a .zblk file must start on one of those
offsets (or on the footer itself).
"""

import logging
import os
import zlib
from bisect import bisect_left
from struct import Struct
from typing import BinaryIO, Self

import zstandard as zstd

from split_line_reader.errors import CorruptStreamError, SplitAlignmentError
from split_line_reader.streams.stream import SeekableByteStream
from split_line_reader.streams.types import BUFFER_SIZE

logger = logging.getLogger(__name__)

FILE_MAGIC = b"ZBLK"
BLOCK_MAGIC = b"ZBK1"
FOOTER_MAGIC = b"ZIDX"
FOOTER_END = b"ZEND"
FORMAT_VERSION = 1

HEADER = Struct(">4sB3xI")
BLOCK_HEADER = Struct(">4sIII")
FOOTER_HEAD = Struct(">4sI")
FOOTER_TAIL = Struct(">I4s")
OFFSET = Struct(">Q")

# 4MB of decoded data per block.
DEFAULT_BLOCK_SIZE = 4 * 1024 * 1024
DEFAULT_LEVEL = 3


def _read_footer(stream: SeekableByteStream) -> tuple[list[int], int]:
    """Return (block offsets, footer start). Leaves the stream position undefined."""
    file_size = stream.seek(0, os.SEEK_END)
    if file_size < HEADER.size + FOOTER_HEAD.size + FOOTER_TAIL.size:
        raise CorruptStreamError(f"{stream.path}: too short for a framed zstd file")

    stream.seek(file_size - FOOTER_TAIL.size)
    footer_len, end_magic = FOOTER_TAIL.unpack(stream.read(FOOTER_TAIL.size))
    footer_start = file_size - footer_len
    if end_magic != FOOTER_END or footer_start < HEADER.size:
        raise CorruptStreamError(f"{stream.path}: missing or damaged block index")

    stream.seek(footer_start)
    magic, count = FOOTER_HEAD.unpack(stream.read(FOOTER_HEAD.size))
    if magic != FOOTER_MAGIC or footer_len != FOOTER_HEAD.size + count * OFFSET.size + FOOTER_TAIL.size:
        raise CorruptStreamError(f"{stream.path}: missing or damaged block index")

    raw = stream.read(count * OFFSET.size)
    offsets = [OFFSET.unpack_from(raw, i * OFFSET.size)[0] for i in range(count)]
    return offsets, footer_start


def read_block_index(path: str) -> list[int]:
    """Read the block offsets recorded in a .zblk file's footer."""
    stream = SeekableByteStream.open(path)
    try:
        offsets, _ = _read_footer(stream)
    finally:
        stream.close()
    return offsets


class FramedZstdDecoder:
    """
    Decodes one block at a time.

    A new block is only read from the stream once the previous one is fully
    consumed, so the stream position is always the end offset of the last
    decoded block.
    """

    def __init__(self, stream: SeekableByteStream):
        self._stream = stream
        self._decompressor = zstd.ZstdDecompressor()
        self._block = b""
        self._offset = 0
        self._eof = False
        self._index: tuple[list[int], int] | None = None
        self.block_size = self._read_header()

    def _read_header(self) -> int:
        raw = self._stream.read(HEADER.size)
        if len(raw) < HEADER.size:
            raise CorruptStreamError(f"{self._stream.path}: truncated header")

        magic, version, block_size = HEADER.unpack(raw)
        if magic != FILE_MAGIC:
            raise CorruptStreamError(f"{self._stream.path}: not a framed zstd file")
        if version != FORMAT_VERSION:
            raise CorruptStreamError(f"{self._stream.path}: unsupported format version {version}")
        return block_size

    def _load_block(self) -> bool:
        """Decode the next block into the buffer. Returns False at the footer."""
        block_start = self._stream.tell()
        raw = self._stream.read(BLOCK_HEADER.size)
        if raw[:4] == FOOTER_MAGIC:
            self._stream.seek(block_start)
            self._eof = True
            return False
        if len(raw) < BLOCK_HEADER.size:
            raise CorruptStreamError(f"{self._stream.path}: truncated block at offset {block_start}")

        magic, decoded_len, compressed_len, checksum = BLOCK_HEADER.unpack(raw)
        if magic != BLOCK_MAGIC:
            raise CorruptStreamError(f"{self._stream.path}: bad block magic at offset {block_start}")

        payload = self._stream.read(compressed_len)
        if len(payload) < compressed_len:
            raise CorruptStreamError(f"{self._stream.path}: truncated block at offset {block_start}")

        try:
            block = self._decompressor.decompress(payload, max_output_size=decoded_len)
        except zstd.ZstdError as exc:
            raise CorruptStreamError(
                f"{self._stream.path}: cannot decompress block at offset {block_start}"
            ) from exc

        if len(block) != decoded_len or zlib.crc32(block) != checksum:
            raise CorruptStreamError(f"{self._stream.path}: checksum mismatch in block at offset {block_start}")

        logger.debug(
            "Block at %d: %d -> %d bytes (block size %d)",
            block_start,
            compressed_len,
            decoded_len,
            self.block_size,
        )
        self._block = block
        self._offset = 0
        return True

    def readline(self, size: int = -1) -> bytes:
        parts: list[bytes] = []
        remaining = size if size >= 0 else None

        while remaining is None or remaining > 0:
            if self._offset >= len(self._block):
                if self._eof or not self._load_block():
                    break
                continue

            newline = self._block.find(b"\n", self._offset)
            stop = len(self._block) if newline < 0 else newline + 1
            if remaining is not None:
                stop = min(stop, self._offset + remaining)
                remaining -= stop - self._offset

            parts.append(self._block[self._offset : stop])
            self._offset = stop
            if parts[-1].endswith(b"\n"):
                break

        return b"".join(parts)

    def seek(self, offset: int) -> None:
        """Move to a block boundary. Any other offset raises SplitAlignmentError."""
        if self._index is None:
            self._index = _read_footer(self._stream)
        offsets, footer_start = self._index

        if offset == 0:
            offset = HEADER.size
        if offset >= footer_start:
            # Everything from the footer on decodes to nothing.
            self._eof = True
        else:
            i = bisect_left(offsets, offset)
            if i == len(offsets) or offsets[i] != offset:
                raise SplitAlignmentError(
                    f"{self._stream.path}: offset {offset} is not a block boundary"
                )
            self._eof = False

        self._stream.seek(offset)
        self._block = b""
        self._offset = 0

    def close(self) -> None:
        self._stream.close()


class FramedZstdCodec:
    """Independently compressed zstd blocks with a trailing block index."""

    name = "framed-zstd"
    extensions = (".zblk",)

    def create_decoder(self, stream: SeekableByteStream) -> FramedZstdDecoder:
        return FramedZstdDecoder(stream)


class FramedZstdWriter:
    """
    Writes the block container to a binary file object.

    The file object must be positioned at offset 0 and is not closed by the
    writer. Blocks are cut every block_size decoded bytes, regardless of
    line boundaries; flush() ends the current block early.
    """

    def __init__(
        self,
        fileobj: BinaryIO,
        block_size: int = DEFAULT_BLOCK_SIZE,
        level: int = DEFAULT_LEVEL,
    ):
        if block_size <= 0:
            raise ValueError(f"block_size must be positive, got {block_size}")

        self._fileobj = fileobj
        self._block_size = block_size
        self._compressor = zstd.ZstdCompressor(level=level)
        self._pending = bytearray()
        self._offsets: list[int] = []
        self._position = 0
        self._closed = False
        self._write_raw(HEADER.pack(FILE_MAGIC, FORMAT_VERSION, block_size))

    @property
    def block_offsets(self) -> list[int]:
        """Offsets of the blocks written so far."""
        return list(self._offsets)

    def _write_raw(self, data: bytes) -> None:
        self._fileobj.write(data)
        self._position += len(data)

    def _write_block(self, block: bytes) -> None:
        compressed = self._compressor.compress(block)
        self._offsets.append(self._position)
        self._write_raw(BLOCK_HEADER.pack(BLOCK_MAGIC, len(block), len(compressed), zlib.crc32(block)))
        self._write_raw(compressed)

    def write(self, data: bytes) -> int:
        if self._closed:
            raise ValueError("write to closed FramedZstdWriter")

        self._pending += data
        while len(self._pending) >= self._block_size:
            self._write_block(bytes(self._pending[: self._block_size]))
            del self._pending[: self._block_size]
        return len(data)

    def flush(self) -> None:
        """Write buffered data as a (possibly short) block."""
        if self._pending:
            self._write_block(bytes(self._pending))
            self._pending.clear()

    def close(self) -> None:
        """Write the last block and the footer. Safe to call twice."""
        if self._closed:
            return
        self.flush()

        footer_len = FOOTER_HEAD.size + len(self._offsets) * OFFSET.size + FOOTER_TAIL.size
        self._write_raw(FOOTER_HEAD.pack(FOOTER_MAGIC, len(self._offsets)))
        for offset in self._offsets:
            self._write_raw(OFFSET.pack(offset))
        self._write_raw(FOOTER_TAIL.pack(footer_len, FOOTER_END))
        self._closed = True

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def compress_file(
    input_path: str,
    output_path: str,
    block_size: int = DEFAULT_BLOCK_SIZE,
    level: int = DEFAULT_LEVEL,
) -> list[int]:
    """Pack input_path into a .zblk container and return its block offsets."""
    with open(input_path, "rb") as src, open(output_path, "wb") as dst:
        with FramedZstdWriter(dst, block_size=block_size, level=level) as writer:
            while chunk := src.read(BUFFER_SIZE):
                writer.write(chunk)
    return writer.block_offsets
