"""Seekable binary stream over a local file."""

import os
from typing import Self

from split_line_reader.streams.types import BUFFER_SIZE


class SeekableByteStream:
    """
    Buffered binary file handle with an exact position.

    tell() reports the offset after the last byte handed out by read() or
    readline(), not how far the OS-level reads have gone.
    """

    def __init__(self, path: str, buffer_size: int = BUFFER_SIZE):
        self.path = path
        self._handle = open(path, "rb", buffering=buffer_size)  # noqa: SIM115

    @classmethod
    def open(cls, path: str, offset: int = 0) -> Self:
        """Open path and position the stream at offset."""
        stream = cls(path)
        if offset:
            try:
                stream.seek(offset)
            except BaseException:
                stream.close()
                raise
        return stream

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self._handle.seek(offset, whence)

    def tell(self) -> int:
        return self._handle.tell()

    def read(self, size: int = -1) -> bytes:
        return self._handle.read(size)

    def readline(self, size: int = -1) -> bytes:
        return self._handle.readline(size)

    def close(self) -> None:
        self._handle.close()
