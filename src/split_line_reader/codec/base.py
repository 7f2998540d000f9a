"""Codec and decoding filter interfaces."""

from typing import Protocol

from split_line_reader.streams.stream import SeekableByteStream


class DecodingFilter(Protocol):
    """Decoded view of a seekable byte stream."""

    def readline(self, size: int = -1) -> bytes:
        """Return decoded bytes up to and including the next b"\\n"."""
        ...

    def seek(self, offset: int) -> None:
        """Reposition at a raw (encoded) file offset and drop buffered data."""
        ...

    def close(self) -> None: ...


class Codec(Protocol):
    """Factory for decoding filters, selected by file extension."""

    name: str
    extensions: tuple[str, ...]

    def create_decoder(self, stream: SeekableByteStream) -> DecodingFilter: ...
