"""Length-bounded line tokenizer."""

from typing import Protocol

from split_line_reader.streams.types import BUFFER_SIZE


class LineSource(Protocol):
    """Anything that hands out delimited lines of decoded bytes."""

    def readline(self, size: int = -1) -> bytes: ...

    def close(self) -> None: ...


class LineTokenizer:
    """
    Read one newline-delimited line at a time from a decoded source.

    Lines end at b"\\n". The delimiter and a preceding b"\\r" are removed from
    the returned value. A line longer than max_length is cut to max_length
    bytes and the remainder of that line, delimiter included, is consumed and
    dropped, so the following call starts on the next line.
    """

    def __init__(self, source: LineSource):
        self._source = source

    def read_line(self, max_length: int) -> tuple[bytes, int]:
        """
        Read the next line.

        Returns:
            Tuple of (line value, bytes consumed). Zero consumed bytes means
            the source is exhausted.
        """
        if max_length <= 0:
            raise ValueError(f"max_length must be positive, got {max_length}")

        chunk = self._source.readline(max_length)
        consumed = len(chunk)
        if chunk.endswith(b"\n"):
            return _strip_delimiter(chunk), consumed

        # Truncated or last line without a delimiter.
        value = chunk
        if not chunk:
            return value, consumed

        rest = self._source.readline(BUFFER_SIZE)
        consumed += len(rest)
        if rest.startswith(b"\n") and value.endswith(b"\r"):
            # The cut fell between "\r" and "\n".
            value = value[:-1]
        while rest and not rest.endswith(b"\n"):
            rest = self._source.readline(BUFFER_SIZE)
            consumed += len(rest)
        return value, consumed

    def close(self) -> None:
        self._source.close()


def _strip_delimiter(line: bytes) -> bytes:
    line = line[:-1]
    if line.endswith(b"\r"):
        line = line[:-1]
    return line
