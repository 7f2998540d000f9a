"""Line reader for one byte-range split of a (possibly compressed) file."""

import logging
from collections.abc import Iterator
from enum import Enum
from typing import Self

from split_line_reader.codec.registry import CodecRegistry, default_registry
from split_line_reader.config import ReaderConfig
from split_line_reader.errors import ReaderClosedError, UnsupportedFormatError
from split_line_reader.streams.stream import SeekableByteStream
from split_line_reader.streams.tokenizer import LineTokenizer
from split_line_reader.streams.types import FileSplit

logger = logging.getLogger(__name__)


class ReaderState(Enum):
    CREATED = "created"
    ALIGNING = "aligning"
    READING = "reading"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


class SplitLineReader:
    """
    Emit the lines owned by one split.

    Every split except the first drops the partial line it starts in, and
    every split keeps reading until it has passed its end, finishing the line
    that crosses the boundary. Over contiguous splits covering the whole file,
    each line is emitted by exactly one reader.

    Positions are raw file offsets as reported by the stream, so for a
    compressed file they advance by whole blocks. A reader is owned by a
    single thread; there is no locking.
    """

    def __init__(
        self,
        split: FileSplit,
        registry: CodecRegistry | None = None,
        config: ReaderConfig | None = None,
    ):
        self._state = ReaderState.CREATED
        self._start = split.start
        self._end = split.end
        self._pos = split.start
        self._max_line_length = (config or ReaderConfig()).max_line_length

        registry = registry or default_registry()
        codec = registry.get_codec(split.path)
        if codec is None:
            raise UnsupportedFormatError(f"Codec for file {split.path} not found, cannot run")

        self._stream = SeekableByteStream.open(split.path)
        try:
            # The decoder reads any file header from offset 0 before we seek.
            decoder = codec.create_decoder(self._stream)
            self._tokenizer = LineTokenizer(decoder)

            if self._start != 0:
                self._state = ReaderState.ALIGNING
                decoder.seek(self._start)
                # The first line belongs to the previous split.
                _, skipped = self._tokenizer.read_line(self._max_line_length)
                self._start = self._stream.tell()
                logger.debug(
                    "%s: skipped %d decoded bytes, split start %d -> %d",
                    split.path,
                    skipped,
                    split.start,
                    self._start,
                )
        except BaseException:
            self._stream.close()
            raise

        self._pos = self._start
        self._state = ReaderState.READING

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def start(self) -> int:
        """Aligned start position."""
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def closed(self) -> bool:
        return self._state is ReaderState.CLOSED

    def read_line(self) -> bytes | None:
        """Return the next line value, or None once the split is exhausted."""
        if self._state is ReaderState.CLOSED:
            raise ReaderClosedError("read from closed SplitLineReader")
        if self._state is ReaderState.EXHAUSTED:
            return None

        # Checked before reading: the line that crosses end is still ours.
        if self._pos > self._end:
            self._state = ReaderState.EXHAUSTED
            return None

        value, consumed = self._tokenizer.read_line(self._max_line_length)
        if consumed == 0:
            self._state = ReaderState.EXHAUSTED
            return None

        self._pos = self._stream.tell()
        return value

    def next(self) -> tuple[str, bytes] | None:
        """Key/value form of read_line(). The key is always empty."""
        value = self.read_line()
        if value is None:
            return None
        return "", value

    def get_progress(self) -> float:
        """Fraction of the split consumed, in [0, 1]."""
        if self._end <= self._start:
            return 0.0
        return max(0.0, min(1.0, (self._pos - self._start) / (self._end - self._start)))

    def get_pos(self) -> int:
        return self._pos

    def close(self) -> None:
        if self._state is ReaderState.CLOSED:
            return
        self._state = ReaderState.CLOSED
        self._tokenizer.close()

    def __iter__(self) -> Iterator[bytes]:
        return self

    def __next__(self) -> bytes:
        value = self.read_line()
        if value is None:
            raise StopIteration
        return value

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
