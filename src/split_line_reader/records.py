"""Key/value record reader contract on top of SplitLineReader."""

from typing import Self

from split_line_reader.codec.registry import CodecRegistry
from split_line_reader.config import ReaderConfig
from split_line_reader.reader import SplitLineReader
from split_line_reader.streams.types import FileSplit


class LineRecordReader:
    """
    Fills caller-owned key and value buffers, one line per next() call.

    Keys carry no information and are always left empty. Values are the line
    bytes without the delimiter.
    """

    def __init__(
        self,
        split: FileSplit,
        registry: CodecRegistry | None = None,
        config: ReaderConfig | None = None,
    ):
        self._reader = SplitLineReader(split, registry=registry, config=config)

    def create_key(self) -> bytearray:
        return bytearray()

    def create_value(self) -> bytearray:
        return bytearray()

    def next(self, key: bytearray, value: bytearray) -> bool:
        """Read the next record into key and value. False when the split is done."""
        line = self._reader.read_line()
        if line is None:
            return False
        key.clear()
        value[:] = line
        return True

    def get_progress(self) -> float:
        return self._reader.get_progress()

    def get_pos(self) -> int:
        return self._reader.get_pos()

    def close(self) -> None:
        self._reader.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
