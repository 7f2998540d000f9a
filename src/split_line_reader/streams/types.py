"""Shared constants and the split descriptor."""

from dataclasses import dataclass

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class FileSplit:
    """A byte range [start, start + length) of one file."""

    path: str
    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"split start must be >= 0, got {self.start}")
        if self.length < 0:
            raise ValueError(f"split length must be >= 0, got {self.length}")

    @property
    def end(self) -> int:
        return self.start + self.length
