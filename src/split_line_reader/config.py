"""Reader configuration."""

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Self

# Job configuration key for the maximum number of bytes kept per line.
MAX_LINE_LENGTH_KEY = "split_line_reader.max.line.length"

# Environment variable with the same meaning, used by the CLI and runner.
MAX_LINE_LENGTH_ENV = "SLR_MAX_LINE_LENGTH"

DEFAULT_MAX_LINE_LENGTH = sys.maxsize


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Settings shared by every split reader of a job."""

    max_line_length: int = DEFAULT_MAX_LINE_LENGTH

    def __post_init__(self) -> None:
        if self.max_line_length <= 0:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")

    @classmethod
    def from_mapping(cls, conf: Mapping[str, str | int]) -> Self:
        """Build a config from job settings, using defaults for missing keys."""
        value = conf.get(MAX_LINE_LENGTH_KEY)
        if value is None or value == "":
            return cls()
        return cls(max_line_length=int(value))

    @classmethod
    def from_env(cls) -> Self:
        return cls.from_mapping({MAX_LINE_LENGTH_KEY: os.environ.get(MAX_LINE_LENGTH_ENV, "")})
