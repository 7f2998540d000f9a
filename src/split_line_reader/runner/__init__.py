"""Reading lists of splits, serially or in parallel."""

from split_line_reader.runner.read import (
    SplitResult,
    read_split,
    read_splits,
    splits_are_contiguous,
)

__all__ = ["SplitResult", "read_split", "read_splits", "splits_are_contiguous"]
