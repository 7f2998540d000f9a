import logging
import os
import time
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import pairwise, repeat

from split_line_reader.config import ReaderConfig
from split_line_reader.reader import SplitLineReader
from split_line_reader.runner.execution import (
    SLR_EXECUTOR_ENV,
    describe_executor,
    get_executor_class,
    is_gil_enabled,
)
from split_line_reader.streams.types import FileSplit

logger = logging.getLogger(__name__)

# Each process receives 4 splits at a time.
PROCESS_POOL_CHUNKSIZE = 4


@dataclass(frozen=True, slots=True)
class SplitResult:
    """Lines emitted by one split and where its reader started and stopped."""

    split: FileSplit
    lines: list[bytes]
    aligned_start: int
    end_pos: int


def read_split(split: FileSplit, config: ReaderConfig | None = None) -> SplitResult:
    """Read every line owned by split."""
    with SplitLineReader(split, config=config) as reader:
        lines = list(reader)
        return SplitResult(split, lines, reader.start, reader.get_pos())


def splits_are_contiguous(splits: Sequence[FileSplit]) -> bool:
    """
    True if splits tile one file from offset 0 without gaps or overlaps.

    Whether the last split reaches the end of the file is not checked.
    """
    if not splits:
        return True
    if splits[0].start != 0:
        return False
    return all(
        cur.path == prev.path and cur.start == prev.end for prev, cur in pairwise(splits)
    )


def read_splits(
    splits: Sequence[FileSplit],
    workers: int | None = None,
    config: ReaderConfig | None = None,
    executor: str | None = None,
) -> list[bytes]:
    """
    Read all splits and return their lines in split order.

    Splits are read independently with the executor picked by
    get_executor_class(executor); the output order follows the input order no matter
    which worker finishes first.
    """
    total_start = time.perf_counter()

    if not splits_are_contiguous(splits):
        logger.warning(
            "Splits do not tile the file contiguously from offset 0; lines may be missing or repeated"
        )

    executor_class = get_executor_class(executor)
    executor_name = describe_executor(executor_class)

    gil_status = "enabled" if is_gil_enabled() else "disabled"
    workers_desc = "auto" if workers is None else str(workers)
    executor_override = os.environ.get(SLR_EXECUTOR_ENV, "")
    override_info = f", SLR_EXECUTOR={executor_override}" if executor_override else ""

    logger.info(
        f"Starting: splits={len(splits)}, workers={workers_desc}, "
        f"executor={executor_name}, GIL={gil_status}{override_info}"
    )

    if executor_class is None:
        results = [read_split(split, config) for split in splits]
    else:
        with executor_class(max_workers=workers) as pool:
            if executor_name == "processes":
                results = list(
                    pool.map(read_split, splits, repeat(config), chunksize=PROCESS_POOL_CHUNKSIZE)
                )
            else:
                results = list(pool.map(read_split, splits, repeat(config)))

    lines: list[bytes] = []
    for result in results:
        logger.debug(
            "%s [%d, %d): %d lines, aligned start %d, stopped at %d",
            result.split.path,
            result.split.start,
            result.split.end,
            len(result.lines),
            result.aligned_start,
            result.end_pos,
        )
        lines.extend(result.lines)

    total_time = time.perf_counter() - total_start
    logger.info("Read %d lines from %d splits in %.2fs", len(lines), len(splits), total_time)
    return lines
