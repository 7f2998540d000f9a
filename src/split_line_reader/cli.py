"""Command-line interface for split line reader."""

import argparse
import logging
import os
import sys
from dataclasses import replace

from split_line_reader.codec.framed_zstd import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_LEVEL,
    compress_file,
    read_block_index,
)
from split_line_reader.config import ReaderConfig
from split_line_reader.errors import SplitReaderError
from split_line_reader.runner import read_splits
from split_line_reader.runner.execution import EXECUTOR_MODES, SLR_EXECUTOR_ENV
from split_line_reader.streams.types import FileSplit

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def parse_split_arg(value: str) -> tuple[int, int]:
    """Parse START:LENGTH into a pair of non-negative integers."""
    start, sep, length = value.partition(":")
    try:
        if not sep:
            raise ValueError
        parsed = int(start), int(length)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected START:LENGTH, got {value!r}") from None
    if parsed[0] < 0 or parsed[1] < 0:
        raise argparse.ArgumentTypeError(f"START and LENGTH must be >= 0, got {value!r}")
    return parsed


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    parser = argparse.ArgumentParser(
        prog="split-line-reader",
        description="Read lines of plain or block-compressed files split by byte range.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    read_parser = subparsers.add_parser("read", parents=[common], help="Print the lines of one or more splits")
    read_parser.add_argument("input_file", help="File to read (.zblk or plain text)")
    read_parser.add_argument(
        "--split",
        dest="splits",
        action="append",
        type=parse_split_arg,
        metavar="START:LENGTH",
        help="Byte range to read; repeat for several splits (default: the whole file)",
    )
    read_parser.add_argument(
        "--max-line-length",
        type=int,
        default=None,
        help="Keep at most this many bytes per line (default: unbounded)",
    )
    read_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: auto)",
    )
    read_parser.add_argument(
        "--executor",
        choices=sorted(EXECUTOR_MODES),
        default=None,
        help=f"How splits are run (default: {SLR_EXECUTOR_ENV} env var, else auto by GIL status)",
    )
    read_parser.add_argument(
        "--count",
        action="store_true",
        help="Print the number of lines instead of the lines",
    )

    pack_parser = subparsers.add_parser("pack", parents=[common], help="Write a .zblk block-compressed file")
    pack_parser.add_argument("input_file", help="File to compress")
    pack_parser.add_argument("output_file", help="Destination .zblk file")
    pack_parser.add_argument(
        "--block-size",
        type=int,
        default=DEFAULT_BLOCK_SIZE,
        help=f"Decoded bytes per block (default: {DEFAULT_BLOCK_SIZE})",
    )
    pack_parser.add_argument(
        "--level",
        type=int,
        default=DEFAULT_LEVEL,
        help=f"zstd compression level (default: {DEFAULT_LEVEL})",
    )

    blocks_parser = subparsers.add_parser("blocks", parents=[common], help="List block offsets of a .zblk file")
    blocks_parser.add_argument("input_file", help="A .zblk file")

    return parser


def run_read(args: argparse.Namespace) -> None:
    config = ReaderConfig.from_env()
    if args.max_line_length is not None:
        config = replace(config, max_line_length=args.max_line_length)

    if args.splits:
        splits = [FileSplit(args.input_file, start, length) for start, length in args.splits]
    else:
        splits = [FileSplit(args.input_file, 0, os.path.getsize(args.input_file))]

    lines = read_splits(splits, workers=args.workers, config=config, executor=args.executor)

    if args.count:
        print(len(lines))
        return

    out = sys.stdout.buffer
    for line in lines:
        out.write(line)
        out.write(b"\n")
    out.flush()


def run_pack(args: argparse.Namespace) -> None:
    offsets = compress_file(args.input_file, args.output_file, block_size=args.block_size, level=args.level)
    logger.info("Wrote %d blocks to %s", len(offsets), args.output_file)


def run_blocks(args: argparse.Namespace) -> None:
    for offset in read_block_index(args.input_file):
        print(offset)


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    if getattr(args, "max_line_length", None) is not None and args.max_line_length <= 0:
        parser.error(f"--max-line-length must be positive, got {args.max_line_length}")
    if getattr(args, "block_size", None) is not None and args.block_size <= 0:
        parser.error(f"--block-size must be positive, got {args.block_size}")

    commands = {"read": run_read, "pack": run_pack, "blocks": run_blocks}
    try:
        commands[args.command](args)
    except SplitReaderError as exc:
        logger.error("%s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
