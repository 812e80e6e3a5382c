"""Command-line interface for the CSV splitter."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from csv_splitter.errors import InvalidArgumentError, SplitError
from csv_splitter.naming import PartNamer
from csv_splitter.sizes import format_size, parse_size
from csv_splitter.split.engine import PartitionEngine
from csv_splitter.split.policy import ByLines, ByMaxSize, ByPartCount, SplitPolicy
from csv_splitter.split.types import BUFFER_SIZE

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def positive_int(value: str) -> int:
    """argparse type for counts that must be >= 1."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def size_value(value: str) -> int:
    """argparse type for size strings such as 1024, 10K or 100MB."""
    try:
        size = parse_size(value)
    except InvalidArgumentError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if size < 1:
        raise argparse.ArgumentTypeError(f"size must be positive, got {value!r}")
    return size


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="csv-splitter",
        description="Split a large CSV file into parts, repeating the header in each.",
        epilog="Size examples: 1024 (bytes), 10K, 100MB, 1GB, 2TB",
    )

    parser.add_argument("input_file", help="Path to the CSV file to split")

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-p",
        "--parts",
        type=positive_int,
        help="Split into the given number of parts",
    )
    mode.add_argument(
        "-l",
        "--lines",
        type=positive_int,
        help="Split into parts of the given number of data lines",
    )
    mode.add_argument(
        "-s",
        "--size",
        type=size_value,
        help="Split into parts of at most this size (e.g. 100MB)",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the part files (default: next to the input)",
    )

    parser.add_argument(
        "--chunk-size",
        type=size_value,
        default=BUFFER_SIZE,
        help="Read chunk size; size limits may overshoot by up to this much (default: 1MB)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def build_policy(args: argparse.Namespace) -> SplitPolicy:
    """Turn the selected mode into a split policy."""
    if args.parts is not None:
        return ByPartCount(args.parts)
    if args.lines is not None:
        return ByLines(args.lines)
    return ByMaxSize(args.size)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    policy = build_policy(args)

    try:
        if args.output_dir is not None:
            Path(args.output_dir).mkdir(parents=True, exist_ok=True)

        engine = PartitionEngine(
            args.input_file,
            namer=PartNamer(args.input_file, output_dir=args.output_dir),
            chunk_size=args.chunk_size,
        )
        result = engine.split(policy)
    except (SplitError, OSError) as exc:
        logger.error("Error: %s", exc)
        return 1

    print(
        f"Split completed: {result.part_count} parts created, "
        f"total size: {format_size(result.bytes_processed)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
