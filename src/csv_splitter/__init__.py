"""CSV Splitter - Split large CSV files into header-prefixed parts."""

from csv_splitter.errors import EmptyInputError, InvalidArgumentError, SplitError
from csv_splitter.naming import PartNamer
from csv_splitter.sizes import format_size, parse_size
from csv_splitter.split.engine import PartitionEngine
from csv_splitter.split.policy import ByLines, ByMaxSize, ByPartCount
from csv_splitter.split.types import SplitResult

__all__ = [
    "ByLines",
    "ByMaxSize",
    "ByPartCount",
    "EmptyInputError",
    "InvalidArgumentError",
    "PartNamer",
    "PartitionEngine",
    "SplitError",
    "SplitResult",
    "format_size",
    "parse_size",
]
