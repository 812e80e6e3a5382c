"""Shared constants and data structures for splitting."""

from dataclasses import dataclass, field
from pathlib import Path

from csv_splitter.split.policy import SplitPolicy

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Part indices are zero-padded to this width in output file names.
PART_NUMBER_WIDTH = 3

# Header capture reads at most this many bytes looking for the first terminator.
MAX_HEADER_LENGTH = 16 * 1024 * 1024

LINE_TERMINATOR = b"\n"


@dataclass(frozen=True, slots=True)
class InputFile:
    """The source file, with its header captured once before splitting."""

    path: Path
    size: int
    header_bytes: bytes

    @property
    def header(self) -> str:
        return self.header_bytes.rstrip(b"\r\n").decode("utf-8", errors="replace")

    @property
    def header_length(self) -> int:
        return len(self.header_bytes)

    @property
    def data_size(self) -> int:
        return self.size - self.header_length


@dataclass
class Part:
    """One output file. Size includes the header, line_count does not."""

    index: int
    path: Path
    size: int = 0
    line_count: int = 0


@dataclass
class SplitResult:
    """Outcome of one split invocation."""

    policy: SplitPolicy
    parts: list[Part] = field(default_factory=list)
    bytes_processed: int = 0
    lines_processed: int = 0

    @property
    def part_count(self) -> int:
        return len(self.parts)
