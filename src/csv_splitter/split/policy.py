"""Split policies: exactly one is active per split invocation."""

from dataclasses import dataclass
from typing import TypeAlias

from csv_splitter.errors import InvalidArgumentError
from csv_splitter.sizes import format_size


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise InvalidArgumentError(f"{name} must be positive, got {value}")


@dataclass(frozen=True, slots=True)
class ByLines:
    """Cut after every `lines` data lines."""

    lines: int

    def __post_init__(self) -> None:
        _require_positive("Lines per part", self.lines)

    def describe(self) -> str:
        return f"parts of {self.lines} lines each"


@dataclass(frozen=True, slots=True)
class ByMaxSize:
    """Roll over once a part (header included) reaches `max_bytes`."""

    max_bytes: int

    def __post_init__(self) -> None:
        _require_positive("Max size", self.max_bytes)

    def describe(self) -> str:
        return f"parts of maximum {format_size(self.max_bytes)}"


@dataclass(frozen=True, slots=True)
class ByPartCount:
    """Target a number of parts; streamed as a derived ByMaxSize."""

    parts: int

    def __post_init__(self) -> None:
        _require_positive("Number of parts", self.parts)

    def resolve(self, data_size: int) -> ByMaxSize:
        """Convert to ByMaxSize(ceil(data_size / parts)), at least one byte."""
        per_part = -(-data_size // self.parts)
        return ByMaxSize(max(per_part, 1))

    def describe(self) -> str:
        return f"{self.parts} parts"


SplitPolicy: TypeAlias = ByLines | ByMaxSize | ByPartCount
