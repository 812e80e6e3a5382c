"""Conversions between byte counts and human-readable size strings."""

import re

from csv_splitter.errors import InvalidArgumentError

SIZE_PATTERN = re.compile(r"^([0-9]+)\s*([KMGT]B?)?$", re.IGNORECASE)

UNIT_MULTIPLIERS = {
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}


def parse_size(size_str: str) -> int:
    """
    Parse a size string such as "1024", "10K", "100MB" or "10 kb" into bytes.

    Units are binary (K = 1024) and case-insensitive.
    """
    match = SIZE_PATTERN.match(size_str.strip())
    if not match:
        raise InvalidArgumentError(
            f"Invalid size format {size_str!r}. Examples: 1024, 10K, 100MB, 1GB"
        )

    size = int(match.group(1))
    unit = match.group(2)
    if unit is not None:
        multiplier = UNIT_MULTIPLIERS.get(unit.upper())
        if multiplier is None:
            raise InvalidArgumentError(f"Invalid size unit: {unit}")
        size *= multiplier

    return size


def format_size(num_bytes: int) -> str:
    """Render a byte count as B, KB, MB or GB with one decimal."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024**2:
        return f"{num_bytes / 1024:.1f} KB"
    if num_bytes < 1024**3:
        return f"{num_bytes / 1024**2:.1f} MB"
    return f"{num_bytes / 1024**3:.1f} GB"
