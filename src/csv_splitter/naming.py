"""Output path naming for generated parts."""

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from csv_splitter.split.types import PART_NUMBER_WIDTH

NamingStrategy: TypeAlias = Callable[[int], Path]


class PartNamer:
    """
    Name parts as <base>_part<NNN><ext> next to the input file.

    The file name is split at its last "." (no dot means no extension). The
    index is zero-padded to `width` and simply grows wider past that.
    """

    def __init__(
        self,
        input_path: str | Path,
        output_dir: str | Path | None = None,
        width: int = PART_NUMBER_WIDTH,
    ):
        input_file = Path(input_path)
        base, dot, ext = input_file.name.rpartition(".")
        if not dot:
            base, ext = input_file.name, ""
        else:
            ext = dot + ext

        self._base = base
        self._ext = ext
        self._width = width
        self._dir = Path(output_dir) if output_dir is not None else input_file.parent

    def __call__(self, part_index: int) -> Path:
        return self._dir / f"{self._base}_part{part_index:0{self._width}d}{self._ext}"
