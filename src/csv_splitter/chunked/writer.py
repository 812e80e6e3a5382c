"""Buffered byte sink for a single output part."""

from pathlib import Path
from typing import BinaryIO

from csv_splitter.errors import InvalidArgumentError
from csv_splitter.split.types import BUFFER_SIZE


class ChunkedWriter:
    """
    Append bytes to a file opened with a `buffer_size` write buffer.

    Buffered bytes reach the file whenever the buffer fills, and on close().
    The target is truncated on open.
    """

    def __init__(self, path: str | Path, buffer_size: int = BUFFER_SIZE):
        if buffer_size < 1:
            raise InvalidArgumentError(f"buffer_size must be positive, got {buffer_size}")
        self.path = Path(path)
        self._handle: BinaryIO | None = open(  # noqa: SIM115
            self.path, "wb", buffering=buffer_size
        )
        self.bytes_written = 0

    @property
    def closed(self) -> bool:
        return self._handle is None

    def write(self, data: bytes | memoryview) -> None:
        if self._handle is None:
            raise ValueError(f"write to closed part {self.path}")

        self._handle.write(data)
        self.bytes_written += len(data)

    def close(self) -> None:
        """Flush everything buffered and close the file. Later calls do nothing."""
        if self._handle is None:
            return

        handle = self._handle
        self._handle = None
        handle.close()

    def __enter__(self) -> "ChunkedWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
