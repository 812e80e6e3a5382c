"""Pull-based fixed-size chunk reader over the data region of a file."""

from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from csv_splitter.errors import InvalidArgumentError
from csv_splitter.split.types import BUFFER_SIZE


class ChunkedReader:
    """
    Read a file in fixed-size chunks starting at `offset`.

    Not restartable: once end of stream is reached the file is closed and
    every further read returns b"".
    """

    def __init__(self, path: str | Path, offset: int = 0, chunk_size: int = BUFFER_SIZE):
        if chunk_size < 1:
            raise InvalidArgumentError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size
        self._handle: BinaryIO | None = open(path, "rb")  # noqa: SIM115
        try:
            self._handle.seek(offset)
        except BaseException:
            self._handle.close()
            raise

    @property
    def closed(self) -> bool:
        return self._handle is None

    def read_chunk(self) -> bytes:
        """Return the next non-empty chunk, or b"" at end of stream."""
        if self._handle is None:
            return b""

        chunk = self._handle.read(self._chunk_size)
        if not chunk:
            self.close()
        return chunk

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __iter__(self) -> Iterator[bytes]:
        while chunk := self.read_chunk():
            yield chunk

    def __enter__(self) -> "ChunkedReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
