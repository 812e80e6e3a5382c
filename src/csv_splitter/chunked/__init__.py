"""Fixed-size chunk readers and buffered writers used by every split policy."""

from csv_splitter.chunked.reader import ChunkedReader
from csv_splitter.chunked.writer import ChunkedWriter

__all__ = ["ChunkedReader", "ChunkedWriter"]
