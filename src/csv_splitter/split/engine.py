"""Streaming partition engine shared by every split policy."""

import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from csv_splitter.chunked import ChunkedReader, ChunkedWriter
from csv_splitter.errors import EmptyInputError, HeaderTooLongError, InvalidArgumentError
from csv_splitter.naming import NamingStrategy, PartNamer
from csv_splitter.progress import PROGRESS_INTERVAL, ProgressReporter, ProgressSnapshot
from csv_splitter.sizes import format_size
from csv_splitter.split.policy import ByLines, ByMaxSize, ByPartCount, SplitPolicy
from csv_splitter.split.types import (
    BUFFER_SIZE,
    LINE_TERMINATOR,
    MAX_HEADER_LENGTH,
    InputFile,
    Part,
    SplitResult,
)

logger = logging.getLogger(__name__)


def read_input_file(
    input_path: str | Path, max_header_length: int = MAX_HEADER_LENGTH
) -> InputFile:
    """
    Capture the size and the raw header line (terminator included) of a file.

    At most `max_header_length` bytes are read; a longer first line is rejected.
    """
    path = Path(input_path)
    with open(path, "rb") as handle:
        header_bytes = handle.readline(max_header_length)
        size = os.fstat(handle.fileno()).st_size

    if not header_bytes:
        raise EmptyInputError(f"Empty CSV file: {path}")
    if not header_bytes.endswith(LINE_TERMINATOR) and len(header_bytes) < size:
        raise HeaderTooLongError(
            f"No line terminator in the first {max_header_length} bytes of {path}"
        )
    return InputFile(path=path, size=size, header_bytes=header_bytes)


@dataclass
class _SplitContext:
    """Counters and handles owned by a single split invocation."""

    result: SplitResult
    reporter: ProgressReporter
    part: Part | None = None
    writer: ChunkedWriter | None = None
    ends_mid_line: bool = False


class PartitionEngine:
    """
    Split one input file into header-prefixed parts in a single sequential pass.

    The header is read once here; every split starts reading right after it.
    Parts are opened lazily, so a part only exists once it has data to hold
    (or when the input has no data at all, in which case one header-only part
    is written).
    """

    def __init__(
        self,
        input_path: str | Path,
        namer: NamingStrategy | None = None,
        chunk_size: int = BUFFER_SIZE,
        write_buffer_size: int = BUFFER_SIZE,
        progress_interval: float = PROGRESS_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        if chunk_size < 1:
            raise InvalidArgumentError(f"chunk_size must be positive, got {chunk_size}")
        if write_buffer_size < 1:
            raise InvalidArgumentError(
                f"write_buffer_size must be positive, got {write_buffer_size}"
            )

        self.input = read_input_file(input_path)
        self._namer = namer if namer is not None else PartNamer(self.input.path)
        self._chunk_size = chunk_size
        self._write_buffer_size = write_buffer_size
        self._progress_interval = progress_interval
        self._clock = clock

    def split_by_lines(self, lines_per_part: int) -> SplitResult:
        return self.split(ByLines(lines_per_part))

    def split_by_size(self, max_bytes: int) -> SplitResult:
        return self.split(ByMaxSize(max_bytes))

    def split_by_parts(self, number_of_parts: int) -> SplitResult:
        return self.split(ByPartCount(number_of_parts))

    def split(self, policy: SplitPolicy) -> SplitResult:
        """
        Stream the data region into parts according to `policy`.

        ByPartCount is resolved to a ByMaxSize before streaming. ByMaxSize
        checks its cap before each chunk, so for `max_bytes` at or above the
        header length a part can exceed it by up to `chunk_size - 1` bytes.
        Every part holds at least one data byte.
        """
        if isinstance(policy, ByPartCount):
            resolved = policy.resolve(self.input.data_size)
            logger.info(
                "Approximate size per part for %d parts: %s",
                policy.parts,
                format_size(resolved.max_bytes),
            )
            policy = resolved

        if isinstance(policy, ByLines):
            route = partial(self._route_by_lines, lines_per_part=policy.lines)
        elif isinstance(policy, ByMaxSize):
            route = partial(self._route_by_size, max_bytes=policy.max_bytes)
        else:
            raise InvalidArgumentError(f"Unsupported split policy: {policy!r}")

        logger.info(
            "Starting: file=%s, size=%s, splitting into %s",
            self.input.path.name,
            format_size(self.input.size),
            policy.describe(),
        )

        start = time.perf_counter()
        ctx = _SplitContext(
            result=SplitResult(policy=policy),
            reporter=ProgressReporter(
                self.input.size, interval=self._progress_interval, clock=self._clock
            ),
        )

        try:
            with ChunkedReader(
                self.input.path,
                offset=self.input.header_length,
                chunk_size=self._chunk_size,
            ) as reader:
                for chunk in reader:
                    route(ctx, chunk)
                    ctx.result.bytes_processed += len(chunk)
                    ctx.ends_mid_line = not chunk.endswith(LINE_TERMINATOR)
                    ctx.reporter.update(self._snapshot(ctx))

            if not ctx.result.parts:
                # Header-only input still yields one part.
                self._open_part(ctx)

            if ctx.ends_mid_line:
                # The unterminated last line still counts as a line.
                ctx.part.line_count += 1
                ctx.result.lines_processed += 1

            if ctx.part is not None:
                self._close_part(ctx)

        finally:
            if ctx.writer is not None:
                ctx.writer.close()

        ctx.reporter.finish(ctx.result, time.perf_counter() - start)
        return ctx.result

    def _route_by_lines(self, ctx: _SplitContext, chunk: bytes, lines_per_part: int) -> None:
        view = memoryview(chunk)
        start = 0
        end = len(chunk)
        newlines = chunk.count(LINE_TERMINATOR)

        while start < end:
            if ctx.part is None:
                self._open_part(ctx)

            remaining = lines_per_part - ctx.part.line_count
            if newlines < remaining:
                self._write(ctx, view[start:], newlines)
                return

            # Cut right after the `remaining`-th terminator.
            cut = start
            for _ in range(remaining):
                cut = chunk.index(LINE_TERMINATOR, cut) + 1

            self._write(ctx, view[start:cut], remaining)
            self._close_part(ctx)
            start = cut
            newlines -= remaining

    def _route_by_size(self, ctx: _SplitContext, chunk: bytes, max_bytes: int) -> None:
        view = memoryview(chunk)
        start = 0
        end = len(chunk)

        while start < end:
            if ctx.part is None or ctx.part.size >= max_bytes:
                if ctx.part is not None:
                    self._close_part(ctx)
                self._open_part(ctx)

            # A part below the cap takes the rest of the chunk. A fresh part whose
            # header already meets the cap takes up to max_bytes + chunk_size - 1.
            budget = max_bytes + self._chunk_size - 1 - ctx.part.size
            stop = min(start + budget, end) if budget >= 1 else end

            self._write(ctx, view[start:stop], chunk.count(LINE_TERMINATOR, start, stop))
            start = stop

    def _open_part(self, ctx: _SplitContext) -> None:
        index = len(ctx.result.parts) + 1
        path = self._namer(index)

        ctx.writer = ChunkedWriter(path, buffer_size=self._write_buffer_size)
        ctx.part = Part(index=index, path=path)
        ctx.result.parts.append(ctx.part)

        ctx.writer.write(self.input.header_bytes)
        ctx.part.size = self.input.header_length
        ctx.reporter.part_opened(ctx.part)

    def _write(self, ctx: _SplitContext, data: bytes | memoryview, lines: int) -> None:
        ctx.writer.write(data)
        ctx.part.size += len(data)
        ctx.part.line_count += lines
        ctx.result.lines_processed += lines

    def _close_part(self, ctx: _SplitContext) -> None:
        writer = ctx.writer
        ctx.writer = None
        ctx.part = None
        writer.close()

    def _snapshot(self, ctx: _SplitContext) -> ProgressSnapshot:
        return ProgressSnapshot(
            part_index=len(ctx.result.parts),
            bytes_processed=ctx.result.bytes_processed,
            lines_processed=ctx.result.lines_processed,
            total_size=self.input.size,
        )
