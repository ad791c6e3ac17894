# src/mysql2csv/sinks/base.py
"""Sink base class.

A sink is the writable destination for ONE result set. The engine opens
it (via SinkResolver), writes CSV text into it, and closes it exactly once
with a ``with`` block.

Two variants exist, selected once at resolve time:
- StreamSink: wraps a process-wide stream (stdout); close() only flushes
- FileSink: owns a file handle; close() releases it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self


class BaseSink(ABC):
    """Base class for sinks.

    Subclass and implement write(), flush(), close(). Sinks are file-like
    enough to be handed straight to csv.writer().

    Lifecycle:
        1. write(text)  -- called repeatedly with CSV-encoded records
        2. flush()      -- push buffered text to the destination
        3. close()      -- release resources; safe to call more than once

    Errors:
        write(), flush() and close() raise SinkError for any I/O failure.
    """

    @property
    @abstractmethod
    def destination(self) -> str:
        """Path (or stream label) of the destination, for logs and errors."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        """True once close() has been called."""

    @abstractmethod
    def write(self, text: str) -> int:
        """Write text. Returns the number of characters written."""

    @abstractmethod
    def flush(self) -> None:
        """Flush buffered output to the destination."""

    @abstractmethod
    def close(self) -> None:
        """Release the sink."""

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.destination!r})"
