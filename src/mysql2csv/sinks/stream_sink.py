# src/mysql2csv/sinks/stream_sink.py
"""Non-closing sink over a process-wide text stream (normally stdout)."""

from __future__ import annotations

from typing import TextIO

from mysql2csv.contracts.errors import SinkError
from mysql2csv.sinks.base import BaseSink

STDOUT_LABEL = "<stdout>"


class StreamSink(BaseSink):
    """Write to a stream this sink does not own.

    close() flushes the stream and marks the sink closed, but never closes
    the stream itself, so successive result sets can share it for the whole
    process lifetime.
    """

    def __init__(self, stream: TextIO, *, label: str = STDOUT_LABEL) -> None:
        self._stream = stream
        self._label = label
        self._closed = False

    @property
    def destination(self) -> str:
        return self._label

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> int:
        if self._closed:
            raise SinkError(self._label, ValueError("write to closed sink"))
        try:
            return self._stream.write(text)
        except (OSError, UnicodeError) as e:
            raise SinkError(self._label, e) from e

    def flush(self) -> None:
        try:
            self._stream.flush()
        except (OSError, UnicodeError) as e:
            raise SinkError(self._label, e) from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.flush()
