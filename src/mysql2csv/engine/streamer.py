# src/mysql2csv/engine/streamer.py
"""Stream one result set into a sink as CSV.

CSV format: comma delimiter, double-quote quoting (QUOTE_MINIMAL) with
embedded quotes doubled, CRLF record terminators. Fields containing the
delimiter, a quote, CR or LF are quoted.

Rows are pulled lazily from the result set and written one record at a
time. Nothing beyond the current row is held in memory.
"""

from __future__ import annotations

import csv
from typing import Any

from mysql2csv.contracts.errors import ResultReadError
from mysql2csv.contracts.results import ResultSet
from mysql2csv.sinks.base import BaseSink


def render_value(value: Any) -> str:
    """Render a column value as CSV field text.

    NULL becomes an empty field. Byte strings are decoded as UTF-8
    (undecodable bytes become U+FFFD). Everything else uses the driver's
    own textual form via str().
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray | memoryview):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def stream_result_set(result_set: ResultSet, sink: BaseSink, *, suppress_header: bool = False) -> int:
    """Write a result set to a sink and close the sink.

    The sink is closed exactly once on every exit path. On error, output
    already written is flushed (by close) and left in place.

    Args:
        result_set: Result set to drain
        sink: Destination; owned by this call from here on
        suppress_header: If True, omit the column-name record

    Returns:
        Number of data rows written (excluding the header)

    Raises:
        ResultReadError: If a row cannot be read or has the wrong width
        SinkError: If the sink cannot be written
    """
    with sink:
        columns = list(result_set.columns)
        writer = csv.writer(sink)

        if not suppress_header:
            writer.writerow(columns)

        # Reused for every row
        record = [""] * len(columns)
        rows_written = 0
        for row in result_set.rows():
            if len(row) != len(record):
                raise ResultReadError(
                    f"Malformed row {rows_written + 1}: expected {len(record)} values, got {len(row)}"
                )
            for i, value in enumerate(row):
                record[i] = render_value(value)
            writer.writerow(record)
            rows_written += 1

        sink.flush()
    return rows_written
