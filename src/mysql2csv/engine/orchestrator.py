# src/mysql2csv/engine/orchestrator.py
"""Export orchestration: route every result set of a query to its sink.

Run loop, per result set:
1. Compare its column names with the previous result set's
2. If they differ and the output does not fan out, abort before the
   sink for this result set is even opened
3. Resolve the sink for the current sequence index
4. Stream header + rows into it (the sink is closed by the streamer)
5. Advance the cursor; increment the index

Everything is sequential. One result set is fully written and its sink
closed before the next one is requested from the cursor.
"""

from __future__ import annotations

from typing import TextIO

from mysql2csv.contracts.errors import SchemaConsistencyError
from mysql2csv.contracts.results import ExportResult, QueryCursor, ResultSetOutcome
from mysql2csv.core.config import ExportSettings
from mysql2csv.core.database import Database
from mysql2csv.core.logging import get_logger
from mysql2csv.engine.streamer import stream_result_set
from mysql2csv.sinks.resolver import SinkResolver

logger = get_logger(__name__)


class ExportOrchestrator:
    """Drive the result-set-to-sink routing loop for one run.

    Example:
        resolver = SinkResolver("out-%03d.csv", stdout=sys.stdout)
        orchestrator = ExportOrchestrator(resolver)
        with database.execute(query) as cursor:
            result = orchestrator.run(cursor)
    """

    def __init__(self, resolver: SinkResolver, *, suppress_header: bool = False) -> None:
        self._resolver = resolver
        self._suppress_header = suppress_header

    def run(self, cursor: QueryCursor) -> ExportResult:
        """Stream every result set of the cursor.

        The cursor is NOT closed here; its owner releases it.

        Returns:
            ExportResult with one outcome per result set

        Raises:
            SchemaConsistencyError: If result sets sharing one sink differ in columns
            QueryExecutionError: If a later statement of the query fails
            ResultReadError: If reading from the cursor fails
            SinkError: If a sink cannot be opened or written
        """
        fans_out = self._resolver.fans_out
        outcomes: list[ResultSetOutcome] = []
        previous_columns: list[str] | None = None
        index = 0

        has_result_set = cursor.has_result_set
        while has_result_set:
            columns = list(cursor.columns)
            if previous_columns is not None and columns != previous_columns and not fans_out:
                raise SchemaConsistencyError(index, previous_columns, columns)
            previous_columns = columns

            sink = self._resolver.resolve(index)
            destination = sink.destination
            rows_written = stream_result_set(cursor, sink, suppress_header=self._suppress_header)

            outcomes.append(
                ResultSetOutcome(
                    index=index,
                    destination=destination,
                    columns=tuple(columns),
                    rows_written=rows_written,
                )
            )
            logger.debug(
                "Result set written",
                index=index,
                destination=destination,
                columns=len(columns),
                rows=rows_written,
            )

            has_result_set = cursor.next_result_set()
            index += 1

        if not outcomes:
            logger.warning("Query produced no result sets; nothing was written")

        return ExportResult(outcomes=tuple(outcomes))


def run_export(settings: ExportSettings, *, stdout: TextIO) -> ExportResult:
    """Execute the configured query and export every result set.

    Args:
        settings: Validated export settings
        stdout: Stream used when the output template is empty

    Raises:
        Mysql2CsvError: Any failure; see mysql2csv.contracts.errors
    """
    resolver = SinkResolver(settings.template, stdout=stdout)
    orchestrator = ExportOrchestrator(resolver, suppress_header=settings.no_header)
    database = Database(settings.connection)

    with database.execute(settings.query) as cursor:
        result = orchestrator.run(cursor)

    logger.info(
        "Export complete",
        url=database.sanitized_url,
        result_sets=result.result_sets,
        rows=result.rows_written,
        destinations=result.destinations,
    )
    return result
