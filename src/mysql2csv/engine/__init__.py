# src/mysql2csv/engine/__init__.py
"""Export engine: result set streaming and sink routing.

- stream_result_set: write one result set to one sink as CSV
- ExportOrchestrator: route every result set of a cursor to its sink
- run_export: execute a query from settings and export its results

Example:
    from mysql2csv.core.config import build_export_settings, resolve_connection_settings
    from mysql2csv.engine import run_export

    settings = build_export_settings(
        query="SELECT * FROM a; SELECT * FROM b",
        output="out-%03d.csv",
        connection=resolve_connection_settings(database="shop"),
    )
    result = run_export(settings, stdout=sys.stdout)
"""

from mysql2csv.engine.orchestrator import ExportOrchestrator, run_export
from mysql2csv.engine.streamer import render_value, stream_result_set

__all__ = [
    "ExportOrchestrator",
    "render_value",
    "run_export",
    "stream_result_set",
]
