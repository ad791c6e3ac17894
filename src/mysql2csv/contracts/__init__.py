"""Shared contracts: error types and result set protocols.

This is a leaf package: it imports nothing else from mysql2csv.
"""

from mysql2csv.contracts.errors import (
    ConfigurationError,
    ConnectivityError,
    InvalidTemplateError,
    Mysql2CsvError,
    QueryExecutionError,
    ResultReadError,
    SchemaConsistencyError,
    SinkError,
    StreamIOError,
)
from mysql2csv.contracts.results import (
    ExportResult,
    QueryCursor,
    ResultSet,
    ResultSetOutcome,
)

__all__ = [
    # errors
    "ConfigurationError",
    "ConnectivityError",
    "InvalidTemplateError",
    "Mysql2CsvError",
    "QueryExecutionError",
    "ResultReadError",
    "SchemaConsistencyError",
    "SinkError",
    "StreamIOError",
    # results
    "ExportResult",
    "QueryCursor",
    "ResultSet",
    "ResultSetOutcome",
]
