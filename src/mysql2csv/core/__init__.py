# src/mysql2csv/core/__init__.py
"""Core infrastructure: Configuration, Templates, Database, Logging."""

from mysql2csv.core.config import (
    ConnectionSettings,
    ExportSettings,
    build_export_settings,
    redact,
    resolve_connection_settings,
    sanitize_url,
)
from mysql2csv.core.logging import configure_logging, get_logger
from mysql2csv.core.templates import OutputTemplate, creates_multiple_files

__all__ = [
    "ConnectionSettings",
    "ExportSettings",
    "OutputTemplate",
    "build_export_settings",
    "configure_logging",
    "creates_multiple_files",
    "get_logger",
    "redact",
    "resolve_connection_settings",
    "sanitize_url",
]
