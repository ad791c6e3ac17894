# src/mysql2csv/core/database.py
"""Query execution over SQLAlchemy.

Uses SQLAlchemy only for URL handling, dialect/driver loading and the
connection itself. The query is executed on the raw DBAPI cursor so that
multi-statement queries expose every result set through cursor.nextset().

MySQL (PyMySQL) connections are opened with CLIENT.MULTI_STATEMENTS and an
unbuffered server-side cursor, so rows are fetched as they are streamed
rather than loaded into memory up front.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from mysql2csv.contracts.errors import (
    ConfigurationError,
    ConnectivityError,
    QueryExecutionError,
    ResultReadError,
)
from mysql2csv.core.config import ConnectionSettings, redact
from mysql2csv.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FETCH_SIZE = 1000


def _is_pymysql(url: URL) -> bool:
    return url.get_backend_name() == "mysql" and url.get_driver_name() == "pymysql"


def _engine_url(url: URL) -> URL:
    """Add CLIENT.MULTI_STATEMENTS to the client_flag carried in the URL query.

    The pymysql dialect builds its client_flag from the URL and ORs in its own
    flags (FOUND_ROWS). A client_flag in connect_args would replace them.
    """
    if not _is_pymysql(url):
        return url

    from pymysql.constants import CLIENT

    try:
        flag = int(url.query.get("client_flag", 0))
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid client_flag in database URL: {url.query['client_flag']!r}") from None
    return url.update_query_dict({"client_flag": str(flag | CLIENT.MULTI_STATEMENTS)})


def _connect_args(url: URL) -> dict[str, Any]:
    """Driver-specific connect arguments for streaming result sets."""
    if not _is_pymysql(url):
        return {}

    from pymysql.cursors import SSCursor

    return {"cursorclass": SSCursor}


class DBAPIQueryCursor:
    """QueryCursor over a DBAPI cursor.

    Statements that produce no result set (SET, INSERT, ...) are skipped, so
    the cursor is only ever positioned on a result set that has columns.

    Args:
        cursor: DBAPI cursor on which the query has already been executed
        dbapi_error: The driver's base exception class (PEP 249 ``Error``)
        fetch_size: Rows requested per fetchmany() call
        query: Query text, reported when a later statement fails
        url: Sanitized connection URL, reported when a later statement fails
        secret: Password to redact from driver error messages
    """

    def __init__(
        self,
        cursor: Any,
        *,
        dbapi_error: type[Exception] = Exception,
        fetch_size: int = DEFAULT_FETCH_SIZE,
        query: str = "",
        url: str = "",
        secret: str | None = None,
    ) -> None:
        if fetch_size <= 0:
            raise ValueError(f"fetch_size must be positive, got {fetch_size}")
        self._cursor = cursor
        self._dbapi_error = dbapi_error
        self._fetch_size = fetch_size
        self._query = query
        self._url = url
        self._secret = secret
        self._closed = False
        self._has_result_set = cursor.description is not None or self._advance()

    @property
    def has_result_set(self) -> bool:
        return self._has_result_set

    @property
    def columns(self) -> list[str]:
        description = self._cursor.description
        if not self._has_result_set or description is None:
            raise RuntimeError("Cursor is not positioned on a result set")
        return [column[0] for column in description]

    def rows(self) -> Iterator[Sequence[Any]]:
        while True:
            try:
                batch = self._cursor.fetchmany(self._fetch_size)
            except self._dbapi_error as e:
                raise ResultReadError(f"Error reading result set: {e}") from e
            if not batch:
                return
            yield from batch

    def next_result_set(self) -> bool:
        self._has_result_set = self._advance()
        return self._has_result_set

    def _advance(self) -> bool:
        """Move to the next statement that has columns.

        With multi-statement queries the driver reports a failing later
        statement from nextset(), so that failure is an execution error.
        """
        nextset = getattr(self._cursor, "nextset", None)
        if nextset is None:
            return False
        while True:
            try:
                more = nextset()
            except self._dbapi_error as e:
                raise QueryExecutionError(self._query, self._url, redact(str(e), self._secret)) from None
            if not more:
                return False
            if self._cursor.description is not None:
                return True

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cursor.close()


class Database:
    """Connection factory for one export run.

    Pooling is disabled: a run opens exactly one connection and releases it
    when execute() exits.
    """

    def __init__(self, settings: ConnectionSettings, *, fetch_size: int = DEFAULT_FETCH_SIZE) -> None:
        self._settings = settings
        self._url = settings.to_url()
        self._sanitized_url = settings.sanitized_url()
        self._secret = settings.secret
        self._fetch_size = fetch_size

    @property
    def sanitized_url(self) -> str:
        return self._sanitized_url

    def _create_engine(self) -> Engine:
        try:
            return create_engine(_engine_url(self._url), poolclass=NullPool, connect_args=_connect_args(self._url))
        except (ArgumentError, NoSuchModuleError, ImportError) as e:
            raise ConfigurationError(
                f"Cannot load database driver for ({self._sanitized_url}): {redact(str(e), self._secret)}"
            ) from None

    @contextmanager
    def execute(self, query: str) -> Iterator[DBAPIQueryCursor]:
        """Execute a query and yield a cursor positioned on its first result set.

        The cursor, connection and engine are released when the block exits,
        whether it exits normally or by exception.

        Raises:
            ConnectivityError: If the connection cannot be established
            QueryExecutionError: If the query fails
        """
        engine = self._create_engine()
        try:
            try:
                connection = engine.raw_connection()
            except SQLAlchemyError as e:
                raise ConnectivityError(self._sanitized_url, redact(str(e), self._secret)) from None

            try:
                dbapi_error: type[Exception] = engine.dialect.loaded_dbapi.Error
                cursor = connection.cursor()
                logger.debug("Executing query", url=self._sanitized_url)
                try:
                    cursor.execute(query)
                except dbapi_error as e:
                    cursor.close()
                    raise QueryExecutionError(query, self._sanitized_url, redact(str(e), self._secret)) from None

                try:
                    query_cursor = DBAPIQueryCursor(
                        cursor,
                        dbapi_error=dbapi_error,
                        fetch_size=self._fetch_size,
                        query=query,
                        url=self._sanitized_url,
                        secret=self._secret,
                    )
                except QueryExecutionError:
                    cursor.close()
                    raise
                try:
                    yield query_cursor
                finally:
                    query_cursor.close()
            finally:
                connection.close()
        finally:
            engine.dispose()

