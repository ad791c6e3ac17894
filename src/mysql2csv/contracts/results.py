# src/mysql2csv/contracts/results.py
"""Result set contracts shared by the database layer and the engine.

The engine never touches a DBAPI cursor directly. It sees a QueryCursor
positioned on one result set at a time, and advances it explicitly.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultSet(Protocol):
    """One tabular result: fixed column names plus a lazy row iterator.

    Row values are opaque. The streamer renders them as text without any
    type-aware formatting.
    """

    @property
    def columns(self) -> list[str]:
        """Column names of the current result set, in order."""
        ...

    def rows(self) -> Iterator[Sequence[Any]]:
        """Yield rows of the current result set.

        Raises:
            ResultReadError: If a row cannot be read
        """
        ...


@runtime_checkable
class QueryCursor(ResultSet, Protocol):
    """Cursor over one or more result sets produced by a single query.

    Lifecycle:
    1. Cursor starts positioned on the first result set, if there is one
       (has_result_set is False when the query produced none)
    2. columns / rows() describe and drain the current result set
    3. next_result_set() advances, returning False when exhausted
    4. close() releases the underlying driver cursor
    """

    @property
    def has_result_set(self) -> bool:
        """True while the cursor is positioned on a result set."""
        ...

    def next_result_set(self) -> bool:
        """Advance to the next result set. Returns False when none remain."""
        ...

    def close(self) -> None:
        """Release driver resources."""
        ...


@dataclass(frozen=True, slots=True)
class ResultSetOutcome:
    """Summary of one streamed result set."""

    index: int
    destination: str
    columns: tuple[str, ...]
    rows_written: int


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Summary of a complete export run."""

    outcomes: tuple[ResultSetOutcome, ...] = field(default_factory=tuple)

    @property
    def result_sets(self) -> int:
        return len(self.outcomes)

    @property
    def rows_written(self) -> int:
        return sum(outcome.rows_written for outcome in self.outcomes)

    @property
    def destinations(self) -> list[str]:
        """Distinct destinations in first-written order."""
        return list(dict.fromkeys(outcome.destination for outcome in self.outcomes))
