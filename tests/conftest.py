# tests/conftest.py
"""Shared test fixtures and helpers.

Test doubles:
- FakeCursor: in-memory QueryCursor over a list of (columns, rows) result sets
- FailingStream: text stream whose write() raises OSError

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import io
import os
import sqlite3
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from mysql2csv.contracts.errors import ResultReadError
from mysql2csv.core.config import CONNECTION_ENV_VARS

# =============================================================================
# Test doubles
# =============================================================================


class FakeCursor:
    """In-memory QueryCursor.

    Args:
        result_sets: (columns, rows) pairs, in order
        fail_at: Optional (result_set_index, row_index) at which rows() raises
            ResultReadError instead of yielding the row
    """

    def __init__(
        self,
        result_sets: Sequence[tuple[Sequence[str], Sequence[Sequence[Any]]]],
        *,
        fail_at: tuple[int, int] | None = None,
    ) -> None:
        self._result_sets = [(list(cols), [tuple(r) for r in rows]) for cols, rows in result_sets]
        self._position = 0
        self._fail_at = fail_at
        self.rows_yielded: list[int] = [0] * len(self._result_sets)
        self.closed = False

    @property
    def has_result_set(self) -> bool:
        return self._position < len(self._result_sets)

    @property
    def columns(self) -> list[str]:
        return list(self._result_sets[self._position][0])

    def rows(self) -> Iterator[Sequence[Any]]:
        position = self._position
        for i, row in enumerate(self._result_sets[position][1]):
            if self._fail_at == (position, i):
                raise ResultReadError(f"simulated read failure at row {i}")
            self.rows_yielded[position] += 1
            yield row

    def next_result_set(self) -> bool:
        self._position += 1
        return self.has_result_set

    def close(self) -> None:
        self.closed = True


class FailingStream(io.StringIO):
    """StringIO that raises OSError on write, like a closed pipe or a full disk."""

    def write(self, s: str) -> int:
        raise OSError(28, "No space left on device")


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_connection_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove connection environment variables so the host environment cannot leak in."""
    for names in CONNECTION_ENV_VARS.values():
        for name in names:
            # setenv registers the variable, so teardown also removes values a .env file loaded
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)


@pytest.fixture
def stdout() -> io.StringIO:
    """In-memory replacement for the process stdout stream."""
    return io.StringIO()


@pytest.fixture
def fake_cursor() -> type[FakeCursor]:
    """The FakeCursor class, for tests that build their own result sets."""
    return FakeCursor


@pytest.fixture
def failing_stream() -> FailingStream:
    return FailingStream()


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    """SQLite database with two small tables.

    people(id INTEGER, name TEXT, note TEXT)  - 3 rows, one NULL note
    pets(name TEXT, owner_id INTEGER)          - 2 rows
    """
    path = tmp_path / "fixture.db"
    con = sqlite3.connect(path)
    try:
        con.executescript(
            """
            CREATE TABLE people (id INTEGER, name TEXT, note TEXT);
            INSERT INTO people VALUES (1, 'alice', 'likes, commas');
            INSERT INTO people VALUES (2, 'bob', NULL);
            INSERT INTO people VALUES (3, 'carol', 'said "hi"');
            CREATE TABLE pets (name TEXT, owner_id INTEGER);
            INSERT INTO pets VALUES ('rex', 1);
            INSERT INTO pets VALUES ('tom', 3);
            """
        )
        con.commit()
    finally:
        con.close()
    return path


# =============================================================================
# Hypothesis profiles
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
