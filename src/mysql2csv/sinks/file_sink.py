# src/mysql2csv/sinks/file_sink.py
"""Sink that owns a file handle."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Literal

from mysql2csv.contracts.errors import SinkError
from mysql2csv.sinks.base import BaseSink

FileMode = Literal["write", "append"]

_OPEN_MODES: dict[FileMode, str] = {"write": "w", "append": "a"}


class FileSink(BaseSink):
    """Write CSV text to a file.

    Config options:
        path: Output file path
        mode: "write" (create/truncate, default) or "append" (keep existing content)
        encoding: File encoding (default: "utf-8")

    The file is opened immediately. Parent directories are not created:
    a missing directory is a SinkError, like any other filesystem failure.
    """

    def __init__(self, path: Path | str, *, mode: FileMode = "write", encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._mode = mode
        try:
            # newline="" so csv.writer's record terminators reach the file untranslated
            self._file: IO[str] | None = open(  # noqa: SIM115 - handle kept open for streaming writes, closed in close()
                self._path, _OPEN_MODES[mode], encoding=encoding, newline=""
            )
        except OSError as e:
            raise SinkError(str(self._path), e) from e

    @property
    def path(self) -> Path:
        return self._path

    @property
    def mode(self) -> FileMode:
        return self._mode

    @property
    def destination(self) -> str:
        return str(self._path)

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, text: str) -> int:
        if self._file is None:
            raise SinkError(str(self._path), ValueError("write to closed sink"))
        try:
            return self._file.write(text)
        except (OSError, UnicodeError) as e:
            raise SinkError(str(self._path), e) from e

    def flush(self) -> None:
        if self._file is None:
            return
        try:
            self._file.flush()
        except (OSError, UnicodeError) as e:
            raise SinkError(str(self._path), e) from e

    def close(self) -> None:
        """Close the file handle."""
        if self._file is None:
            return
        file, self._file = self._file, None
        try:
            file.close()
        except (OSError, UnicodeError) as e:
            raise SinkError(str(self._path), e) from e
