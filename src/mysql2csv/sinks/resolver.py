# src/mysql2csv/sinks/resolver.py
"""Sink resolution: which destination does result set N go to?

Resolution rules, by template:
- "" (empty): StreamSink over the injected stdout stream
- with %d / %0Nd: FileSink at the formatted filename, created/truncated
- static filename: FileSink at that path, created/truncated the first time
  it is resolved in a run and opened for append afterwards, so every result
  set routed there lands in the same file

The resolver is stateful for exactly that reason: it remembers which paths
it has already truncated during this run.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from mysql2csv.core.logging import get_logger
from mysql2csv.core.templates import OutputTemplate, creates_multiple_files
from mysql2csv.sinks.base import BaseSink
from mysql2csv.sinks.file_sink import FileSink
from mysql2csv.sinks.stream_sink import StreamSink

logger = get_logger(__name__)


class SinkResolver:
    """Resolve output sinks for successive result sets.

    Args:
        template: Output template (string or parsed OutputTemplate)
        stdout: Stream used when the template is empty. Never closed here.
        encoding: Encoding for file sinks

    Raises:
        InvalidTemplateError: If the template string is invalid
    """

    def __init__(self, template: OutputTemplate | str, *, stdout: TextIO, encoding: str = "utf-8") -> None:
        self._template = template if isinstance(template, OutputTemplate) else OutputTemplate.parse(template)
        self._stdout = stdout
        self._encoding = encoding
        self._opened: set[Path] = set()

    @property
    def template(self) -> OutputTemplate:
        return self._template

    @property
    def fans_out(self) -> bool:
        """True if each result set gets its own file."""
        return creates_multiple_files(self._template.raw)

    def resolve(self, index: int) -> BaseSink:
        """Open the sink for the result set at this sequence index.

        Raises:
            SinkError: If the file cannot be created or opened
        """
        if self._template.is_stdout:
            return StreamSink(self._stdout)

        path = Path(self._template.filename(index))
        mode = "append" if path in self._opened else "write"
        sink = FileSink(path, mode=mode, encoding=self._encoding)
        self._opened.add(path)
        logger.debug("Resolved output sink", index=index, path=str(path), mode=mode)
        return sink
