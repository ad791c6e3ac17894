# tests/property/test_routing_properties.py
"""Property-based tests for output routing and CSV streaming.

ROUTING INVARIANTS:
1. A template without a placeholder maps every index to the same destination
2. An indexed template maps distinct indices to distinct filenames
3. %0Nd renders exactly N digits for any index that fits in N digits
4. Streaming then parsing a result set returns the same text values
"""

from __future__ import annotations

import csv
import io

from hypothesis import given
from hypothesis import strategies as st

from mysql2csv.core.templates import OutputTemplate, creates_multiple_files
from mysql2csv.engine.streamer import stream_result_set
from mysql2csv.sinks.resolver import SinkResolver
from mysql2csv.sinks.stream_sink import StreamSink

# Filename text that cannot contain a placeholder
static_names = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters="-_."),
    min_size=1,
    max_size=20,
)
indices = st.integers(min_value=0, max_value=10**6)

# Cell text: printable text plus separators, quotes and line breaks
cell_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc"), whitelist_characters="\r\n\t"),
    max_size=30,
)


class _ListResultSet:
    def __init__(self, columns: list[str], rows: list[list[str]]) -> None:
        self._columns = columns
        self._rows = rows

    @property
    def columns(self) -> list[str]:
        return self._columns

    def rows(self):
        yield from self._rows


class TestTemplateProperties:
    """Filename derivation from output templates."""

    @given(name=static_names, first=indices, second=indices)
    def test_static_template_single_destination(self, name: str, first: int, second: int) -> None:
        template = OutputTemplate.parse(name + ".csv")

        assert not creates_multiple_files(template.raw)
        assert template.filename(first) == template.filename(second) == name + ".csv"

    @given(prefix=static_names, suffix=static_names, pair=st.lists(indices, min_size=2, max_size=2, unique=True))
    def test_indexed_template_distinct_filenames(self, prefix: str, suffix: str, pair: list[int]) -> None:
        template = OutputTemplate.parse(f"{prefix}%d{suffix}")
        first, second = pair

        assert creates_multiple_files(template.raw)
        assert template.filename(first) != template.filename(second)

    @given(width=st.integers(min_value=1, max_value=9), data=st.data())
    def test_zero_padded_width(self, width: int, data: st.DataObject) -> None:
        index = data.draw(st.integers(min_value=0, max_value=10**width - 1))
        template = OutputTemplate.parse(f"out-%0{width}d.csv")

        numeral = template.filename(index).removeprefix("out-").removesuffix(".csv")

        assert len(numeral) == width
        assert int(numeral) == index

    @given(index=indices)
    def test_stdout_resolves_to_shared_stream(self, index: int) -> None:
        stream = io.StringIO()
        sink = SinkResolver("", stdout=stream).resolve(index)

        assert isinstance(sink, StreamSink)
        assert sink.destination == "<stdout>"


class TestStreamingProperties:
    """CSV output parses back to the values that were streamed."""

    @given(
        data=st.data(),
        width=st.integers(min_value=1, max_value=5),
    )
    def test_csv_round_trip(self, data: st.DataObject, width: int) -> None:
        columns = data.draw(st.lists(cell_text, min_size=width, max_size=width))
        rows = data.draw(st.lists(st.lists(cell_text, min_size=width, max_size=width), max_size=10))
        stream = io.StringIO()

        written = stream_result_set(_ListResultSet(columns, rows), StreamSink(stream, label="<stdout>"))

        parsed = list(csv.reader(io.StringIO(stream.getvalue(), newline="")))
        assert written == len(rows)
        assert parsed == [columns, *rows]
