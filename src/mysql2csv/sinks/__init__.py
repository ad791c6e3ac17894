"""Output sinks for CSV result sets.

Sinks are resolved per result set by SinkResolver:
    resolver = SinkResolver("out-%03d.csv", stdout=sys.stdout)
    with resolver.resolve(0) as sink:
        ...
"""

from mysql2csv.sinks.base import BaseSink
from mysql2csv.sinks.file_sink import FileSink
from mysql2csv.sinks.resolver import SinkResolver
from mysql2csv.sinks.stream_sink import StreamSink

__all__ = [
    "BaseSink",
    "FileSink",
    "SinkResolver",
    "StreamSink",
]
