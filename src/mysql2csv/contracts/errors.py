# src/mysql2csv/contracts/errors.py
"""Exception hierarchy for mysql2csv.

Every failure is terminal for the run. The CLI catches Mysql2CsvError,
prints the message to stderr and exits non-zero. Messages never carry
credentials: connection details are always passed in sanitized form.
"""


class Mysql2CsvError(Exception):
    """Base class for all mysql2csv errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigurationError(Mysql2CsvError):
    """Raised for unusable input: empty query, invalid settings, bad template."""


class InvalidTemplateError(ConfigurationError):
    """Raised when an output template cannot be resolved to a filename.

    Attributes:
        template: The offending template string
        reason: Human-readable description of the problem
    """

    def __init__(self, template: str, reason: str) -> None:
        self.template = template
        self.reason = reason
        super().__init__(f"Invalid output template '{template}': {reason}")


# =============================================================================
# Database
# =============================================================================


class ConnectivityError(Mysql2CsvError):
    """Raised when the data source cannot be reached or authenticated against.

    Attributes:
        url: Sanitized connection URL (password removed)
    """

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        super().__init__(f"Error connecting to database ({url}): {detail}")


class QueryExecutionError(Mysql2CsvError):
    """Raised when the query itself fails.

    Attributes:
        query: The query text that was executed
        url: Sanitized connection URL (password removed)
    """

    def __init__(self, query: str, url: str, detail: str) -> None:
        self.query = query
        self.url = url
        super().__init__(f"Error executing query ({query}) on ({url}): {detail}")


# =============================================================================
# Output routing
# =============================================================================


class SchemaConsistencyError(Mysql2CsvError):
    """Raised when result sets with different shapes would share one sink.

    Raised before the sink for the offending result set is opened, so no
    row of that result set reaches the output.

    Attributes:
        index: Sequence index of the offending result set
        previous_columns: Column names of the preceding result set
        columns: Column names of the offending result set
    """

    def __init__(self, index: int, previous_columns: list[str], columns: list[str]) -> None:
        self.index = index
        self.previous_columns = previous_columns
        self.columns = columns
        if len(columns) != len(previous_columns):
            detail = f"{len(previous_columns)} columns, then {len(columns)} columns"
        else:
            detail = f"columns {previous_columns}, then {columns}"
        super().__init__(
            f"Result set {index} does not match the previous result set ({detail}). "
            "Result sets written to stdout or a single file must have the same columns; "
            "use an output template containing %d to write one file per result set"
        )


class StreamIOError(Mysql2CsvError):
    """Base class for I/O failures while streaming a result set."""


class SinkError(StreamIOError):
    """Raised when a sink cannot be created or written to.

    Attributes:
        destination: Path (or "<stdout>") of the failing sink
    """

    def __init__(self, destination: str, cause: BaseException) -> None:
        self.destination = destination
        super().__init__(f"Error writing output ({destination}): {cause}")


class ResultReadError(StreamIOError):
    """Raised when a row cannot be read from a result set."""
