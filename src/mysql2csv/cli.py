# src/mysql2csv/cli.py
"""mysql2csv Command Line Interface.

Entry point for the mysql2csv CLI tool.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import TextIO

import typer

from mysql2csv import __version__
from mysql2csv.contracts.errors import ConfigurationError, Mysql2CsvError

__all__ = [
    "app",
    "main",
]

OUTPUT_HELP = (
    "The file to write the output to. If not provided, the output will be written to stdout. "
    "Add %d to create multiple files with a number in the filename. "
    "%0Nd will prefix the number with zeros to create a string of length N. "
    "For example, -o output-%03d.csv will create files output-000.csv, output-001.csv, etc."
)

app = typer.Typer(
    name="mysql2csv",
    help="Execute a query against a MySQL database and output the results as CSV.",
    # -h is --host, as in the mysql client
    context_settings={"help_option_names": ["--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mysql2csv version {__version__}")
        raise typer.Exit()


def _load_dotenv(env_file: Path | None = None) -> bool:
    """Load environment variables from .env file.

    Args:
        env_file: Explicit path to .env file. If None, searches for .env
                 in current directory and parent directories.

    Returns:
        True if .env was found and loaded, False otherwise.

    Raises:
        typer.Exit: If explicit env_file path doesn't exist.
    """
    from dotenv import find_dotenv, load_dotenv

    if env_file is not None:
        if not env_file.exists():
            typer.secho(
                f"error: .env file not found: {env_file}",
                fg=typer.colors.RED,
                err=True,
            )
            raise typer.Exit(1)
        return load_dotenv(env_file, override=False)

    # Search from the working directory, not from this module's location
    return load_dotenv(find_dotenv(usecwd=True), override=False)


def _csv_stdout() -> TextIO:
    """Return sys.stdout with newline translation turned off.

    CSV records already end in CRLF; a translating stream would write CR CR LF.
    """
    stdout = sys.stdout
    if isinstance(stdout, io.TextIOWrapper):
        stdout.reconfigure(newline="")
    return stdout


def _read_query(execute: str | None) -> str:
    """Return the query from --execute, falling back to piped stdin.

    Raises:
        ConfigurationError: If no query was given and stdin is a terminal
    """
    if execute is not None and execute.strip():
        return execute

    stdin = sys.stdin
    if stdin is None or stdin.isatty():
        raise ConfigurationError("A query must be provided")
    return stdin.read()


@app.command()
def export(
    database: str | None = typer.Argument(
        None,
        help="Database to use. Defaults to $MYSQL_DATABASE.",
        show_default=False,
    ),
    execute: str | None = typer.Option(
        None,
        "--execute",
        "-e",
        help="The query to execute. If not provided, the query will be read from stdin.",
    ),
    user: str | None = typer.Option(
        None,
        "--user",
        "-u",
        help="MySQL username [env: MYSQL_USER, MYSQL_USERNAME; default: root]",
        show_default=False,
    ),
    password: str | None = typer.Option(
        None,
        "--password",
        "-p",
        help="MySQL password [env: MYSQL_PASSWORD]",
        show_default=False,
    ),
    host: str | None = typer.Option(
        None,
        "--host",
        "-h",
        help="MySQL host [env: MYSQL_HOST; default: 127.0.0.1]",
        show_default=False,
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-P",
        help="MySQL port [env: MYSQL_PORT; default: 3306]",
        show_default=False,
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        help="Full SQLAlchemy database URL; overrides the discrete connection options [env: MYSQL2CSV_URL]",
        show_default=False,
    ),
    no_header: bool = typer.Option(
        False,
        "--no-header",
        help="Do not output the column names as the first row.",
    ),
    output: str = typer.Option(
        "",
        "--output",
        "-o",
        help=OUTPUT_HELP,
        show_default=False,
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose/debug logging (to stderr).",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Output structured JSON logs (for machine processing).",
    ),
    no_dotenv: bool = typer.Option(
        False,
        "--no-dotenv",
        help="Skip loading .env file.",
    ),
    env_file: Path | None = typer.Option(
        None,
        "--env-file",
        help="Path to .env file (skips automatic search).",
        exists=False,  # We handle existence check ourselves for better error message
    ),
) -> None:
    """Execute a query and output every result set as CSV."""
    from mysql2csv.core.config import build_export_settings, resolve_connection_settings
    from mysql2csv.core.logging import configure_logging
    from mysql2csv.engine.orchestrator import run_export

    configure_logging(json_output=json_logs, level="DEBUG" if verbose else "WARNING")

    if not no_dotenv:
        _load_dotenv(env_file=env_file)
    elif env_file is not None:
        typer.secho(
            "Warning: --env-file ignored because --no-dotenv is set.",
            fg=typer.colors.YELLOW,
            err=True,
        )

    try:
        connection = resolve_connection_settings(
            url=url,
            user=user,
            password=password,
            host=host,
            port=port,
            database=database,
        )
        settings = build_export_settings(
            query=_read_query(execute),
            output=output,
            no_header=no_header,
            connection=connection,
        )
        run_export(settings, stdout=_csv_stdout())
    except Mysql2CsvError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1) from None


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
