"""Command line interface for DBML Designer."""

import sys
from collections.abc import Iterable
from json import JSONDecodeError, dumps, loads
from pathlib import Path
from sys import stdout
from typing import Any, Literal

from cyclopts import App
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from dbml import schema_to_dbml
from ddl import SQLEngine, schema_to_sql
from schema import (
    EXAMPLE_SCHEMA,
    Schema,
    SchemaDocumentError,
    SchemaStatistics,
    SchemaStore,
    action_from_document,
    schema_from_document,
    schema_statistics,
    schema_to_document,
)

app = App(help="DBML Designer CLI tool")

console = Console()
err_console = Console(stderr=True)

# Constants
JSON_EXTENSIONS = {".json"}
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4321


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def validate_document_location(location: Path) -> None:
    """Validate that a JSON document exists."""
    if not location.exists():
        print_error(f"File does not exist: {location}")
        sys.exit(1)


def validate_document_extension(
    location: Path,
    file_extensions: Iterable[str],
) -> None:
    """Validate document file extension."""
    if location.suffix.lower() not in file_extensions:
        print_error(
            f"File has invalid extension, expected: {', '.join(file_extensions)}",
        )
        sys.exit(1)


def read_json(location: Path) -> Any:  # noqa: ANN401
    """Read a JSON document, exiting with an error when it is unreadable."""
    validate_document_location(location)
    validate_document_extension(location, JSON_EXTENSIONS)
    try:
        return loads(location.read_text(encoding="utf-8"))
    except (JSONDecodeError, UnicodeDecodeError) as e:
        print_error(f"Invalid JSON in {location}: {e}")
        sys.exit(1)


def load_schema(location: Path) -> Schema:
    """Load a schema document from disk."""
    document = read_json(location)
    try:
        return schema_from_document(document)
    except SchemaDocumentError as e:
        print_error(f"Invalid schema document {location}: {e}")
        sys.exit(1)


def format_statistics_table(statistics: SchemaStatistics) -> None:
    """Format schema statistics as rich tables."""
    table = Table(title="Schema Statistics", show_header=False)
    table.add_column("Metric", style="bold blue")
    table.add_column("Count", justify="right")
    table.add_row("Tables", str(statistics.tables))
    table.add_row("Fields", str(statistics.fields))
    table.add_row("Relationships", str(statistics.relationships))
    table.add_row("Foreign keys", str(statistics.foreign_keys))
    table.add_row("Primary keys", str(statistics.primary_keys))
    table.add_row("Unique fields", str(statistics.unique_fields))
    table.add_row("Not null fields", str(statistics.not_null_fields))
    console.print(table)

    if not statistics.field_types:
        return

    types = Table(title="Field Types")
    types.add_column("Type", style="bold cyan")
    types.add_column("Fields", justify="right")
    for field_type, count in sorted(statistics.field_types.items()):
        types.add_row(field_type, str(count))
    console.print(types)


@app.command
def dbml(schema_location: Path) -> None:
    """Print the DBML of a schema document."""
    schema = load_schema(schema_location)
    stdout.write(schema_to_dbml(schema))


@app.command
def sql(schema_location: Path, engine: SQLEngine = "postgres") -> None:
    """Export a schema document as SQL."""
    schema = load_schema(schema_location)
    print_info(f"Target engine: {engine}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
    ) as progress:
        progress.add_task("Generating SQL...", total=None)
        code = schema_to_sql(schema, engine)

    if code is None:
        print_error(f"Could not export schema to {engine}")
        sys.exit(1)

    stdout.write(code)
    print_success("SQL export completed successfully")


@app.command
def diagram(
    schema_location: Path,
    fmt: Literal["svg", "html"] = "svg",
    *,
    server: str | None = None,
) -> None:
    """Render a schema document as an ER diagram.

    Parameters
    ----------
    schema_location
        JSON schema document.
    fmt
        Output format.
    server
        URL of a remote rendering endpoint; rendered locally when omitted.

    """
    from requests import RequestException

    from dbml import DBMLParseError
    from diagram import dbml_to_svg, fetch_svg, svg_to_html

    schema = load_schema(schema_location)
    source = schema_to_dbml(schema)
    print_info(f"Output format: {fmt}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
    ) as progress:
        progress.add_task("Rendering diagram...", total=None)
        try:
            svg = fetch_svg(source, server) if server else dbml_to_svg(source)
        except DBMLParseError as e:
            print_error(f"Could not render diagram: {e}")
            sys.exit(1)
        except RequestException as e:
            print_error(f"Rendering endpoint failed: {e}")
            sys.exit(1)

    if fmt == "html":
        title = f"ER Diagram - {schema_location.stem}"
        stdout.write(svg_to_html(svg, title=title, dbml=source))
    else:
        stdout.write(svg)
    print_success("Diagram generation completed successfully")


@app.command
def stats(schema_location: Path) -> None:
    """Show statistics about a schema document."""
    schema = load_schema(schema_location)
    format_statistics_table(schema_statistics(schema))


@app.command
def apply(schema_location: Path, actions_location: Path) -> None:
    """Apply a JSON list of edit actions and print the resulting schema."""
    store = SchemaStore(load_schema(schema_location))
    documents = read_json(actions_location)
    if not isinstance(documents, list):
        print_error("Actions document must be a JSON list")
        sys.exit(1)

    for index, document in enumerate(documents):
        try:
            store.dispatch(action_from_document(document))
        except SchemaDocumentError as e:
            print_error(f"Invalid action #{index}: {e}")
            sys.exit(1)

    stdout.write(dumps(schema_to_document(store.schema), indent=2))
    print_success(f"Applied {len(documents)} actions")


@app.command
def example() -> None:
    """Print the example schema document."""
    stdout.write(dumps(schema_to_document(EXAMPLE_SCHEMA), indent=2))


@app.command
def serve(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Serve the diagram rendering endpoint over HTTP."""
    try:
        import uvicorn
    except ImportError:
        print_error("Serving requires [server] extra dependencies")
        sys.exit(1)

    print_info(f"Listening on http://{host}:{port}/api/svg")
    uvicorn.run("diagram.server:app", host=host, port=port)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
