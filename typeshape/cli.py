"""Command-line interface for typeshape."""

import json
import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__, config
from .generator import infer_schema
from .issues import SchemaDefinitionError
from .json_schema import to_json_schema
from .loader import load_document, load_schema_file, write_schema
from .logging_config import setup_logging

log = logging.getLogger(__name__)

app = typer.Typer(
    help="typeshape: validate data against schema documents",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: str = typer.Option(
        config.LOG_LEVEL, "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs",
        help="Emit log lines as JSON",
    ),
):
    """Configure logging before any command runs."""
    try:
        setup_logging(level=log_level, log_file=config.LOG_FILE, json_format=json_logs)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level")


def _load_schema_or_exit(schema_path: Path):
    try:
        return load_schema_file(schema_path)
    except (OSError, UnicodeDecodeError, SchemaDefinitionError, yaml.YAMLError) as exc:
        err_console.print(f"[red]Cannot load schema {schema_path}: {exc}[/red]", soft_wrap=True)
        raise typer.Exit(2)


def _load_data_or_exit(data_path: Path):
    try:
        return load_document(data_path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        err_console.print(f"[red]Cannot read data {data_path}: {exc}[/red]", soft_wrap=True)
        raise typer.Exit(2)


@app.command()
def validate(
    schema_path: Path = typer.Argument(..., help="Schema document (.yaml/.yml/.json)"),
    data_path: Path = typer.Argument(..., help="Data file to check (YAML or JSON)"),
):
    """Validate a data file against a schema document."""
    schema = _load_schema_or_exit(schema_path)
    data = _load_data_or_exit(data_path)

    outcome = schema.validate(data)
    log.info(
        "Validated %s against %s", data_path, schema_path,
        extra={"schema_kind": schema.kind().value, "issue_count": len(outcome.issues)},
    )
    if outcome.success:
        console.print(f"[green]✓ {data_path} is valid[/green]", soft_wrap=True)
        return

    table = Table(title=f"{len(outcome.issues)} issue(s) in {data_path.name}")
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Code", style="magenta", no_wrap=True)
    table.add_column("Message")
    for item in outcome.issues:
        path = ".".join(str(p) for p in item.path) or "(root)"
        table.add_row(Text(path), item.code.value, Text(item.message))
    console.print(table)
    raise typer.Exit(1)


@app.command()
def infer(
    data_path: Path = typer.Argument(..., help="Example data file (YAML or JSON)"),
    output: Path = typer.Option(
        None, "--output", "-o",
        help="Write the schema here instead of printing it",
    ),
):
    """Infer a schema document from an example data file."""
    schema = infer_schema(_load_data_or_exit(data_path))
    if output:
        write_schema(schema, output)
        console.print(f"[dim]Schema written to {output}[/dim]")
        return
    typer.echo(yaml.safe_dump(to_json_schema(schema), sort_keys=False), nl=False)


@app.command()
def show(
    schema_path: Path = typer.Argument(..., help="Schema document (.yaml/.yml/.json)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of YAML"),
):
    """Print the normalised JSON-Schema of a schema document."""
    doc = to_json_schema(_load_schema_or_exit(schema_path))
    if as_json:
        typer.echo(json.dumps(doc, indent=2))
    else:
        typer.echo(yaml.safe_dump(doc, sort_keys=False), nl=False)


@app.command()
def version():
    """Print the installed version."""
    console.print(f"typeshape {__version__}")


if __name__ == "__main__":
    app()
