"""Command-line interface for writable-table files."""

from __future__ import annotations

import csv
import logging
import sys
from pathlib import Path

import click

from .config import load_print_config, resolve_config_path
from .exceptions import ValidationError, WritableTableError
from .models import Justification, PrintConfig
from .table import Column, ColumnType, Table
from .writable import DEFAULT_HEAD, WritableTable

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    click.echo(f"✗ {message}", err=True)
    sys.exit(1)


def _read_table(path: str) -> WritableTable:
    return WritableTable.from_bytes(Path(path).read_bytes())


def _parse_column_types(entries: tuple[str, ...]) -> dict[str, ColumnType]:
    """Parse repeated NAME:TYPE options."""
    types: dict[str, ColumnType] = {}
    for entry in entries:
        name, sep, type_name = entry.rpartition(":")
        if not sep or not name:
            raise ValidationError("column", entry, "Expected NAME:TYPE (e.g., 'Age:int')")
        types[name] = ColumnType.from_name(type_name)
    return types


@click.group()
@click.version_option(package_name="writable-table")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """writable-table: aligned console tables with a compact binary form."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "--column",
    "-c",
    "column_specs",
    multiple=True,
    help="Column type as NAME:TYPE (string, int, float, bool). Repeatable; default: string.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML print configuration stored with the table.",
)
@click.option("--delimiter", default=",", show_default=True, help="CSV field delimiter.")
@click.option("--force", is_flag=True, help="Overwrite existing output file.")
def import_csv(
    csv_file: str,
    output: str,
    column_specs: tuple[str, ...],
    config_path: str | None,
    delimiter: str,
    force: bool,
) -> None:
    """Convert a CSV file (first row = headers) into a table file."""
    output_path = Path(output)
    if output_path.exists() and not force:
        click.echo(f"File already exists: {output_path}", err=True)
        click.echo("Use --force to overwrite.", err=True)
        sys.exit(1)

    try:
        types = _parse_column_types(column_specs)
        with open(csv_file, newline="", encoding="utf-8") as f:
            records = list(csv.reader(f, delimiter=delimiter))

        headers = records[0] if records else []
        unknown = [name for name in types if name not in headers]
        if unknown:
            raise ValidationError("column", unknown[0], "Not present in CSV header")

        columns = [Column(name, types.get(name, ColumnType.STRING)) for name in headers]
        table = Table(columns)
        for line_no, record in enumerate(records[1:], start=2):
            if len(record) != len(columns):
                raise ValidationError(
                    f"line {line_no}",
                    record,
                    f"Expected {len(columns)} fields, got {len(record)}",
                )
            table.add_row([c.type.parse(text, c.name) for c, text in zip(columns, record)])

        writable = WritableTable.from_table(table)
        resolved = resolve_config_path(config_path)
        if resolved is not None:
            writable.configure(load_print_config(resolved))

        data = writable.to_bytes()
        output_path.write_bytes(data)
        logger.debug("Wrote %d bytes to %s", len(data), output_path)
    except (WritableTableError, OSError, UnicodeDecodeError, csv.Error) as e:
        _fail(f"Import failed: {e}")
        return

    click.echo(f"✓ Wrote {len(writable)} rows x {len(writable.columns)} columns to {output_path}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--head",
    type=click.IntRange(min=0),
    default=None,
    help=f"Number of rows to print (default: {DEFAULT_HEAD}).",
)
@click.option("--all", "show_all", is_flag=True, help="Print every row.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="YAML print configuration overriding the stored one.",
)
@click.option(
    "--justify",
    type=click.Choice(["left", "right"], case_sensitive=False),
    default=None,
    help="Cell justification.",
)
@click.option("--padding", type=click.IntRange(min=1), default=None, help="Padding per column.")
@click.option("--pad-char", default=None, help="Character used to pad cells.")
@click.option("--headers/--no-headers", default=None, help="Print the header line.")
def show(
    file: str,
    head: int | None,
    show_all: bool,
    config_path: str | None,
    justify: str | None,
    padding: int | None,
    pad_char: str | None,
    headers: bool | None,
) -> None:
    """Print a table file as aligned columns.

    The configuration stored in the file is used, then the config file,
    then the options given here.
    """
    try:
        table = _read_table(file)
        resolved = resolve_config_path(config_path)
        if resolved is not None:
            table.configure(load_print_config(resolved, base=table.config))
        if justify is not None:
            table.set_justification(Justification.from_name(justify))
        if padding is not None:
            table.set_padding(padding)
        if pad_char is not None:
            table.set_pad_char(pad_char)
        if headers is not None:
            table.set_show_headers(headers)
    except (WritableTableError, OSError) as e:
        _fail(f"Cannot show {file}: {e}")
        return

    if show_all:
        table.print()
    else:
        table.print_head(head if head is not None else DEFAULT_HEAD)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def info(file: str) -> None:
    """Show columns, row count and print configuration of a table file."""
    try:
        table = _read_table(file)
    except (WritableTableError, OSError) as e:
        _fail(f"Cannot read {file}: {e}")
        return

    summary = WritableTable(
        PrintConfig(justification=Justification.LEFT, padding=2, show_headers=False)
    )
    summary.add_column("name")
    summary.add_column("type")
    for name, column_type in zip(table.headers(), table.schema()):
        summary.add_row([name, column_type.value])

    config = table.config
    click.echo(f"Columns: {len(table.columns)}")
    for line in summary.render().splitlines():
        click.echo(f"  {line.rstrip()}")
    click.echo(f"Rows: {len(table)}")
    click.echo(f"Justification: {config.justification.name.lower()}")
    click.echo(f"Padding: {config.padding}")
    click.echo(f"Pad char: {config.pad_char!r}")
    click.echo(f"Show headers: {'yes' if config.show_headers else 'no'}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    default="-",
    type=click.Path(dir_okay=False, allow_dash=True),
    help="CSV file to write (default: stdout).",
)
def export(file: str, output: str) -> None:
    """Write the rows of a table file as CSV."""
    try:
        table = _read_table(file)
    except (WritableTableError, OSError) as e:
        _fail(f"Cannot read {file}: {e}")
        return

    with click.open_file(output, "w") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(table.headers())
        for row in table:
            writer.writerow(row)


if __name__ == "__main__":
    cli()
