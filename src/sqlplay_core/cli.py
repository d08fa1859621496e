"""sqlplay Core CLI -- Parse SQL practice questions and load them into DuckDB."""

import json
import logging
from pathlib import Path

import click

from .errors import ParseError, ValidationError, WarehouseError


def _read_question(text, file):
    if file:
        return Path(file).read_text()
    if not text:
        return click.get_text_stream("stdin").read()
    return text


def _fail(console, stage, exc):
    from rich.markup import escape

    console.print(f"[red]{stage} error:[/red] {escape(str(exc))}")
    raise SystemExit(1)


def _cell(value):
    return "" if value is None else str(value)


def _print_parsed(console, parsed, max_rows):
    from rich.panel import Panel
    from rich.table import Table

    console.print(Panel(
        f"[bold]{parsed.table_name}[/bold]  ->  {parsed.full_table_name}\n"
        f"Rows: {parsed.metadata.row_count}  |  Columns: {parsed.metadata.column_count}",
        title="Parsed Question",
    ))

    schema_table = Table(title="Schema")
    schema_table.add_column("Column", style="cyan")
    schema_table.add_column("Type", style="green")
    for col in parsed.schema:
        schema_table.add_row(col.name, col.type.value)
    console.print(schema_table)

    data_table = Table(title="Input Data")
    for name in parsed.column_names:
        data_table.add_column(name)
    for row in parsed.input_data[:max_rows]:
        data_table.add_row(*[_cell(v) for v in row])
    console.print(data_table)

    if parsed.expected_output is None:
        console.print("[dim]No expected output section.[/dim]")
        return

    out_table = Table(title="Expected Output")
    for name in parsed.expected_output.columns:
        out_table.add_column(name, style="magenta")
    for row in parsed.expected_output.rows[:max_rows]:
        out_table.add_row(*[_cell(v) for v in row])
    console.print(out_table)


@click.group()
@click.version_option(package_name="sqlplay-core")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """sqlplay Core -- Turn plain-text SQL questions into tables."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="Read the question from a file.")
@click.option("--json", "as_json", is_flag=True, help="Print the parse response as JSON.")
@click.option("--rows", "-n", default=10, help="Maximum rows to display.")
def parse(text, file, as_json, rows):
    """Parse a question and show its schema, rows, and expected output."""
    from rich.console import Console

    from .parser import parse_question, validate_parsed_question

    console = Console()
    text = _read_question(text, file)

    if not text or not text.strip():
        console.print("[red]No input text provided.[/red]")
        raise SystemExit(1)

    try:
        parsed = parse_question(text)
    except ParseError as exc:
        _fail(console, "Parse", exc)
    try:
        validate_parsed_question(parsed)
    except ValidationError as exc:
        _fail(console, "Validation", exc)

    if as_json:
        click.echo(json.dumps(parsed.to_response(), indent=2))
        return

    _print_parsed(console, parsed, rows)


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="Read the question from a file.")
@click.option("--database", "-d", default=None, help="DuckDB database file (default: $SQLPLAY_DUCKDB_PATH or in-memory).")
@click.option("--dataset", "-s", default=None, help="Target dataset (default: $SQLPLAY_DATASET or customer_data).")
@click.option("--date", "on_date", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date for the table name suffix (default: today).")
def load(text, file, database, dataset, on_date):
    """Parse a question and create its input table in DuckDB."""
    from rich.console import Console
    from rich.panel import Panel

    import duckdb

    from .loader import load_question
    from .warehouse import WarehouseClient

    console = Console()
    text = _read_question(text, file)

    if not text or not text.strip():
        console.print("[red]No input text provided.[/red]")
        raise SystemExit(1)

    with WarehouseClient(database=database, dataset_id=dataset) as client:
        try:
            with console.status("Creating table..."):
                parsed, info = load_question(
                    text, client, today=on_date.date() if on_date else None,
                )
        except ParseError as exc:
            _fail(console, "Parse", exc)
        except ValidationError as exc:
            _fail(console, "Validation", exc)
        except (WarehouseError, duckdb.Error) as exc:
            _fail(console, "Warehouse", exc)

    console.print(Panel(
        f"Question table: {parsed.table_name}\n"
        f"Table created: [bold]{info.full_table_path}[/bold]\n"
        f"Rows inserted: {info.rows_inserted}  |  Columns: {len(info.columns)}",
        title="Loaded",
    ))


@cli.command()
@click.option("--database", "-d", default=None, help="DuckDB database file.")
@click.option("--dataset", "-s", default=None, help="Only list tables in this dataset.")
def tables(database, dataset):
    """List tables in the warehouse."""
    from rich.console import Console
    from rich.table import Table

    from .warehouse import WarehouseClient

    console = Console()

    with WarehouseClient(database=database) as client:
        result = client.list_tables(dataset)

    if not result["tables"]:
        console.print("[yellow]No tables found.[/yellow]")
        return

    table = Table(title=f"Tables ({result['table_count']})")
    table.add_column("Dataset", style="cyan")
    table.add_column("Table", style="green")
    table.add_column("Rows", justify="right")
    for t in result["tables"]:
        table.add_row(t["dataset_id"], t["id"], str(t["row_count"]))
    console.print(table)


@cli.command()
@click.argument("dataset")
@click.argument("table_id")
@click.option("--database", "-d", default=None, help="DuckDB database file.")
@click.option("--limit", "-n", default=10, help="Sample rows to show.")
def describe(dataset, table_id, database, limit):
    """Show a table's schema and a sample of its rows."""
    from rich.console import Console
    from rich.table import Table

    from .warehouse import WarehouseClient

    console = Console()

    with WarehouseClient(database=database) as client:
        try:
            meta = client.get_table_metadata(dataset, table_id)
            sample = client.sample_rows(dataset, table_id, limit)
        except WarehouseError as exc:
            _fail(console, "Warehouse", exc)

    schema_table = Table(title=f"{meta.dataset_id}.{meta.table_id} ({meta.num_rows} rows)")
    schema_table.add_column("Column", style="cyan")
    schema_table.add_column("Type", style="green")
    for col in meta.columns:
        schema_table.add_row(col["name"], col["type"])
    console.print(schema_table)

    if sample:
        rows_table = Table(title="Sample")
        for col in meta.columns:
            rows_table.add_column(col["name"])
        for record in sample:
            rows_table.add_row(*[_cell(record.get(c["name"])) for c in meta.columns])
        console.print(rows_table)


@cli.command()
@click.argument("source")
@click.argument("dest_dataset")
@click.argument("dest_table")
@click.option("--database", "-d", default=None, help="DuckDB database file.")
@click.option("--overwrite", is_flag=True, help="Replace the destination if it exists.")
def copy(source, dest_dataset, dest_table, database, overwrite):
    """Copy SOURCE (dataset.table) into a permanent dataset."""
    from rich.console import Console

    from .warehouse import WarehouseClient

    console = Console()

    with WarehouseClient(database=database) as client:
        try:
            result = client.copy_table(source, dest_dataset, dest_table, overwrite=overwrite)
        except WarehouseError as exc:
            _fail(console, "Warehouse", exc)

    console.print(
        f"[green]Copied[/green] {result['source_table']} -> "
        f"[bold]{result['destination_table']}[/bold] ({result['row_count']} rows)"
    )


@cli.command()
@click.argument("dataset")
@click.argument("table_id")
@click.option("--database", "-d", default=None, help="DuckDB database file.")
def drop(dataset, table_id, database):
    """Delete a table from the warehouse."""
    from rich.console import Console

    from .warehouse import WarehouseClient

    console = Console()

    with WarehouseClient(database=database) as client:
        try:
            client.delete_table(dataset, table_id)
        except WarehouseError as exc:
            _fail(console, "Warehouse", exc)

    console.print(f"[green]Deleted[/green] {dataset}.{table_id}")


def main():
    cli()


if __name__ == "__main__":
    main()
