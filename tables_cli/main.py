"""tables-cli - Main entry point."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler
from rich.table import Table as RichTable

from .config import Settings, supported_db_types
from .database import new_database
from .errors import TablesError
from .golang import GoStructGenerator
from .runner import run

app = typer.Typer(
    name="tables-cli",
    help="Generate Go structs with db tags from database tables",
    add_completion=False,
)

console = Console()


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _build_settings(**options) -> Settings:
    """Create settings from the given options.

    Options left at None (or False for flags) fall back to the
    environment and the .env file.
    """
    return Settings(**{key: value for key, value in options.items() if value is not None and value is not False})


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    db_type: Optional[str] = typer.Option(None, "-t", "--type", help=f"Type of database to use, currently supported: {supported_db_types()}"),
    user: Optional[str] = typer.Option(None, "-u", "--user", help="User to connect to the database"),
    password: Optional[str] = typer.Option(None, "-p", "--password", help="Password of user"),
    db_name: Optional[str] = typer.Option(None, "-d", "--dbname", help="Database name"),
    db_schema: Optional[str] = typer.Option(None, "-s", "--schema", help="Schema name"),
    host: Optional[str] = typer.Option(None, "-h", "--host", help="Host of database"),
    port: Optional[int] = typer.Option(None, "--port", help="Port of database host, if not specified, it will be the default ports for the supported databases"),
    output_file_path: Optional[str] = typer.Option(None, "-of", "--output", help="Output file path, default is current working directory"),
    output_format: Optional[str] = typer.Option(None, "-format", "--format", help="Format of struct fields (columns): camelCase (c) or original (o)"),
    output_format_tag: Optional[str] = typer.Option(None, "-format-tag", "--format-tag", help="Format of tag names: column name (c) or snake_case (o)"),
    package_name: Optional[str] = typer.Option(None, "-pn", "--package", help="Name of the package the generated files belong to"),
    prefix: Optional[str] = typer.Option(None, "-pre", "--prefix", help="Prefix for struct names"),
    suffix: Optional[str] = typer.Option(None, "-suf", "--suffix", help="Suffix for struct names"),
    tags_no_db: bool = typer.Option(False, "--tags-no-db", help="Do not create db-tags"),
    tags_structable: bool = typer.Option(False, "--tags-structable", help="Generate struct with tags for use in Masterminds/structable"),
    tags_structable_only: bool = typer.Option(False, "--tags-structable-only", help="Generate struct with tags ONLY for use in Masterminds/structable"),
    is_structable_recorder: bool = typer.Option(False, "--structable-recorder", help="Generate a structable.Recorder field"),
    tags_sql: bool = typer.Option(False, "--experimental-tags-sql", help="Generate struct with sql-tags"),
    tags_sql_only: bool = typer.Option(False, "--experimental-tags-sql-only", help="Generate struct with ONLY sql-tags"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose output"),
):
    """
    Introspect a database schema and write one Go struct file per table.

    Examples:

        tables-cli -t pg -d shop -s public -of ./dto

        tables-cli -t mysql -u root -d shop -s shop --tags-structable

        tables-cli config
    """
    if ctx.invoked_subcommand is not None:
        return

    _configure_logging(verbose)

    try:
        settings = _build_settings(
            db_type=db_type,
            user=user,
            password=password,
            db_name=db_name,
            db_schema=db_schema,
            host=host,
            port=port,
            output_file_path=output_file_path,
            output_format=output_format,
            output_format_tag=output_format_tag,
            package_name=package_name,
            prefix=prefix,
            suffix=suffix,
            tags_no_db=tags_no_db,
            tags_structable=tags_structable,
            tags_structable_only=tags_structable_only,
            is_structable_recorder=is_structable_recorder,
            tags_sql=tags_sql,
            tags_sql_only=tags_sql_only,
            verbose=verbose,
        )
        settings.verify()

        database = new_database(settings)
        tables = run(settings, database)

    except ImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except TablesError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        if verbose:
            for line in e.context_lines():
                console.print(f"  {escape(line)}")
        raise typer.Exit(1)

    if not tables:
        console.print(f"[yellow]No tables found in schema {settings.db_schema}[/yellow]")
        return

    try:
        files = GoStructGenerator(settings, database).write(tables)
    except OSError as e:
        console.print(f"[red]Error: could not write Go files to {escape(settings.output_file_path)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    summary = RichTable(title=f"Generated structs ({settings.db_type}: {settings.db_schema})")
    summary.add_column("Table", style="cyan")
    summary.add_column("Columns", justify="right")
    summary.add_column("File", style="green")
    for table, path in zip(tables, files):
        summary.add_row(table.name, str(len(table.columns)), str(path))
    console.print(summary)


@app.command()
def config():
    """Show the settings loaded from the environment."""
    settings = Settings()
    console.print("[bold]Current Configuration[/bold]")
    for name, value in settings.model_dump().items():
        if name == "password":
            value = "***" if value else ""
        elif name == "port":
            value = settings.effective_port()
        console.print(f"  {name}: {value}")


if __name__ == "__main__":
    app()
