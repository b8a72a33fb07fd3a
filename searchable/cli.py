# cli.py
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy import select, table

from .columns import Columns
from .dialects import get_dialect
from .errors import SearchableError
from .parsers import FuzzySearch
from .query import SearchQuery
from .search import BaseSearch

app = typer.Typer(help="Inspect column declarations and the SQL a fuzzy search generates")
console = Console()


def parse_declaration(declaration: str) -> Tuple[Optional[str], str]:
    """'author_name=authors.name' -> ('author_name', 'authors.name'), 'posts.title' -> (None, 'posts.title')"""
    if "=" in declaration:
        key, column = declaration.split("=", 1)
        return key.strip(), column.strip()
    return None, declaration.strip()


def build_columns(declarations: List[str]) -> Columns:
    return Columns.make([parse_declaration(declaration) for declaration in declarations])


@app.command("columns")
def show_columns(
    declarations: List[str] = typer.Argument(..., help="Column declarations: 'table.column', 'key=table.column' or 'table.column as key'"),
):
    """
    Show the select expression, key and actual column of every declaration.
    """
    columns = build_columns(declarations)

    output = Table(title="Columns")
    output.add_column("Select", style="cyan")
    output.add_column("Key", style="green")
    output.add_column("Actual", style="magenta")

    for select_expr, key, actual in zip(columns.selects(), columns.keys(), columns.actual()):
        output.add_row(select_expr, key, actual)

    console.print(output)


@app.command("pattern")
def show_pattern(search: str = typer.Argument(..., help="Raw search string")):
    """
    Show the LIKE pattern a search string is parsed into.
    """
    typer.echo(FuzzySearch().parse(search))


@app.command("explain")
def explain(
    declarations: List[str] = typer.Argument(..., help="Column declarations"),
    search: str = typer.Option(..., "--search", "-s", help="Raw search string"),
    from_table: str = typer.Option(..., "--from", help="Table to select from"),
    operator: str = typer.Option("where", "--operator", "-o", help="Search operator: where or having"),
    sort: bool = typer.Option(True, "--sort/--no-sort", help="Sort by relevance"),
    dialect: str = typer.Option("mysql", "--dialect", "-d", help="SQL dialect: mysql or sqlite"),
):
    """
    Print the SQL of a fuzzy search over the declared columns.
    """
    columns = build_columns(declarations)
    query = SearchQuery(select(*columns.select_columns()).select_from(table(from_table)))

    try:
        BaseSearch(
            query,
            columns,
            sort_by_relevance=sort,
            search_operator=operator,
            dialect=get_dialect(dialect),
        ).search(search)
    except SearchableError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(query.to_sql(pretty=True))


if __name__ == "__main__":
    app()
