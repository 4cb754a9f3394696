"""Show command implementation."""

import json

import typer
from typing_extensions import Annotated

from snipkeep.cli.session import open_service
from snipkeep.snippets.models import Snippet

app = typer.Typer(help="Display a snippet")


@app.callback(invoke_without_command=True)
def show(
    ctx: typer.Context,
    snippet_id: Annotated[str, typer.Argument(help="Snippet ID")],
    format: Annotated[
        str, typer.Option("--format", help="Output format: text, json, code")
    ] = "text",
):
    """Display a snippet with its notes and supplements."""
    if format not in ("text", "json", "code"):
        typer.echo(f"Unknown format '{format}'. Use text, json or code.", err=True)
        raise typer.Exit(1)

    with open_service() as service:
        snippet = service.get_snippet_by_id(snippet_id)

    if snippet is None:
        typer.echo(f"Snippet '{snippet_id}' not found.", err=True)
        raise typer.Exit(1)

    if format == "json":
        typer.echo(json.dumps(snippet.to_dict(), indent=2))
    elif format == "code":
        typer.echo(snippet.code)
    else:
        _display_snippet(snippet)


def _display_snippet(snippet: Snippet) -> None:
    typer.echo(f"Title:  {snippet.title}")
    typer.echo(f"ID:     {snippet.id}")
    if snippet.tags:
        typer.echo(f"Tags:   {snippet.tags}")
    if snippet.pinned:
        typer.echo("Pinned: yes")
    typer.echo()
    typer.echo(snippet.code)
    if snippet.notes:
        typer.echo()
        typer.echo(snippet.notes)

    for number, supplement in enumerate(snippet.supplements, start=1):
        typer.echo()
        typer.echo(f"--- supplement {number} ---")
        typer.echo(supplement.code)
        if supplement.notes:
            typer.echo(supplement.notes)
