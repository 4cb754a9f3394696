"""Search command implementation."""

import typer
from typing_extensions import Annotated

from snipkeep.cli.output import check_format, echo_snippets
from snipkeep.cli.session import open_service
from snipkeep.search.models import SearchParameters

app = typer.Typer(help="Search snippets by comma-separated terms")


@app.callback(invoke_without_command=True)
def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search terms, e.g. 'regex, parse'")] = "",
    title: Annotated[bool, typer.Option("--title/--no-title", help="Match titles")] = True,
    tags: Annotated[bool, typer.Option("--tags/--no-tags", help="Match tags exactly")] = True,
    code: Annotated[
        bool, typer.Option("--code/--no-code", help="Match code and supplements")
    ] = True,
    notes: Annotated[
        bool, typer.Option("--notes/--no-notes", help="Match notes and supplements")
    ] = True,
    all: Annotated[
        bool, typer.Option("--all", "-a", help="Show every match, not just the first page")
    ] = False,
    format: Annotated[
        str, typer.Option("--format", help="Output format: summary, json, ids")
    ] = "summary",
):
    """Search snippets. Best matches are listed first."""
    check_format(format)

    params = SearchParameters(query=query, title=title, tags=tags, code=code, notes=notes)

    with open_service() as service:
        outcome = service.search(params)
        if all:
            snippets = [s for s in service.get_all_snippets() if s.showing]
        else:
            snippets = list(service.visible_snippets)

    if not snippets:
        typer.echo("No matching snippets.", err=True)
        return

    echo_snippets(snippets, format, scores=outcome.scores if query.strip() else None)

    if not all and outcome.matched > len(snippets):
        typer.echo(
            f"... {outcome.matched - len(snippets)} more. Use --all to show them.",
            err=True,
        )
