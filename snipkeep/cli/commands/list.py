"""List command implementation."""

import typer
from typing_extensions import Annotated

from snipkeep.cli.output import check_format, echo_snippets
from snipkeep.cli.session import open_service

app = typer.Typer(help="List snippets")


@app.callback(invoke_without_command=True)
def list_cmd(
    ctx: typer.Context,
    all: Annotated[
        bool, typer.Option("--all", "-a", help="Show every snippet, not just the first page")
    ] = False,
    pinned: Annotated[bool, typer.Option("--pinned", help="Only pinned snippets")] = False,
    format: Annotated[
        str, typer.Option("--format", help="Output format: summary, json, ids")
    ] = "summary",
):
    """List snippets in display order."""
    check_format(format)

    with open_service() as service:
        if pinned:
            snippets = service.pinned_snippets
        else:
            if all:
                service.load_remaining_snippets()
            snippets = service.visible_snippets

        if not snippets:
            typer.echo("No snippets found.", err=True)
            return

        echo_snippets(snippets, format)

        if not all and not pinned and service.has_more_snippets(len(snippets)):
            remaining = len(service.get_all_snippets()) - len(snippets)
            typer.echo(f"... {remaining} more. Use --all to show them.", err=True)
