"""Delete command implementation."""

import typer
from typing_extensions import Annotated

from snipkeep.cli.session import open_service

app = typer.Typer(help="Delete a snippet")


@app.callback(invoke_without_command=True)
def delete(
    ctx: typer.Context,
    snippet_id: Annotated[str, typer.Argument(help="Snippet ID to delete")],
):
    """Delete a snippet."""
    with open_service() as service:
        if service.get_snippet_by_id(snippet_id) is None:
            typer.echo(f"Snippet '{snippet_id}' not found.", err=True)
            raise typer.Exit(1)

        service.delete_snippet(snippet_id)
