"""Pin and unpin command implementations.

Pinned snippets are exempt from pagination and always listed by
`snipkeep list --pinned`.
"""

import typer
from typing_extensions import Annotated

from snipkeep.cli.session import open_service
from snipkeep.snippets.store import SnippetNotFoundError

app = typer.Typer(help="Pin a snippet")
unpin_app = typer.Typer(help="Unpin a snippet")


@app.callback(invoke_without_command=True)
def pin(
    ctx: typer.Context,
    snippet_id: Annotated[str, typer.Argument(help="Snippet ID to pin")],
):
    """Pin a snippet."""
    _set_pinned(snippet_id, True)


@unpin_app.callback(invoke_without_command=True)
def unpin(
    ctx: typer.Context,
    snippet_id: Annotated[str, typer.Argument(help="Snippet ID to unpin")],
):
    """Unpin a snippet."""
    _set_pinned(snippet_id, False)


def _set_pinned(snippet_id: str, pinned: bool) -> None:
    with open_service() as service:
        try:
            if pinned:
                service.pin_snippet(snippet_id)
            else:
                service.unpin_snippet(snippet_id)
        except SnippetNotFoundError:
            typer.echo(f"Snippet '{snippet_id}' not found.", err=True)
            raise typer.Exit(1)

        # Pin state only changes in memory, so persist explicitly
        service.save_snippets()
