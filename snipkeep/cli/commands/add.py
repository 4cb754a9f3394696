"""Add command implementation."""

import typer
from typing_extensions import Annotated

from snipkeep.cli.session import open_service
from snipkeep.snippets.models import Snippet, Supplement

app = typer.Typer(help="Add a new snippet")


@app.callback(invoke_without_command=True)
def add(
    ctx: typer.Context,
    title: Annotated[str, typer.Option("--title", "-t", help="Snippet title")],
    code: Annotated[
        str | None, typer.Option("--code", "-c", help="Snippet code (or read from stdin)")
    ] = None,
    notes: Annotated[str, typer.Option("--notes", "-n", help="Free-form notes")] = "",
    tags: Annotated[
        str, typer.Option("--tags", help="Comma-separated tags, e.g. 'python, io'")
    ] = "",
    index: Annotated[
        int, typer.Option("--index", help="Ordering hint, lower sorts first")
    ] = 0,
    supplement: Annotated[
        list[str] | None,
        typer.Option("--supplement", "-s", help="Extra code block (repeatable)"),
    ] = None,
    pin: Annotated[bool, typer.Option("--pin", help="Pin the new snippet")] = False,
):
    """Add a new snippet. Code is read from stdin when --code is omitted."""
    if code is None:
        code = typer.get_text_stream("stdin").read()

    if not code.strip():
        typer.echo("Snippet code is empty.", err=True)
        raise typer.Exit(1)

    snippet = Snippet(
        title=title,
        code=code,
        notes=notes,
        tags=tags,
        index=index,
        pinned=pin,
        supplements=[Supplement(code=block) for block in supplement or []],
    )

    with open_service() as service:
        service.add_snippet(snippet)

    typer.echo(snippet.id)
