"""Style command implementation.

The style object is a JSON passthrough for the presentation layer.
"""

import json
from pathlib import Path

import typer
from typing_extensions import Annotated

from snipkeep.cli.session import open_storage, open_toasts
from snipkeep.events.toast import Toast
from snipkeep.style import StyleService

app = typer.Typer(help="View or edit the style object")


@app.command()
def show():
    """Print the style object as JSON."""
    style = StyleService(open_storage()).get_style_object()
    typer.echo(json.dumps(style, indent=2))


@app.command("set")
def set_style(
    path: Annotated[Path, typer.Argument(help="JSON file holding the new style object")],
):
    """Replace the style object with the contents of a JSON file."""
    try:
        style = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        typer.echo(f"Cannot load style: {e}", err=True)
        raise typer.Exit(1)

    if not isinstance(style, dict):
        typer.echo("Style must be a JSON object.", err=True)
        raise typer.Exit(1)

    saved: list[bool] = []
    StyleService(open_storage()).save_style_object(
        style, on_success=saved.append, on_rejected=saved.append
    )
    if not all(saved):
        open_toasts().push(Toast.SAVE_FAILED)
        raise typer.Exit(1)
    open_toasts().push(Toast.SAVE_SUCCEEDED)


@app.command()
def revert():
    """Restore the default style object."""
    style = StyleService(open_storage()).revert()
    typer.echo(json.dumps(style, indent=2))
