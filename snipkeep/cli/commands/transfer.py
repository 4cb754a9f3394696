"""Import and export command implementations."""

from pathlib import Path

import typer
from typing_extensions import Annotated

from snipkeep.cli.session import open_service, open_toasts
from snipkeep.events.toast import Toast
from snipkeep.transfer import (
    ImportPayloadError,
    ImportTooBigError,
    export_snippets,
    load_import_payload,
)

import_app = typer.Typer(help="Import snippets from a JSON file")
export_app = typer.Typer(help="Export all snippets to a JSON file")


@import_app.callback(invoke_without_command=True)
def import_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="JSON file with one snippet or a list")],
):
    """Import snippets. Imported snippets get new IDs and are listed first."""
    # Validate before touching the collection
    try:
        snippets = load_import_payload(path)
    except ImportTooBigError as e:
        open_toasts().push(Toast.IMPORT_TOO_BIG)
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except ImportPayloadError as e:
        open_toasts().push(Toast.IMPORT_FAILED)
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if not snippets:
        typer.echo("Nothing to import.", err=True)
        return

    with open_service() as service:
        imported = service.import_snippets(snippets)

    typer.echo(f"Imported {len(imported)} snippet(s).")


@export_app.callback(invoke_without_command=True)
def export_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Destination JSON file")],
):
    """Export all snippets in display order."""
    with open_service() as service:
        count = export_snippets(service.get_all_snippets(), path)

    typer.echo(f"Exported {count} snippet(s) to {path}")
