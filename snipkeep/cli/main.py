"""Main CLI entry point for snipkeep."""

import logging

import typer
from typing_extensions import Annotated

from snipkeep import __version__
from snipkeep.cli import commands

app = typer.Typer(
    name="snipkeep",
    help="Personal code snippet manager",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(commands.add.app, name="add")
app.add_typer(commands.list.app, name="list")
app.add_typer(commands.show.app, name="show")
app.add_typer(commands.search.app, name="search")
app.add_typer(commands.delete.app, name="delete")
app.add_typer(commands.pin.app, name="pin")
app.add_typer(commands.pin.unpin_app, name="unpin")
app.add_typer(commands.transfer.import_app, name="import")
app.add_typer(commands.transfer.export_app, name="export")
app.add_typer(commands.config.app, name="config")
app.add_typer(commands.style.app, name="style")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
):
    """Personal code snippet manager."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def version():
    """Show version information."""
    typer.echo(f"snipkeep version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
