"""Config command implementation.

Manages the snipkeep configuration file.
"""

import typer
from typing_extensions import Annotated

from snipkeep.config import (
    CONFIG_FILE,
    get_data_file,
    init_config,
    load_config,
    set_config_value,
)
from snipkeep.config.paths import CONFIG_DIR

app = typer.Typer(help="Manage configuration")


@app.command()
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite existing config")
    ] = False,
):
    """Initialize configuration directory and template config file."""
    created = init_config(overwrite=force)

    if created:
        typer.echo(f"Created config directory: {CONFIG_DIR}")
        typer.echo(f"Created config file: {CONFIG_FILE}")
    else:
        typer.echo(f"Config already exists at {CONFIG_FILE}")
        typer.echo("Use --force to overwrite.")


@app.command()
def show():
    """Display current configuration and the resolved data file."""
    config = load_config()

    if not config:
        typer.echo("No configuration found, using defaults.")
        typer.echo(f"Run 'snipkeep config init' to create {CONFIG_FILE}")
    else:
        for section, values in config.items():
            typer.echo(f"[{section}]")
            for key, value in values.items():
                typer.echo(f"  {key} = {value}")
            typer.echo()

    typer.echo(f"Data file: {get_data_file(config)}")


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(
            help="Configuration key (dot notation, e.g., 'defaults.page_size')"
        ),
    ],
    value: Annotated[str, typer.Argument(help="Configuration value")],
):
    """Set a configuration value using dot notation.

    Examples:
        snipkeep config set defaults.page_size 24
        snipkeep config set storage.data_file ~/snippets.json
    """
    try:
        set_config_value(key, value)
        typer.echo(f"Set {key} = {value}")
    except ValueError as e:
        typer.echo(f"Invalid value: {e}", err=True)
        raise typer.Exit(1)
