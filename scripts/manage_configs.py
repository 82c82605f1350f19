#!/usr/bin/env python3
"""
Command-line interface for managing CV configurations (configs.json).

Commands:
    list      - List configurations
    create    - Create a configuration with every entry enabled
    duplicate - Copy a configuration under a new id
    delete    - Delete a configuration (generated PDFs and archive entries are kept)
"""

import typer
from typing_extensions import Annotated

from cvmanager.contexts.storage import (
    ConfigurationStore,
    DataStore,
    duplicate_configuration,
    new_configuration,
    validate_configuration,
)

app = typer.Typer(
    add_completion=False,
    help="Manage CV configurations (configs.json)",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("list")
def list_command():
    """List configurations with language and citation style."""
    configs = ConfigurationStore().list()
    if not configs:
        typer.secho("No configurations found", fg=typer.colors.YELLOW)
        return

    typer.secho(f"\n{len(configs)} configuration(s)\n", fg=typer.colors.BLUE, bold=True)
    for configuration in configs:
        typer.echo(
            f"  {configuration.get('id', '?'):<22} {configuration.get('language', 'en'):<3} "
            f"{configuration.get('citationStyle', 'apa'):<8} {configuration.get('name', '')}"
        )
        for problem in validate_configuration(configuration):
            typer.secho(f"      ! {problem}", fg=typer.colors.YELLOW)
    typer.echo("")


@app.command("create")
def create_command(
    name: Annotated[str, typer.Argument(help="Configuration name")],
    language: Annotated[str, typer.Option("--language", "-l", help="'en' or 'de'")] = "en",
):
    """
    Create a configuration with every section in library order and every entry enabled.

    Examples:\n

        $ manage_configs.py create "Data Science" --language de
    """
    store = DataStore()
    try:
        configuration = new_configuration(name, language, store.load_sections())
    except ValueError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    stored = ConfigurationStore(store).create(configuration)
    typer.secho(f"✓ Created {stored['id']} ({stored['name']})", fg=typer.colors.GREEN)


@app.command("duplicate")
def duplicate_command(config_id: Annotated[str, typer.Argument(help="Configuration id")]):
    """Copy a configuration; the copy is named '<name> (Copy)'."""
    configs = ConfigurationStore()
    try:
        original = configs.get(config_id)
    except KeyError as e:
        typer.secho(f"Error: {e.args[0]}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    stored = configs.create(duplicate_configuration(original))
    typer.secho(f"✓ Created {stored['id']} ({stored['name']})", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    config_id: Annotated[str, typer.Argument(help="Configuration id")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Delete a configuration."""
    if not yes:
        typer.confirm(f"Delete configuration {config_id}?", abort=True)

    if not ConfigurationStore().delete(config_id):
        typer.secho(f"Error: Configuration not found: {config_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Deleted {config_id}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
