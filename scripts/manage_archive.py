#!/usr/bin/env python3
"""
Command-line interface for the generation archive (archive.json).

Commands:
    list   - List generated CVs, newest first
    update - Edit an entry's job metadata
    delete - Delete an entry together with its PDF and .tex source
"""

from typing import List, Optional

import typer
from typing_extensions import Annotated

from cvmanager.contexts.storage import ArchiveStore
from cvmanager.utils.text_processing import truncate_display
from cvmanager.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="Manage the archive of generated CVs (archive.json)",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("list")
def list_command(
    company: Annotated[
        Optional[str], typer.Option("--company", "-c", help="Only entries for this company")
    ] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", "-t", help="Only entries with tag")] = None,
):
    """List archive entries, newest first."""
    archive = ArchiveStore()
    entries = archive.list()
    if company:
        entries = [e for e in entries if e.company.lower() == company.lower()]
    if tag:
        entries = [e for e in entries if tag in e.tags]

    if not entries:
        typer.secho("No archive entries found", fg=typer.colors.YELLOW)
        return

    missing = 0
    typer.secho(f"\n{len(entries)} archive entries\n", fg=typer.colors.BLUE, bold=True)
    for entry in reversed(entries):
        exists = archive.store.output_exists(entry.filename) if entry.filename else False
        missing += not exists
        typer.echo(
            f"  {entry.id:<20} {format_timestamp(entry.created_at):<24} "
            f"v{entry.template_version or '?':<6} {entry.filename}"
            + ("" if exists else "  (missing)")
        )
        if entry.company or entry.position:
            typer.echo(f"      {entry.position or '-'} at {entry.company or '-'}")
        if entry.notes:
            typer.echo(f"      {truncate_display(entry.notes, 70)}")
    referenced = {entry.filename for entry in archive.list()}
    unreferenced = [name for name in archive.store.list_outputs() if name not in referenced]
    if unreferenced:
        typer.secho(
            f"\n{len(unreferenced)} PDF(s) in the output store have no archive entry",
            fg=typer.colors.YELLOW,
        )
    if missing:
        typer.secho(f"\n{missing} PDF(s) missing from the output store", fg=typer.colors.YELLOW)
    typer.echo("")


@app.command("update")
def update_command(
    entry_id: Annotated[str, typer.Argument(help="Archive entry id (arch-...)")],
    company: Annotated[Optional[str], typer.Option("--company", "-c")] = None,
    position: Annotated[Optional[str], typer.Option("--position", "-p")] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
    tags: Annotated[
        Optional[List[str]], typer.Option("--tag", "-t", help="Replace tags (repeatable)")
    ] = None,
):
    """Update the job metadata of an archive entry; omitted options are kept."""
    archive = ArchiveStore()
    try:
        current = archive.get(entry_id).to_dict()
    except KeyError as e:
        typer.secho(f"Error: {e.args[0]}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    changes = {"company": company, "position": position, "notes": notes, "tags": tags}
    current.update({key: value for key, value in changes.items() if value is not None})
    archive.update(entry_id, current)
    typer.secho(f"✓ Updated {entry_id}", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    entry_id: Annotated[str, typer.Argument(help="Archive entry id (arch-...)")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Delete an archive entry and its stored PDF and .tex files."""
    if not yes:
        typer.confirm(f"Delete archive entry {entry_id} and its files?", abort=True)

    entry = ArchiveStore().delete(entry_id)
    if entry is None:
        typer.secho(f"Error: Archive entry not found: {entry_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho(f"✓ Deleted {entry_id} ({entry.filename})", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
