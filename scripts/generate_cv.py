#!/usr/bin/env python3
"""
CV Generation CLI

Generates PDFs from configurations using the generation context.

Commands:
    generate         - Assemble, compile, store and archive one configuration
    assemble         - Print (or write) the LaTeX source without compiling
    template-version - Show the current template version

Examples:\n

    generate_cv.py generate config-1700000000000 --company "ACME Corp." --position "Engineer"

    generate_cv.py assemble config-1700000000000 -o cv.tex

    generate_cv.py template-version
"""

import json
import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvmanager.contexts.generation import GenerationError, JobMetadata, generate_cv
from cvmanager.contexts.rendering.compiler import LATEX_COMPILER, LATEX_TIMEOUT_S
from cvmanager.contexts.storage import DataStore
from cvmanager.contexts.templating import assemble, get_template_version
from cvmanager.utils import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Generate CV PDFs from configurations",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("generate")
def generate_command(
    config_id: Annotated[str, typer.Argument(help="Configuration id (e.g. config-1700000000000)")],
    company: Annotated[str, typer.Option("--company", "-c", help="Target company")] = "",
    position: Annotated[str, typer.Option("--position", "-p", help="Target position")] = "",
    notes: Annotated[str, typer.Option("--notes", "-n", help="Free-text notes")] = "",
    tags: Annotated[
        Optional[List[str]], typer.Option("--tag", "-t", help="Tag (repeatable)")
    ] = None,
    compiler: Annotated[
        str, typer.Option("--compiler", help="LaTeX compiler command")
    ] = LATEX_COMPILER,
    timeout: Annotated[
        float, typer.Option("--timeout", help="Per-pass timeout in seconds", min=1)
    ] = LATEX_TIMEOUT_S,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the result (or error) as JSON")
    ] = False,
):
    """
    Generate a PDF for a configuration and record it in the archive.

    Examples:\n

        $ generate_cv.py generate config-1700000000000

        $ generate_cv.py generate config-1700000000000 -c "ACME Corp." -t ml -t remote
    """
    log_dir = LOGS_PATH / f"generate_{now()}"
    job = JobMetadata(company=company, position=position, notes=notes, tags=tags or [])

    if not as_json:
        typer.secho(f"\nGenerating: {config_id}", fg=typer.colors.BLUE, bold=True)

    try:
        result = generate_cv(
            config_id, job=job, compiler=compiler, timeout=timeout, log_dir=log_dir
        )
    except GenerationError as e:
        if as_json:
            typer.echo(json.dumps(e.to_dict(), indent=2, ensure_ascii=False))
        else:
            typer.secho(f"✗ {e.message}", fg=typer.colors.RED, bold=True, err=True)
            if e.detail:
                typer.echo("\nCompiler log (tail):", err=True)
                typer.echo(e.detail, err=True)
            typer.echo(f"  Log: {log_dir / 'generate.log'}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        payload = {
            "filename": result.filename,
            "texFilename": result.source_filename,
            "archiveEntry": result.archive_entry.to_dict(),
        }
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        raise typer.Exit(code=0)

    typer.secho("✓ Generation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF:     {result.pdf_path}")
    typer.echo(f"  Source:  {result.source_filename}")
    typer.echo(f"  Archive: {result.archive_entry.id}")
    typer.echo(f"  Warnings: {len(result.warnings)}")
    typer.echo(f"  Log: {log_dir / 'generate.log'}")
    typer.echo("")


@app.command("assemble")
def assemble_command(
    config_id: Annotated[str, typer.Argument(help="Configuration id")],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write the source here instead")
    ] = None,
):
    """
    Assemble the LaTeX source for a configuration without compiling it.

    Examples:\n

        $ generate_cv.py assemble config-1700000000000 > cv.tex
    """
    store = DataStore()
    configuration = next((c for c in store.load_configs() if c.get("id") == config_id), None)
    if configuration is None:
        typer.secho(f"Error: Configuration not found: {config_id}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    latex = assemble(store.load_profile(), store.load_sections(), configuration)

    if output is None:
        typer.echo(latex, nl=False)
        return

    output.write_text(latex, encoding="utf-8")
    typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)


@app.command("template-version")
def template_version_command():
    """Show the version of the generated LaTeX structure."""
    typer.echo(get_template_version())


if __name__ == "__main__":
    app()
