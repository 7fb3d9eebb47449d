"""Read command for the apply-edits CLI."""

import json
from typing import List, Optional

import typer

from apply_edits.cli.common import logger
from apply_edits.constants import DEFAULT_MAX_READ_LINES
from apply_edits.models.enums import ReadFormat
from apply_edits.read import format_for_prompt, read_files_with_line_numbers

app = typer.Typer(name="read", help="Read files with line numbers")


def _collect_paths(file: Optional[str], files: Optional[str]) -> List[str]:
    paths = []
    if file:
        paths.append(file)
    if files:
        paths.extend(p.strip() for p in files.split(",") if p.strip())
    return paths


@app.command()
def read(
    file: Optional[str] = typer.Option(None, "--file", "-f", help="A single file to read"),
    files: Optional[str] = typer.Option(
        None, "--files", help="Comma-separated list of files to read"
    ),
    workdir: str = typer.Option(".", "--workdir", "-w", help="Directory paths are relative to"),
    max_lines: int = typer.Option(
        DEFAULT_MAX_READ_LINES, "--max-lines", min=1, help="Lines shown per file"
    ),
    output_format: ReadFormat = typer.Option(
        ReadFormat.JSON, "--format", help="Output as JSON or as markdown for a prompt"
    ),
):
    """Print files with line numbers, as JSON or prompt-ready markdown."""
    paths = _collect_paths(file, files)
    if not paths:
        logger.error("Provide --file or --files")
        raise typer.Exit(1)

    results = read_files_with_line_numbers(workdir, paths, max_lines)
    if output_format == ReadFormat.PROMPT:
        typer.echo(format_for_prompt(results), nl=False)
    else:
        typer.echo(json.dumps(results.to_dict(), indent=2))
