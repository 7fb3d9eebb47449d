"""Apply command for the apply-edits CLI."""

import json
import os
import sys
from typing import Optional

import typer
from pydantic import ValidationError

from apply_edits.cli.common import console, logger
from apply_edits.cli.output import print_header, print_result
from apply_edits.config import EditSettings
from apply_edits.models.edits import EditRequest
from apply_edits.transaction import apply_with_transaction

app = typer.Typer(name="apply", help="Apply a batch of edits")


def _load_request(file: Optional[str], stdin: bool) -> EditRequest:
    if bool(file) == stdin:
        logger.error("Provide exactly one of --file or --stdin")
        raise typer.Exit(1)

    try:
        if stdin:
            raw = sys.stdin.read()
        else:
            with open(file, "r", encoding="utf-8") as f:
                raw = f.read()
    except OSError as e:
        logger.error(f"Could not read edit request: {e}")
        raise typer.Exit(1)

    try:
        return EditRequest.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        logger.error(f"Edit request is not valid JSON: {e}")
        raise typer.Exit(1)
    except ValidationError as e:
        logger.error(f"Edit request is malformed: {e}")
        raise typer.Exit(1)


@app.command()
def apply(
    file: Optional[str] = typer.Option(
        None, "--file", "-f", help="Read the JSON edit request from a file"
    ),
    stdin: bool = typer.Option(False, "--stdin", help="Read the JSON edit request from stdin"),
    workdir: str = typer.Option(
        ".", "--workdir", "-w", help="Directory edit paths are relative to"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Simulate the edits without writing anything"
    ),
    partial: bool = typer.Option(
        False, "--partial", help="Keep successful edits even if others fail"
    ),
    auto_correct_threshold: Optional[float] = typer.Option(
        None,
        "--auto-correct-threshold",
        min=0.0,
        max=1.0,
        help="Auto-correct failed searches with at least this confidence",
    ),
    require_unique: bool = typer.Option(
        False, "--require-unique", help="Fail replace edits whose search is ambiguous"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print the JSON result"
    ),
):
    """Apply edits and print the JSON result to stdout."""
    if not os.path.isdir(workdir):
        logger.error(f"Working directory does not exist: {workdir}")
        raise typer.Exit(1)

    request = _load_request(file, stdin)
    settings = EditSettings.from_env(
        autocorrect_threshold=auto_correct_threshold,
        require_unique_match=True if require_unique else None,
    )

    if not quiet:
        if request.summary:
            console.print(f"[dim]{request.summary}[/dim]")
        print_header(len(request.edits), workdir, dry_run, partial)

    result = apply_with_transaction(
        workdir,
        request.edits,
        dry_run=dry_run,
        partial=partial,
        settings=settings,
    )

    if not quiet:
        print_result(result, dry_run, partial)

    typer.echo(json.dumps(result.to_dict(), indent=2))
    if not result.success:
        raise typer.Exit(1)
