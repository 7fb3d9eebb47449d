"""Rich rendering of apply results for the terminal."""

from rich.markup import escape
from rich.panel import Panel

from apply_edits.cli.common import console
from apply_edits.models.outcomes import ApplyResult, ClosestMatch, EditOutcome, ErrorOutcome, WarningOutcome

_PREVIEW_LINES = 5


def print_header(edit_count: int, workdir: str, dry_run: bool, partial: bool) -> None:
    console.print(f"[bold]apply-edits[/bold]: {edit_count} edit(s) in [cyan]{escape(workdir)}[/cyan]")
    if dry_run:
        console.print("[yellow]DRY RUN[/yellow] - no files will be modified")
    elif partial:
        console.print("[yellow]PARTIAL[/yellow] - successful edits are kept even if others fail")
    else:
        console.print("[blue]ATOMIC[/blue] - all edits succeed or none are applied")
    console.print()


def _print_closest_match(match: ClosestMatch) -> None:
    console.print(
        f"    [dim]line {match.line}[/dim] ({int(match.similarity * 100)}% similar)"
    )
    lines = match.content.split("\n")
    for line in lines[:_PREVIEW_LINES]:
        console.print(f"      [dim]|[/dim] {escape(line)}")
    if len(lines) > _PREVIEW_LINES:
        console.print(f"      [dim]| ... ({len(lines) - _PREVIEW_LINES} more lines)[/dim]")


def print_outcome(outcome: EditOutcome) -> None:
    label = escape(f"[{outcome.index}] {outcome.edit_type} {outcome.path}")

    if isinstance(outcome, ErrorOutcome):
        console.print(f"[red]✗[/red] {label}: [red]{escape(outcome.message)}[/red]")
        if outcome.search_preview:
            console.print(f"    [dim]searched for:[/dim] {escape(outcome.search_preview)}")
        if outcome.closest_matches:
            console.print("    [dim]closest matches:[/dim]")
            for match in outcome.closest_matches:
                _print_closest_match(match)
        if outcome.hint:
            console.print(f"    [cyan]hint:[/cyan] {escape(outcome.hint)}")
    elif isinstance(outcome, WarningOutcome):
        console.print(f"[yellow]![/yellow] {label}: {escape(outcome.message)}")
        console.print(f"    [yellow]{escape(outcome.warning)}[/yellow]")
    else:
        console.print(f"[green]✓[/green] {label}: {escape(outcome.message or 'ok')}")


def print_summary(result: ApplyResult, dry_run: bool, partial: bool) -> None:
    console.print()
    if result.success:
        style, title = "green", "Dry run passed" if dry_run else "All edits applied"
    elif dry_run:
        style, title = "red", "Dry run found failures"
    elif partial:
        style, title = "yellow", "Some edits failed"
    else:
        style, title = "red", "Edits failed - all changes rolled back"

    console.print(
        Panel(
            f"applied: {result.applied}   failed: {result.failed}",
            title=title,
            border_style=style,
            expand=False,
        )
    )


def print_result(result: ApplyResult, dry_run: bool, partial: bool) -> None:
    for outcome in result.edits:
        print_outcome(outcome)
    print_summary(result, dry_run, partial)
