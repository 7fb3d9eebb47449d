"""apply-edits CLI - command-line interface."""

from typing import Optional

import typer

from apply_edits import __version__
from apply_edits.cli.apply import app as apply_app
from apply_edits.cli.common import console
from apply_edits.cli.read import app as read_app
from apply_edits.logging_config import setup_logging

app = typer.Typer(
    name="apply-edits",
    help="Apply agent-generated edits to files, atomically by default",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)"
    ),
):
    setup_logging(log_level)


app.command("apply", help="Apply a JSON batch of edits")(
    apply_app.registered_commands[0].callback
)
app.command("read", help="Read files with line numbers")(
    read_app.registered_commands[0].callback
)


@app.command("version")
def version():
    """Show the apply-edits version."""
    console.print(f"apply-edits version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
