#!/usr/bin/env python3
"""
Replayflow CLI - Resumable Conversational Flows

Main entrypoint for the replayflow command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import demo, state

app = typer.Typer(
    name="replayflow",
    help="Resumable conversational flows CLI",
    add_completion=False,
)

console = Console()

app.add_typer(state.app, name="state", help="Stored continuation operations")
app.add_typer(demo.app, name="demo", help="Run example flows in the terminal")


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from replayflow import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Replayflow CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
