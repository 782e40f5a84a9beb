#!/usr/bin/env python3
"""
Statefold CLI - Statechart interpreter tooling

Main entrypoint for the statefold command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import inspect, run

# Initialize Typer app
app = typer.Typer(
    name="statefold",
    help="Statechart interpreter with pluggable state updates and outputs",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add standalone commands
app.command("run")(run.run_command)
app.command("inspect")(inspect.inspect_command)


@app.command()
def version():
    """Show version information."""
    from cli import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Statefold CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", "statechart reference engine")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
