"""
Inspect command: show an interpreter's state before any event
"""

import json

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from statefold.loader import load_interpreter

from .run import control_value, to_json

console = Console()


def inspect_command(
    interpreter_ref: str = typer.Option(
        ...,
        "--interpreter",
        "-i",
        help="Interpreter factory as module:attribute",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show control state, active configuration and extended state.

    Examples:
        statefold inspect -i statefold.examples.door:build_interpreter
    """
    try:
        interpreter = load_interpreter(interpreter_ref)
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    control_state = interpreter.control_state
    configuration = list(getattr(control_state, "configuration", ()))

    if json_output:
        print(to_json({
            "control_state": control_value(control_state),
            "configuration": configuration,
            "extended_state": interpreter.extended_state,
            "actions": sorted(interpreter.config.action_factory_map.keys()),
        }))
        return

    table = Table(show_header=False, box=None)
    table.add_row("[bold]Control state[/bold]", escape(json.dumps(control_value(control_state), default=repr)))
    table.add_row("[bold]Configuration[/bold]", ", ".join(configuration) or "-")
    table.add_row("[bold]Extended state[/bold]", escape(json.dumps(interpreter.extended_state, default=repr)))
    table.add_row("[bold]Actions[/bold]", ", ".join(sorted(interpreter.config.action_factory_map)) or "-")
    console.print(table)
