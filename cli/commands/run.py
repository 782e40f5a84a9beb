"""
Run command: send a file of events through an interpreter
"""

import json
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from statefold.core.canonical import canonicalize
from statefold.loader import load_events, load_interpreter
from statefold.logging_config import setup_logging
from statefold.replay import outputs_digest, run_events

console = Console()


def control_value(control_state: Any) -> Any:
    """Printable form of a control state (the engine's value when it has one)."""
    return getattr(control_state, "value", control_state)


def to_json(obj: Any) -> str:
    return json.dumps(canonicalize(obj), indent=2, ensure_ascii=False, default=repr)


def run_command(
    interpreter_ref: str = typer.Option(
        ...,
        "--interpreter",
        "-i",
        help="Interpreter factory as module:attribute",
    ),
    events_path: str = typer.Option(..., "--events", "-e", help="Path to JSON lines event file"),
    start: bool = typer.Option(False, "--start", "-s", help="Send the initialisation event first"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Enable logging at this level"),
):
    """
    Run events through an interpreter and show the outputs of each.

    Examples:
        statefold run -i statefold.examples.traffic_light:build_interpreter -e events.jsonl
        statefold run -i statefold.examples.door:build_interpreter -e events.jsonl --json
    """
    if log_level:
        setup_logging(level=log_level, log_format="text")

    try:
        interpreter = load_interpreter(interpreter_ref)
        events = load_events(events_path)
        result = run_events(interpreter, events, start=start, run_id=interpreter_ref)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Event file not found", "path": events_path}))
        else:
            console.print(f"[red]Error: Event file not found:[/red] {events_path}")
        raise typer.Exit(2)
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e), "type": type(e).__name__}))
        else:
            console.print(f"[red]Error ({type(e).__name__}):[/red] {e}")
        raise typer.Exit(2)

    digest = outputs_digest(result.outputs)

    if json_output:
        print(to_json({
            "success": True,
            "applied": result.applied,
            "outputs": result.outputs,
            "control_state": control_value(result.control_state),
            "extended_state": result.extended_state,
            "digest": digest,
        }))
        return

    sent = (["<start>"] if start else []) + [json.dumps(ev) for ev in events]
    table = Table(title=f"Run: {interpreter_ref}")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Event", style="green")
    table.add_column("Outputs", style="yellow")

    for idx, (label, out) in enumerate(zip(sent, result.outputs)):
        table.add_row(str(idx), escape(label), escape(json.dumps(canonicalize(out), ensure_ascii=False, default=repr)))

    console.print(table)
    console.print(f"[green]✓ Applied {result.applied} events[/green]")
    console.print(f"  Control state: [cyan]{escape(json.dumps(canonicalize(control_value(result.control_state)), default=repr))}[/cyan]")
    console.print(f"  Extended state: [cyan]{escape(json.dumps(canonicalize(result.extended_state), default=repr))}[/cyan]")
    console.print(f"  Outputs digest: [yellow]{digest}[/yellow]")
