"""
Statefold

Statechart interpreter with pluggable extended-state updates and output
aggregation. A transition engine decides where the machine goes; statefold
runs the actions it emits, folds their updates and outputs, and commits
the result atomically per event.
"""

from .core import (
    INIT_EVENT,
    NO_OUTPUT,
    ActionResult,
    Embedded,
    Interpreter,
    InterpreterConfig,
    Named,
    create_interpreter,
    process_event,
)

__version__ = "0.1.0"

__all__ = [
    "INIT_EVENT",
    "NO_OUTPUT",
    "ActionResult",
    "Embedded",
    "Interpreter",
    "InterpreterConfig",
    "Named",
    "create_interpreter",
    "process_event",
]
