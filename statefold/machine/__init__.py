"""
Reference statechart transition engine.

The interpreter core only depends on the transition engine contract
(initial_state + transition()); this package is one implementation of it.
"""

from .definition import MachineDefinition, StateNode, TransitionDef
from .engine import Machine, MachineState, create_machine

__all__ = [
    "MachineDefinition",
    "StateNode",
    "TransitionDef",
    "Machine",
    "MachineState",
    "create_machine",
]
