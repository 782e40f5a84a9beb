"""
Interpreter configuration.

An interpreter is parameterised by two pure reducers and an action factory
map. Swapping the update reducer switches between copy-on-write and
patch-sequence semantics without touching the interpreter.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .actions import ActionFactory
from .errors import InterpreterConfigError

# Seed of the output fold: what an event without actions returns.
NO_OUTPUT = None

# (extended_state, update_spec) -> extended_state'
UpdateReducer = Callable[[Any, Any], Any]

# (accumulated_outputs, new_outputs) -> accumulated_outputs'
OutputReducer = Callable[[Any, Any], Any]


@dataclass(frozen=True)
class InterpreterConfig:
    """
    Per-interpreter configuration.

    Fields:
        update_state: Pure update reducer, must not mutate its first argument
        merge_outputs: Pure output merge reducer
        action_factory_map: Identifier -> action factory
        no_output: Seed of the output fold
    """
    update_state: UpdateReducer
    merge_outputs: OutputReducer
    action_factory_map: Mapping[str, ActionFactory]
    no_output: Any = NO_OUTPUT

    def __post_init__(self) -> None:
        if not callable(self.update_state):
            raise InterpreterConfigError("update_state must be callable")
        if not callable(self.merge_outputs):
            raise InterpreterConfigError("merge_outputs must be callable")
        if not isinstance(self.action_factory_map, Mapping):
            raise InterpreterConfigError("action_factory_map must be a mapping")
        for name, factory in self.action_factory_map.items():
            if not callable(factory):
                raise InterpreterConfigError(f"Action factory for {name!r} is not callable")
