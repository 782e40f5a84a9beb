"""
Core interpreter primitives.

This module provides the pieces of the interpreter loop:
- Action descriptors and the action resolver
- InterpreterConfig: pluggable update and output reducers
- InterpreterState: committed (control state, extended state) pair
- process_event / Interpreter: the event processor and its handle
- Canonical: deterministic serialization for comparing runs

Nothing here performs I/O or logging.
"""

from .actions import (
    ActionDescriptor,
    ActionFactory,
    ActionResult,
    Embedded,
    Named,
    as_descriptor,
    resolve_action_factory,
)
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str, digest
from .config import NO_OUTPUT, InterpreterConfig, OutputReducer, UpdateReducer
from .errors import (
    InterpreterConfigError,
    InterpreterError,
    InvalidActionResultError,
    InvalidActionShapeError,
    InvalidEventError,
    LoaderError,
    MachineDefinitionError,
    StatefoldError,
    UnexpectedDescriptorError,
    UnresolvedActionFactoryError,
)
from .events import INIT_EVENT, event_object, event_type
from .interpreter import Interpreter, TransitionEngine, create_interpreter, process_event
from .state import InterpreterState

__all__ = [
    "ActionDescriptor",
    "ActionFactory",
    "ActionResult",
    "Embedded",
    "Named",
    "as_descriptor",
    "resolve_action_factory",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "digest",
    "NO_OUTPUT",
    "InterpreterConfig",
    "OutputReducer",
    "UpdateReducer",
    "InterpreterConfigError",
    "InterpreterError",
    "InvalidActionResultError",
    "InvalidActionShapeError",
    "InvalidEventError",
    "LoaderError",
    "MachineDefinitionError",
    "StatefoldError",
    "UnexpectedDescriptorError",
    "UnresolvedActionFactoryError",
    "INIT_EVENT",
    "event_object",
    "event_type",
    "Interpreter",
    "TransitionEngine",
    "create_interpreter",
    "process_event",
    "InterpreterState",
]
