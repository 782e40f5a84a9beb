"""
Exception types for the statefold interpreter.

Every error raised while processing an event aborts that event: the
interpreter keeps the state committed before the call.
"""

from typing import Any, Optional


class StatefoldError(Exception):
    """Base class for all statefold errors."""
    pass


class InterpreterError(StatefoldError):
    """Raised when an action descriptor cannot be turned into a factory call."""

    def __init__(self, message: str, descriptor: Any = None) -> None:
        super().__init__(message)
        self.descriptor = descriptor


class InvalidActionShapeError(InterpreterError):
    """Raised when an action is neither a callable, a string nor a mapping with a type."""
    pass


class UnresolvedActionFactoryError(InterpreterError):
    """Raised when a named action has no entry in the action factory map."""

    def __init__(self, name: str, descriptor: Any = None) -> None:
        super().__init__(f"No action factory registered for action: {name!r}", descriptor)
        self.name = name


class UnexpectedDescriptorError(InterpreterError):
    """Raised when the transition engine emits a descriptor with a malformed executable."""
    pass


class InvalidActionResultError(InterpreterError):
    """Raised when an action factory returns something other than (updates, outputs)."""

    def __init__(self, message: str, descriptor: Any = None, result: Any = None) -> None:
        super().__init__(message, descriptor)
        self.result = result


class InterpreterConfigError(StatefoldError):
    """Raised when an interpreter configuration is incomplete or mistyped."""
    pass


class InvalidEventError(StatefoldError):
    """Raised when an event carries no usable type identifier."""

    def __init__(self, message: str, event: Optional[Any] = None) -> None:
        super().__init__(message)
        self.event = event


class MachineDefinitionError(StatefoldError):
    """Raised when a statechart configuration cannot be built into a machine."""
    pass


class LoaderError(StatefoldError):
    """Raised when an interpreter factory or an event file cannot be loaded."""
    pass
