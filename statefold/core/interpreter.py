"""
Interpreter: drive a transition engine and fold its actions.

For each event the transition engine computes the next control state and
the ordered actions to run. The interpreter resolves each action into a
factory, invokes it against the running extended state, folds its updates
through the update reducer and its outputs through the output reducer,
then commits (control state, extended state) in one step.

Processing is all-or-nothing: if anything raises, nothing is committed.
"""

from typing import Any, Callable, Mapping, Optional, Protocol, Sequence, Tuple

from .actions import as_descriptor, resolve_action_factory, unpack_result
from .config import InterpreterConfig
from .errors import UnexpectedDescriptorError
from .events import INIT_EVENT
from .state import InterpreterState


class TransitionEngine(Protocol):
    """What the interpreter needs from a machine built by a transition engine."""

    @property
    def initial_state(self) -> Any: ...

    def transition(self, control_state: Any, event: Any, extended_state: Any) -> Any: ...


def _actions_of(next_control_state: Any) -> Sequence[Any]:
    actions = getattr(next_control_state, "actions", None)
    if actions is None and isinstance(next_control_state, Mapping):
        actions = next_control_state.get("actions")
    if actions is None:
        raise UnexpectedDescriptorError(
            "Transition engine returned a state without an 'actions' list", next_control_state
        )
    return actions


def process_event(
    machine: TransitionEngine,
    state: InterpreterState,
    event: Any,
    config: InterpreterConfig,
) -> Tuple[InterpreterState, Any]:
    """
    Process one event against a committed state.

    Pure with respect to `state`: the returned snapshot is new, the input
    one is left untouched whatever happens.

    Args:
        machine: Transition engine machine
        state: Committed snapshot before the event
        event: Event, forwarded verbatim to the engine and to every factory
        config: Reducers and action factory map

    Returns:
        (next committed snapshot, accumulated outputs)

    Raises:
        InvalidActionShapeError: An action has an invalid shape
        UnresolvedActionFactoryError: A named action has no factory
        UnexpectedDescriptorError: The engine broke its output contract
        InvalidActionResultError: A factory returned an unreadable result
    """
    next_control_state = machine.transition(state.control_state, event, state.extended_state)

    extended_state = state.extended_state
    outputs = config.no_output

    # Strict emission order: later actions observe earlier updates.
    for raw in _actions_of(next_control_state):
        descriptor = as_descriptor(raw)
        factory = resolve_action_factory(descriptor, config.action_factory_map)
        result = unpack_result(factory(extended_state, event, descriptor), descriptor)
        outputs = config.merge_outputs(outputs, result.outputs)
        extended_state = config.update_state(extended_state, result.updates)

    return state.with_commit(next_control_state, extended_state), outputs


class Interpreter:
    """
    Interpreter handle owning one committed state.

    Usage:
        interpreter = Interpreter(machine, config, context=[])
        interpreter.start()
        outputs = interpreter.send("TIMER")

    Not thread-safe: a multi-threaded host must serialise calls to one
    instance.
    """

    def __init__(self, machine: TransitionEngine, config: InterpreterConfig, context: Any = None) -> None:
        self._machine = machine
        self._config = config
        self._state = InterpreterState(
            control_state=machine.initial_state,
            extended_state=context,
        )

    @property
    def machine(self) -> TransitionEngine:
        return self._machine

    @property
    def config(self) -> InterpreterConfig:
        return self._config

    @property
    def state(self) -> InterpreterState:
        return self._state

    @property
    def control_state(self) -> Any:
        return self._state.control_state

    @property
    def extended_state(self) -> Any:
        return self._state.extended_state

    def start(self) -> Any:
        """
        Send the reserved initialisation event.

        Runs the entry actions of the initial control state and returns
        their outputs. Calling it again re-runs them against the current
        extended state.
        """
        return self.send(INIT_EVENT)

    def send(self, event: Any) -> Any:
        """
        Submit one event and return the outputs it produced.

        Commits the new state only if every action succeeded; on error the
        exception propagates and the previous state is kept.
        """
        next_state, outputs = process_event(self._machine, self._state, event, self._config)
        self._state = next_state
        return outputs

    def __repr__(self) -> str:
        return f"Interpreter(control_state={self.control_state!r}, version={self._state.version})"


def create_interpreter(
    machine_factory: Callable[[Any], TransitionEngine],
    machine_config: Any,
    config: InterpreterConfig,
    context: Optional[Any] = None,
) -> Interpreter:
    """
    Build a machine with the given engine and wrap it in an interpreter.

    The extended state is seeded from machine_config["context"] unless an
    explicit context is passed.
    """
    machine = machine_factory(machine_config)
    if context is None and isinstance(machine_config, Mapping):
        context = machine_config.get("context")
    return Interpreter(machine, config, context=context)
