"""
Replay runner: feed an event sequence through an interpreter.

Events are sent strictly in order. The same machine, reducers and events
always produce the same outputs, which outputs_digest() makes cheap to
compare.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from ..core.canonical import digest
from ..core.events import INIT_EVENT
from ..core.interpreter import Interpreter
from ..logging_config import get_logger


@dataclass(frozen=True)
class RunResult:
    """
    Result of a run.

    Fields:
        outputs: Outputs per event (start() outputs first when started)
        applied: Number of events committed
        control_state: Control state after the last event
        extended_state: Extended state after the last event
    """
    outputs: List[Any]
    applied: int
    control_state: Any
    extended_state: Any


def run_events(
    interpreter: Interpreter,
    events: Iterable[Any],
    start: bool = False,
    run_id: Optional[str] = None,
) -> RunResult:
    """
    Send events to an interpreter in order.

    Args:
        interpreter: Interpreter to drive (its state advances)
        events: Events to send
        start: Send the initialisation event first
        run_id: Correlation id for logs

    Returns:
        RunResult with the outputs of every event

    Raises:
        Whatever the interpreter raises; events before the failing one
        stay committed
    """
    logger = get_logger(__name__, run_id=run_id)
    outputs: List[Any] = []
    count = 0

    to_send: List[Any] = [INIT_EVENT] if start else []
    to_send.extend(events)

    for idx, ev in enumerate(to_send):
        try:
            out = interpreter.send(ev)
        except Exception:
            logger.error("Event processing failed at index %d: %r", idx, ev)
            raise
        logger.debug("Event %d processed: %r (version %d)", idx, ev, interpreter.state.version)
        outputs.append(out)
        count += 1

    return RunResult(
        outputs=outputs,
        applied=count,
        control_state=interpreter.control_state,
        extended_state=interpreter.extended_state,
    )


def outputs_digest(outputs: List[Any]) -> str:
    """SHA-256 of the canonical JSON form of an output sequence."""
    return digest(outputs)
