"""
Event helpers.

Events are opaque to the interpreter: a bare string ("TIMER") or a mapping
with a "type" key plus payload fields ({"type": "CLOSE", "overrideAdmin": True}).
They are forwarded verbatim to the transition engine and to every action
factory. Only the transition engine needs to read the type.
"""

from typing import Any, Dict, Mapping

from .errors import InvalidEventError

# Sent by Interpreter.start(); never a valid domain event name.
INIT_EVENT = "@@statefold/init"


def event_type(event: Any) -> str:
    """
    Extract the type identifier of an event.

    Accepts:
    - str: the event is its own type
    - mapping: the "type" key
    - object: the "type" attribute

    Raises:
        InvalidEventError: If no string type can be found
    """
    if isinstance(event, str):
        return event
    if isinstance(event, Mapping):
        etype = event.get("type")
    else:
        etype = getattr(event, "type", None)
    if not isinstance(etype, str):
        raise InvalidEventError(f"Event has no string type: {event!r}", event)
    return etype


def event_object(event: Any) -> Dict[str, Any]:
    """
    Mapping form of an event, as seen by guards.

    A string event "OPEN" becomes {"type": "OPEN"}; a mapping is copied.
    """
    if isinstance(event, str):
        return {"type": event}
    if isinstance(event, Mapping):
        out = dict(event)
        out["type"] = event_type(event)
        return out
    out = dict(getattr(event, "payload", None) or {})
    out["type"] = event_type(event)
    return out


def is_init_event(event: Any) -> bool:
    return isinstance(event, str) and event == INIT_EVENT
