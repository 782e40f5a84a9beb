"""
Load interpreter factories and event files for the command line.

Interpreters hold Python callables (guards, factories, reducers), so they
are referenced as "package.module:attribute" rather than serialized.
"""

import importlib
import json
from pathlib import Path
from typing import Any, List, Union

from .core.errors import LoaderError
from .core.interpreter import Interpreter


def load_interpreter(ref: str) -> Interpreter:
    """
    Build an interpreter from a "module:attr" reference.

    The attribute is either an Interpreter or a zero-argument callable
    returning one.

    Raises:
        LoaderError: Malformed reference, import failure, wrong type
    """
    module_name, sep, attr = ref.partition(":")
    if not sep or not module_name or not attr:
        raise LoaderError(f"Expected 'module:attribute', got {ref!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LoaderError(f"Cannot import {module_name!r}: {e}") from e

    obj: Any = module
    for part in attr.split("."):
        if not hasattr(obj, part):
            raise LoaderError(f"{module_name!r} has no attribute {attr!r}")
        obj = getattr(obj, part)

    if callable(obj) and not isinstance(obj, Interpreter):
        obj = obj()
    if not isinstance(obj, Interpreter):
        raise LoaderError(f"{ref!r} did not produce an Interpreter (got {type(obj).__name__})")
    return obj


def load_events(path: Union[str, Path]) -> List[Any]:
    """
    Read events from a JSON lines file.

    Each non-blank line is one JSON value: a string ("TIMER") or an object
    ({"type": "CLOSE", "overrideAdmin": true}).

    Raises:
        FileNotFoundError: Missing file
        LoaderError: Line is not valid JSON
    """
    events: List[Any] = []
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise LoaderError(f"{path}:{lineno}: invalid JSON event: {e.msg}") from e
    return events
