"""
Action descriptors and the action resolver.

A transition engine emits, for each processed event, an ordered list of
action descriptors. Each descriptor is normalised into one of two shapes:

- Embedded: carries its own action factory (a callable)
- Named: carries an identifier looked up in the configured factory map

The resolver turns a descriptor into the factory to invoke. It is a pure
lookup: no side effects, no fallback.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, NamedTuple, Optional, Union

from .errors import (
    InvalidActionResultError,
    InvalidActionShapeError,
    UnexpectedDescriptorError,
    UnresolvedActionFactoryError,
)


class ActionResult(NamedTuple):
    """
    What an action factory declares.

    Fields:
        updates: Update spec handed to the update reducer (opaque here)
        outputs: Output batch handed to the output merge reducer (opaque here)
    """
    updates: Any = None
    outputs: Any = None


@dataclass(frozen=True)
class Embedded:
    """Descriptor carrying a directly callable action factory."""
    factory: Callable[..., Any]
    name: Optional[str] = None


@dataclass(frozen=True)
class Named:
    """Descriptor referring to an action factory by identifier."""
    name: str
    params: Dict[str, Any] = field(default_factory=dict)


ActionDescriptor = Union[Embedded, Named]

# Factory signature: (extended_state, event, descriptor) -> ActionResult
ActionFactory = Callable[[Any, Any, ActionDescriptor], Any]


def _descriptor_fields(raw: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(raw, Mapping):
        return raw
    if not (hasattr(raw, "type") or hasattr(raw, "exec")):
        return None
    fields = dict(getattr(raw, "__dict__", {}))
    for key in ("type", "exec"):
        if key not in fields and hasattr(raw, key):
            fields[key] = getattr(raw, key)
    return fields


def as_descriptor(raw: Any) -> ActionDescriptor:
    """
    Normalise one raw action emitted by a transition engine.

    Accepted shapes:
    - Embedded / Named: returned as is
    - callable: embedded factory
    - str: named reference
    - mapping, or object with "type" / "exec" attributes: an "exec"
      callable wins over the "type" identifier; remaining keys (or
      instance attributes) become the named descriptor's params

    Raises:
        InvalidActionShapeError: Raw action is none of the above
        UnexpectedDescriptorError: Descriptor carries a non-callable "exec"
    """
    if isinstance(raw, (Embedded, Named)):
        return raw
    if isinstance(raw, str):
        return Named(name=raw)
    if callable(raw):
        return Embedded(factory=raw, name=getattr(raw, "__name__", None))
    fields = _descriptor_fields(raw)
    if fields is not None:
        executable = fields.get("exec")
        name = fields.get("type")
        if callable(executable):
            return Embedded(factory=executable, name=name if isinstance(name, str) else None)
        if executable is not None:
            raise UnexpectedDescriptorError(
                f"Action 'exec' must be callable, got {type(executable).__name__}", raw
            )
        if isinstance(name, str):
            params = {k: v for k, v in fields.items() if k not in ("type", "exec")}
            return Named(name=name, params=params)
    raise InvalidActionShapeError(
        f"Action must be a callable, a string or carry a 'type', got {raw!r}", raw
    )


def resolve_action_factory(
    descriptor: ActionDescriptor,
    factory_map: Mapping[str, ActionFactory],
) -> ActionFactory:
    """
    Return the action factory for a descriptor.

    Args:
        descriptor: Normalised descriptor (see as_descriptor)
        factory_map: Identifier -> factory, exact-match lookup

    Returns:
        The embedded factory, or the mapped one for a named descriptor

    Raises:
        UnresolvedActionFactoryError: Named identifier not in factory_map
        UnexpectedDescriptorError: Descriptor is not Embedded or Named
    """
    if isinstance(descriptor, Embedded):
        return descriptor.factory
    if isinstance(descriptor, Named):
        if descriptor.name not in factory_map:
            raise UnresolvedActionFactoryError(descriptor.name, descriptor)
        return factory_map[descriptor.name]
    raise UnexpectedDescriptorError(
        f"Unexpected descriptor type: {type(descriptor).__name__}", descriptor
    )


def unpack_result(result: Any, descriptor: Any = None) -> ActionResult:
    """
    Read (updates, outputs) from what a factory returned.

    Factories return an ActionResult, a (updates, outputs) tuple or list,
    or a mapping with "updates" / "outputs" keys (missing keys read as None).

    Raises:
        InvalidActionResultError: Result has none of these shapes
    """
    if isinstance(result, ActionResult):
        return result
    if isinstance(result, Mapping):
        return ActionResult(updates=result.get("updates"), outputs=result.get("outputs"))
    if isinstance(result, (tuple, list)) and len(result) == 2:
        updates, outputs = result
        return ActionResult(updates=updates, outputs=outputs)
    raise InvalidActionResultError(
        f"Action factory must return (updates, outputs), got {result!r}", descriptor, result
    )
