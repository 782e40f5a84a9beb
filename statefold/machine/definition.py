"""
Statechart definition: state-node tree built from a dict configuration.

Configuration format (per node):
    {
        "id": "door",                     # optional, root defaults to "machine"
        "initial": "closed",              # required on compound nodes
        "type": "parallel",               # or "parallel": True
        "entry": [...], "exit": [...],    # also "onEntry" / "onExit"
        "on": {"OPEN": <transition>},
        "states": {"closed": {...}, ...},
        "context": ...,                   # root only, seeds the extended state
    }

A <transition> is a target string, a dict {"target", "cond", "actions",
"internal"}, or a list of those tried in order.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.errors import MachineDefinitionError

ATOMIC = "atomic"
COMPOUND = "compound"
PARALLEL = "parallel"

Path = Tuple[str, ...]
Guard = Callable[[Any, Dict[str, Any]], bool]


@dataclass(frozen=True)
class TransitionDef:
    """
    One candidate transition of a state node.

    Fields:
        source: Path of the node declaring it
        targets: Resolved target paths (empty for targetless transitions)
        cond: Guard (context, event_object) -> bool, None = always
        actions: Raw actions, emitted verbatim
        internal: Do not exit the source when targeting its descendants
    """
    source: Path
    targets: Tuple[Path, ...]
    cond: Optional[Guard]
    actions: Tuple[Any, ...]
    internal: bool


@dataclass
class StateNode:
    key: str
    path: Path
    id: str
    type: str
    order: int
    parent: Optional["StateNode"] = None
    initial: Optional[str] = None
    entry: Tuple[Any, ...] = ()
    exit: Tuple[Any, ...] = ()
    children: Dict[str, "StateNode"] = field(default_factory=dict)
    on: Dict[str, Tuple[TransitionDef, ...]] = field(default_factory=dict)

    @property
    def dotted(self) -> str:
        return ".".join(self.path)

    def is_descendant_of(self, other: "StateNode") -> bool:
        """Proper descendant test."""
        return len(self.path) > len(other.path) and self.path[: len(other.path)] == other.path

    def ancestors(self) -> List["StateNode"]:
        """Proper ancestors, nearest first."""
        out = []
        node = self.parent
        while node is not None:
            out.append(node)
            node = node.parent
        return out


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


class MachineDefinition:
    """
    Parsed state-node tree with resolved transition targets.

    Raises:
        MachineDefinitionError: On structural errors in the configuration
    """

    def __init__(self, config: Dict[str, Any]) -> None:
        if not isinstance(config, dict):
            raise MachineDefinitionError("Machine configuration must be a dict")
        self.config = config
        self.id: str = config.get("id") or config.get("key") or "machine"
        self._order = 0
        self.nodes: Dict[Path, StateNode] = {}
        self.ids: Dict[str, StateNode] = {}
        self.root = self._build(self.id, (), None, config)
        self._resolve_transitions(self.root, config)

    def _build(self, key: str, path: Path, parent: Optional[StateNode], cfg: Dict[str, Any]) -> StateNode:
        if "." in key and parent is not None:
            raise MachineDefinitionError(f"State key must not contain '.': {key!r}")

        states = cfg.get("states") or {}
        if cfg.get("type") == PARALLEL or cfg.get("parallel"):
            node_type = PARALLEL
        elif states:
            node_type = COMPOUND
        else:
            node_type = ATOMIC

        default_id = ".".join((self.id,) + path) if path else self.id
        node = StateNode(
            key=key,
            path=path,
            id=cfg.get("id") or default_id,
            type=node_type,
            order=self._order,
            parent=parent,
            initial=cfg.get("initial"),
            entry=_as_tuple(cfg.get("entry", cfg.get("onEntry"))),
            exit=_as_tuple(cfg.get("exit", cfg.get("onExit"))),
        )
        self._order += 1
        self.nodes[path] = node
        if node.id in self.ids:
            raise MachineDefinitionError(f"Duplicate state id: {node.id!r}")
        self.ids[node.id] = node

        for child_key, child_cfg in states.items():
            node.children[child_key] = self._build(child_key, path + (child_key,), node, child_cfg or {})

        if node_type == COMPOUND:
            if node.initial is None:
                raise MachineDefinitionError(f"Compound state {node.id!r} has no initial state")
            if node.initial not in node.children:
                raise MachineDefinitionError(
                    f"Initial state {node.initial!r} is not a child of {node.id!r}"
                )
        return node

    def _resolve_transitions(self, node: StateNode, cfg: Dict[str, Any]) -> None:
        for event_name, spec in (cfg.get("on") or {}).items():
            node.on[event_name] = tuple(self._transition(node, raw) for raw in self._candidates(spec))
        for child_key, child in node.children.items():
            self._resolve_transitions(child, (cfg.get("states") or {}).get(child_key) or {})

    @staticmethod
    def _candidates(spec: Any) -> List[Dict[str, Any]]:
        items = spec if isinstance(spec, list) else [spec]
        out = []
        for item in items:
            if isinstance(item, str):
                out.append({"target": item})
            elif isinstance(item, dict):
                out.append(item)
            else:
                raise MachineDefinitionError(f"Invalid transition: {item!r}")
        return out

    def _transition(self, source: StateNode, raw: Dict[str, Any]) -> TransitionDef:
        target_specs = _as_tuple(raw.get("target"))
        internal = raw.get("internal")
        if internal is None:
            internal = bool(target_specs) and all(t.startswith(".") for t in target_specs)
        cond = raw.get("cond")
        if cond is not None and not callable(cond):
            raise MachineDefinitionError(f"Guard on {source.id!r} is not callable")
        return TransitionDef(
            source=source.path,
            targets=tuple(self.resolve_target(source, t).path for t in target_specs),
            cond=cond,
            actions=_as_tuple(raw.get("actions")),
            internal=bool(internal),
        )

    def resolve_target(self, source: StateNode, target: str) -> StateNode:
        """
        Resolve a target string from a source node.

        "#id.child" is absolute, ".child" is relative to the source, anything
        else is relative to the source's parent (a sibling path).
        """
        if target.startswith("#"):
            node_id, _, rest = target[1:].partition(".")
            if node_id not in self.ids:
                raise MachineDefinitionError(f"Unknown state id in target {target!r}")
            return self._descend(self.ids[node_id], rest, target)
        if target.startswith("."):
            return self._descend(source, target[1:], target)
        return self._descend(source.parent or source, target, target)

    @staticmethod
    def _descend(node: StateNode, dotted: str, target: str) -> StateNode:
        if not dotted:
            return node
        for key in dotted.split("."):
            if key not in node.children:
                raise MachineDefinitionError(f"Unknown target {target!r} from {node.id!r}")
            node = node.children[key]
        return node
