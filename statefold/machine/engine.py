"""
Reference transition engine for hierarchical and parallel statecharts.

Given a control state, an event and the extended state, Machine.transition
computes the next control state and the ordered actions to run:

1. exit actions of exited nodes, deepest first
2. actions of the selected transitions
3. entry actions of entered nodes, outermost first

The engine never runs actions. It hands them to the interpreter verbatim.
"""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from ..core.events import event_object, event_type, is_init_event
from .definition import ATOMIC, COMPOUND, PARALLEL, MachineDefinition, Path, StateNode, TransitionDef


@dataclass(frozen=True)
class MachineState:
    """
    Control state produced by the engine.

    Fields:
        value: "green", {"closed": "idle"}, {"regionA": "x", "regionB": "y"}
        configuration: Active node paths ("closed", "closed.idle"), document order
        actions: Raw actions to run for the transition that produced this state
        changed: Whether a transition was taken
    """
    value: Any
    configuration: Tuple[str, ...]
    actions: Tuple[Any, ...] = ()
    changed: bool = False

    def matches(self, dotted: str) -> bool:
        """Whether the node at this dotted path is active."""
        return dotted in self.configuration


class Machine:
    """
    Statechart machine built from a dict configuration.

    Usage:
        machine = create_machine({"initial": "green", "states": {...}})
        nxt = machine.transition(machine.initial_state, "TIMER", context)
        nxt.actions  # to be run by the interpreter
    """

    def __init__(self, config: Dict[str, Any]) -> None:
        self.definition = MachineDefinition(config)
        self._initial_state = self._enter_initial()

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def initial_state(self) -> MachineState:
        return self._initial_state

    def node(self, dotted: str) -> StateNode:
        return self.definition.nodes[tuple(dotted.split(".")) if dotted else ()]

    def state_paths(self) -> List[str]:
        """Dotted paths of every node, document order, root excluded."""
        nodes = sorted(self.definition.nodes.values(), key=lambda n: n.order)
        return [n.dotted for n in nodes if n.path]

    def transition(self, state: Any, event: Any, context: Any = None) -> MachineState:
        """
        Compute the next control state.

        Args:
            state: Current MachineState, or a dotted path of a node to start from
            event: Event (string or mapping with "type")
            context: Extended state, read by guards

        Returns:
            Next MachineState; unchanged configuration and no actions when no
            transition is enabled
        """
        if is_init_event(event):
            return self._enter_initial()

        active = self._active_set(state)
        etype = event_type(event)
        ev_obj = event_object(event)

        selected = self._select(active, etype, ev_obj, context)
        if not selected:
            return MachineState(
                value=self._value(self.definition.root, active),
                configuration=self._configuration(active),
                actions=(),
                changed=False,
            )

        exit_set: Set[Path] = set()
        entry_set: Set[Path] = set()
        for t in selected:
            domain = self._domain(t)
            if domain is None:
                continue
            exit_set |= self._exit_set(domain, active)
            entry_set |= self._entry_set(domain, t.targets)

        actions: List[Any] = []
        for path in self._ordered(exit_set, reverse=True):
            actions.extend(self.definition.nodes[path].exit)
        for t in selected:
            actions.extend(t.actions)
        for path in self._ordered(entry_set):
            actions.extend(self.definition.nodes[path].entry)

        next_active = (active - exit_set) | entry_set
        return MachineState(
            value=self._value(self.definition.root, next_active),
            configuration=self._configuration(next_active),
            actions=tuple(actions),
            changed=True,
        )

    def _enter_initial(self) -> MachineState:
        entered: Set[Path] = set()
        self._add_default(self.definition.root, entered)
        actions: List[Any] = []
        for path in self._ordered(entered):
            actions.extend(self.definition.nodes[path].entry)
        return MachineState(
            value=self._value(self.definition.root, entered),
            configuration=self._configuration(entered),
            actions=tuple(actions),
            changed=True,
        )

    def _active_set(self, state: Any) -> FrozenSet[Path]:
        if isinstance(state, MachineState):
            paths = {tuple(p.split(".")) for p in state.configuration}
            return frozenset(paths | {()})
        if isinstance(state, str):
            target = self.node(state)
            active: Set[Path] = set()
            for anc in target.ancestors():
                active.add(anc.path)
            self._add_default(target, active)
            # Regions of parallel ancestors enter their defaults too.
            for anc in target.ancestors():
                if anc.type == PARALLEL:
                    for child in anc.children.values():
                        if not any(p[: len(child.path)] == child.path for p in active):
                            self._add_default(child, active)
            return frozenset(active)
        raise TypeError(f"Unsupported control state: {state!r}")

    def _select(self, active: FrozenSet[Path], etype: str, ev_obj: Dict[str, Any], context: Any) -> List[TransitionDef]:
        nodes = self.definition.nodes
        atomic = [nodes[p] for p in self._ordered(active) if nodes[p].type == ATOMIC]
        selected: List[TransitionDef] = []
        claimed: Set[Path] = set()
        for leaf in atomic:
            found = self._first_enabled(leaf, etype, ev_obj, context)
            if found is None or any(found is t for t in selected):
                continue
            domain = self._domain(found)
            exits = self._exit_set(domain, active) if domain is not None else set()
            if exits & claimed:
                continue
            claimed |= exits
            selected.append(found)
        return selected

    @staticmethod
    def _first_enabled(leaf: StateNode, etype: str, ev_obj: Dict[str, Any], context: Any) -> Optional[TransitionDef]:
        node: Optional[StateNode] = leaf
        while node is not None:
            for t in node.on.get(etype, ()):
                if t.cond is None or t.cond(context, ev_obj):
                    return t
            node = node.parent
        return None

    def _domain(self, t: TransitionDef) -> Optional[StateNode]:
        if not t.targets:
            return None
        nodes = self.definition.nodes
        source = nodes[t.source]
        targets = [nodes[p] for p in t.targets]
        if t.internal and source.type == COMPOUND and all(x.is_descendant_of(source) for x in targets):
            return source
        for anc in source.ancestors():
            if anc.type == PARALLEL and anc.parent is not None:
                continue
            if all(x.is_descendant_of(anc) for x in targets):
                return anc
        return self.definition.root

    @staticmethod
    def _exit_set(domain: StateNode, active: Iterable[Path]) -> Set[Path]:
        n = len(domain.path)
        return {p for p in active if len(p) > n and p[:n] == domain.path}

    def _entry_set(self, domain: StateNode, targets: Tuple[Path, ...]) -> Set[Path]:
        nodes = self.definition.nodes
        entered: Set[Path] = set()
        for path in targets:
            target = nodes[path]
            self._add_default(target, entered)
            chain = [a for a in target.ancestors() if a.is_descendant_of(domain)]
            for anc in chain:
                entered.add(anc.path)
            for anc in chain:
                if anc.type != PARALLEL:
                    continue
                for child in anc.children.values():
                    if not any(p[: len(child.path)] == child.path for p in entered):
                        self._add_default(child, entered)
        return entered

    def _add_default(self, node: StateNode, entered: Set[Path]) -> None:
        entered.add(node.path)
        if node.type == COMPOUND:
            self._add_default(node.children[node.initial], entered)
        elif node.type == PARALLEL:
            for child in node.children.values():
                self._add_default(child, entered)

    def _ordered(self, paths: Iterable[Path], reverse: bool = False) -> List[Path]:
        nodes = self.definition.nodes
        return sorted(paths, key=lambda p: nodes[p].order, reverse=reverse)

    def _configuration(self, active: Iterable[Path]) -> Tuple[str, ...]:
        return tuple(".".join(p) for p in self._ordered(active) if p)

    def _value(self, node: StateNode, active: Iterable[Path]) -> Any:
        active = set(active)
        if node.type == COMPOUND:
            child = next(c for c in node.children.values() if c.path in active)
            if child.type == ATOMIC:
                return child.key
            return {child.key: self._value(child, active)}
        if node.type == PARALLEL:
            return {
                c.key: ({} if c.type == ATOMIC else self._value(c, active))
                for c in node.children.values()
            }
        return node.key


def create_machine(config: Dict[str, Any]) -> Machine:
    """Machine factory, the injectable form handed to create_interpreter."""
    return Machine(config)
