"""
Committed interpreter state.

Between two events the pair (control_state, extended_state) is the whole
interpreter state. It is replaced wholesale on each successful commit.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class InterpreterState:
    """
    Immutable committed snapshot.

    Fields:
        control_state: Opaque value owned by the transition engine
        extended_state: Domain data, only ever replaced through the update reducer
        version: Number of commits since construction
    """
    control_state: Any
    extended_state: Any
    version: int = 0

    def with_commit(self, control_state: Any, extended_state: Any) -> "InterpreterState":
        """
        Create the snapshot following a successful event.

        Since InterpreterState is immutable, this returns a new instance.
        """
        return InterpreterState(
            control_state=control_state,
            extended_state=extended_state,
            version=self.version + 1,
        )
