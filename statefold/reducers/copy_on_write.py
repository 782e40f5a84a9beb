"""
Copy-on-write update reducer.

Update specs are recipes: a callable receiving a private draft of the
extended state. The recipe either mutates the draft and returns None, or
leaves the draft alone and returns a replacement. Doing both is an error.
The input state is never touched, so earlier snapshots stay valid.
"""

import copy
from typing import Any, Callable, Optional

# Update spec meaning "leave the extended state as is".
NO_COPY_ON_WRITE_UPDATES = None

Recipe = Callable[[Any], Any]


def copy_on_write_reducer(extended_state: Any, recipe: Optional[Recipe]) -> Any:
    """
    Apply a recipe to a deep copy of the extended state.

    Args:
        extended_state: Current extended state (not mutated)
        recipe: Callable draft -> None | replacement, or None for no update

    Returns:
        The draft after the recipe ran, or the recipe's return value when
        it is not None

    Raises:
        TypeError: Recipe is not callable, or it modified the draft and
            also returned a value
    """
    if recipe is NO_COPY_ON_WRITE_UPDATES:
        return extended_state
    if not callable(recipe):
        raise TypeError(f"Copy-on-write updates must be a callable recipe, got {type(recipe).__name__}")

    draft = copy.deepcopy(extended_state)
    replacement = recipe(draft)
    if replacement is None:
        return draft
    if draft != extended_state:
        raise TypeError(
            "Copy-on-write recipe modified its draft and also returned "
            f"{type(replacement).__name__}; return None or leave the draft untouched"
        )
    return replacement
