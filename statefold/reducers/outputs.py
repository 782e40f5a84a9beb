"""
Output merge reducer: list concatenation.

Each action returns a list of outputs (commands, log lines, ...). They are
concatenated in action order. The fold starts at NO_OUTPUT (None), so an
event with no action returns None rather than an empty list.
"""

from typing import Any, Iterable, List, Optional


def concat_outputs(accumulated: Optional[List[Any]], outputs: Optional[Iterable[Any]]) -> List[Any]:
    """
    Append a batch of outputs to the accumulator.

    Args:
        accumulated: Outputs so far, None before the first action
        outputs: Batch returned by one action, None for nothing

    Returns:
        New list; neither argument is modified
    """
    merged = list(accumulated or [])
    if outputs is not None:
        merged.extend(outputs)
    return merged
