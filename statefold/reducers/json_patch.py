"""
Patch-sequence update reducer (RFC 6902).

Update specs are lists of JSON patch operations, e.g.
[{"op": "add", "path": "/isAdmin", "value": False}]. Patches are applied
to a copy; the input document is never modified.
"""

from typing import Any, Dict, List, Optional

import jsonpatch

# Update spec meaning "leave the extended state as is".
NO_JSON_PATCH_UPDATES: List[Dict[str, Any]] = []


def json_patch_reducer(extended_state: Any, operations: Optional[List[Dict[str, Any]]]) -> Any:
    """
    Apply a sequence of JSON patch operations.

    Args:
        extended_state: JSON-like document (not mutated)
        operations: Patch operations, or None / [] for no update

    Returns:
        Patched copy of the document

    Raises:
        jsonpatch.JsonPatchException: Operation is invalid or fails a test
        jsonpointer.JsonPointerException: Path does not exist
    """
    if not operations:
        return extended_state
    return jsonpatch.apply_patch(extended_state, operations, in_place=False)
