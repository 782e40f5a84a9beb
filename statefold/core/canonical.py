"""
Canonical serialization for output and state comparison.

Two runs of the same machine over the same events must produce the same
outputs. Comparing them goes through these functions so that dict ordering
and container types do not create spurious differences.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested data to canonical form.

    Rules:
    - dict keys stringified and sorted
    - tuples converted to lists
    - sets and frozensets converted to sorted lists
    - dataclass instances converted to dicts
    - recursive normalization
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return canonicalize(asdict(obj))
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((canonicalize(x) for x in obj), key=lambda x: json.dumps(x, sort_keys=True, default=repr))
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Values JSON cannot represent (callables, custom objects) are written
    with repr().

    Returns:
        UTF-8 encoded JSON bytes
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=repr)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string (for display or storage).

    Same guarantees as canonical_json_bytes but returns string.
    """
    return canonical_json_bytes(obj).decode("utf-8")


def digest(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form."""
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()
