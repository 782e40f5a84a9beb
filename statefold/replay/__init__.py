"""
Replay system for driving interpreters over event sequences.

Must be 100% deterministic: same events -> same outputs.
"""

from .runner import RunResult, outputs_digest, run_events

__all__ = [
    "RunResult",
    "outputs_digest",
    "run_events",
]
