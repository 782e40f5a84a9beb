"""
Test suite for the statefold interpreter.

Focus areas:
- Action resolution and descriptor shapes
- Atomic commit per event
- Reducer purity
- Replay determinism
- Reference statechart engine
"""
