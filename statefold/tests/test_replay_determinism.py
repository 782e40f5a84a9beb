"""
Tests for replay determinism.

Critical: the same events must produce identical outputs across runs.
"""

import logging

import pytest

from statefold.core import UnresolvedActionFactoryError
from statefold.examples import door, intersection, traffic_light
from statefold.replay import outputs_digest, run_events


def test_replay_determinism_100_runs():
    """Running the same events 100 times must produce identical outputs."""
    events = ["TIMER"] * 12

    digests = set()
    for _ in range(100):
        result = run_events(traffic_light.build_interpreter(), events)
        digests.add(outputs_digest(result.outputs))

    assert len(digests) == 1


def test_run_collects_outputs_per_event():
    """One output entry per event, in order."""
    result = run_events(door.build_interpreter(), ["OPEN", {"type": "CLOSE", "overrideAdmin": True}, "OPEN"])

    assert result.applied == 3
    assert result.outputs == [None, ["admin rights overriden"], ["Entered .closed.error!", "OPEN"]]
    assert result.extended_state == {"isAdmin": False}
    assert result.control_state.value == {"closed": "error"}


def test_run_with_start():
    """start=True puts the initialisation outputs first."""
    result = run_events(intersection.build_interpreter(), ["TIMER"], start=True)

    assert result.applied == 2
    assert result.outputs == [
        ["northSouth:green", "eastWest:red"],
        ["northSouth:yellow", "eastWest:green"],
    ]
    assert result.extended_state == {"northSouth": 2, "eastWest": 2}


def test_run_empty_events():
    """No events: nothing applied, initial state returned."""
    interpreter = traffic_light.build_interpreter()
    result = run_events(interpreter, [])

    assert result.applied == 0
    assert result.outputs == []
    assert result.control_state is interpreter.machine.initial_state


def test_run_failure_keeps_previous_commits(caplog):
    """A failing event is logged and re-raised; earlier events stay committed."""
    interpreter = traffic_light.build_interpreter()
    # logGreen is missing: the fourth TIMER cannot be processed
    factories = dict(interpreter.config.action_factory_map)
    del factories["logGreen"]
    interpreter = type(interpreter)(
        interpreter.machine,
        type(interpreter.config)(
            update_state=interpreter.config.update_state,
            merge_outputs=interpreter.config.merge_outputs,
            action_factory_map=factories,
        ),
        context=[],
    )

    with caplog.at_level(logging.ERROR):
        with pytest.raises(UnresolvedActionFactoryError):
            run_events(interpreter, ["TIMER"] * 5, run_id="light-run")

    assert interpreter.state.version == 3
    assert interpreter.control_state.value == "red"
    assert interpreter.extended_state == ["green", "yellow", "yellow"]
    assert any("failed at index 3" in r.getMessage() for r in caplog.records)
    assert all(r.run_id == "light-run" for r in caplog.records)


def test_digest_ignores_key_order():
    """Digests compare canonical forms."""
    assert outputs_digest([{"a": 1, "b": 2}]) == outputs_digest([{"b": 2, "a": 1}])
    assert outputs_digest([["a"]]) != outputs_digest([["b"]])
