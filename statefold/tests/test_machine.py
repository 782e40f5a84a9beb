"""
Tests for the reference statechart engine.

The engine computes control states and action lists; it never runs actions.
"""

import pytest

from statefold.core import INIT_EVENT, InvalidEventError, MachineDefinitionError
from statefold.examples import door, intersection, traffic_light
from statefold.machine import MachineState, create_machine


def nested_config():
    return {
        "id": "app",
        "initial": "p",
        "states": {
            "p": {
                "initial": "c1",
                "entry": ["enterP"],
                "exit": ["exitP"],
                "on": {
                    "SWITCH": {"target": ".c2", "actions": ["switching"]},
                    "RESTART": {"target": "p", "actions": ["restarting"]},
                    "PING": {"actions": ["pong"]},
                },
                "states": {
                    "c1": {"entry": ["enterC1"], "exit": ["exitC1"]},
                    "c2": {"entry": ["enterC2"], "exit": ["exitC2"], "on": {"JUMP": "#app.q"}},
                },
            },
            "q": {"entry": ["enterQ"], "on": {"BACK": {"target": "p.c2", "actions": ["back"]}}},
        },
    }


def test_initial_state_flat():
    """Flat machine value is the atomic state key."""
    machine = create_machine(traffic_light.machine_config())
    assert machine.initial_state.value == "green"
    assert machine.initial_state.configuration == ("green",)


def test_initial_state_hierarchical():
    """Compound values nest; configuration lists ancestors first."""
    machine = create_machine(door.machine_config())
    assert machine.initial_state.value == {"closed": "idle"}
    assert machine.initial_state.configuration == ("closed", "closed.idle")
    assert machine.initial_state.matches("closed.idle")
    assert not machine.initial_state.matches("opened")


def test_initial_state_parallel():
    """Parallel values list every region."""
    machine = create_machine(intersection.machine_config())
    assert machine.initial_state.value == {"northSouthLight": "green", "eastWestLight": "red"}


def test_initial_state_carries_entry_actions():
    """The initial state lists entry actions outermost first."""
    machine = create_machine(nested_config())
    assert machine.initial_state.actions == ("enterP", "enterC1")


def test_action_order_exit_transition_entry():
    """Exit actions deepest first, then transition actions, then entry actions."""
    machine = create_machine(nested_config())
    s1 = machine.transition(machine.initial_state, "SWITCH")
    s2 = machine.transition(s1, "JUMP")

    assert s2.value == "q"
    assert s2.actions == ("exitC2", "exitP", "enterQ")

    s3 = machine.transition(s2, "BACK")
    assert s3.value == {"p": "c2"}
    assert s3.actions == ("back", "enterP", "enterC2")


def test_internal_transition_keeps_parent():
    """A '.child' target does not exit the source."""
    machine = create_machine(nested_config())
    s1 = machine.transition(machine.initial_state, "SWITCH")

    assert s1.value == {"p": "c2"}
    assert s1.actions == ("exitC1", "switching", "enterC2")


def test_self_transition_is_external():
    """Targeting the source re-enters it."""
    machine = create_machine(nested_config())
    s1 = machine.transition(machine.initial_state, "SWITCH")
    s2 = machine.transition(s1, "RESTART")

    assert s2.value == {"p": "c1"}
    assert s2.actions == ("exitC2", "exitP", "restarting", "enterP", "enterC1")


def test_targetless_transition_only_runs_actions():
    """Transitions without target keep the configuration."""
    machine = create_machine(nested_config())
    s1 = machine.transition(machine.initial_state, "PING")

    assert s1.changed
    assert s1.actions == ("pong",)
    assert s1.configuration == machine.initial_state.configuration


def test_unknown_event_changes_nothing():
    """No enabled transition: same configuration, no actions."""
    machine = create_machine(nested_config())
    s1 = machine.transition(machine.initial_state, "NOPE")

    assert not s1.changed
    assert s1.actions == ()
    assert s1.value == machine.initial_state.value


def test_guards_read_context_and_event():
    """Guards get (context, event object); the first passing candidate wins."""
    machine = create_machine(door.machine_config())
    opened = machine.transition(machine.initial_state, "OPEN", {"isAdmin": True})
    assert opened.value == "opened"

    closed = machine.transition(opened, {"type": "CLOSE", "overrideAdmin": True}, {"isAdmin": True})
    assert closed.value == {"closed": "idle"}
    assert closed.actions == ("cancelAdmin",)

    closed_plain = machine.transition(opened, "CLOSE", {"isAdmin": True})
    assert closed_plain.actions == ()

    error = machine.transition(closed, "OPEN", {"isAdmin": False})
    assert error.value == {"closed": "error"}
    assert error.actions == (door.log_error_entry,)


def test_traffic_light_guards_on_history():
    """The yellow self-loop runs until two yellows are recorded."""
    machine = create_machine(traffic_light.machine_config())
    yellow = machine.transition("yellow", "TIMER", ["green", "yellow"])
    red = machine.transition("yellow", "TIMER", ["green", "yellow", "yellow"])

    assert yellow.value == "yellow"
    assert yellow.actions == ("incYellowTimer",)
    assert red.value == "red"
    assert red.actions == ()


def test_parallel_regions_transition_together():
    """Each region takes its own transition for the same event."""
    machine = create_machine(intersection.machine_config())
    s1 = machine.transition(machine.initial_state, "TIMER")

    assert s1.value == {"northSouthLight": "yellow", "eastWestLight": "green"}
    assert s1.actions == (
        {"type": "announce", "light": "northSouth", "colour": "yellow"},
        {"type": "announce", "light": "eastWest", "colour": "green"},
    )


def test_start_from_dotted_path():
    """A dotted path is completed with default children and parallel regions."""
    machine = create_machine(intersection.machine_config())
    s1 = machine.transition("eastWestLight.yellow", "TIMER")

    assert s1.value == {"northSouthLight": "yellow", "eastWestLight": "red"}


def test_init_event_reenters_initial_configuration():
    """The initialisation event restarts from the initial configuration."""
    machine = create_machine(nested_config())
    s1 = machine.transition(machine.initial_state, "SWITCH")
    s2 = machine.transition(s1, INIT_EVENT)

    assert s2.value == {"p": "c1"}
    assert s2.actions == ("enterP", "enterC1")


def test_event_without_type_is_rejected():
    """Events must carry a string type."""
    machine = create_machine(nested_config())
    with pytest.raises(InvalidEventError):
        machine.transition(machine.initial_state, {"payload": 1})


def test_state_paths():
    """Every node is listed in document order."""
    machine = create_machine(door.machine_config())
    assert machine.state_paths() == ["closed", "closed.idle", "closed.error", "opened"]


def test_machine_state_is_immutable():
    """MachineState is a frozen value."""
    state = MachineState(value="a", configuration=("a",))
    with pytest.raises(Exception):
        state.value = "b"


@pytest.mark.parametrize(
    "config",
    [
        {"states": {"a": {}}},
        {"initial": "zzz", "states": {"a": {}}},
        {"initial": "a", "states": {"a": {"on": {"GO": "nowhere"}}}},
        {"initial": "a", "states": {"a": {"on": {"GO": "#nobody"}}}},
        {"initial": "a", "states": {"a": {"on": {"GO": {"target": "a", "cond": True}}}}},
        {"initial": "a", "states": {"a": {"on": {"GO": 42}}}},
    ],
)
def test_definition_errors(config):
    """Structural errors are reported when the machine is built."""
    with pytest.raises(MachineDefinitionError):
        create_machine(config)
