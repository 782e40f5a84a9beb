"""
Traffic light: flat machine, copy-on-write updates, named actions.

The extended state is the history of lights that were switched on. Each
action outputs the history it observed and the triggering event.
"""

from typing import Any, Dict, List

from ..core import ActionResult, Interpreter, InterpreterConfig, create_interpreter
from ..machine import create_machine
from ..reducers import concat_outputs, copy_on_write_reducer

EMPTY_HISTORY: List[str] = []


def inc_green_timer(history, event, action):
    return ActionResult(updates=lambda draft: draft.append("green"), outputs=[history, event])


def inc_yellow_timer(history, event, action):
    return ActionResult(updates=lambda draft: draft.append("yellow"), outputs=[history, event])


def _drop_two(draft):
    draft.pop()
    draft.pop()


def log_green(history, event, action):
    return ActionResult(updates=_drop_two, outputs=[history, event])


ACTION_FACTORIES = {
    "incGreenTimer": inc_green_timer,
    "incYellowTimer": inc_yellow_timer,
    "logGreen": log_green,
}


def machine_config() -> Dict[str, Any]:
    return {
        "id": "light",
        "context": EMPTY_HISTORY,
        "initial": "green",
        "states": {
            "green": {
                "on": {"TIMER": {"target": "yellow", "actions": ["incGreenTimer"]}},
            },
            "yellow": {
                "onEntry": ["incYellowTimer"],
                "on": {
                    "TIMER": [
                        {"target": "red", "cond": lambda history, ev: history.count("yellow") > 1},
                        {"target": "yellow", "cond": lambda history, ev: history.count("yellow") <= 1},
                    ]
                },
            },
            "red": {
                "on": {"TIMER": {"target": "green", "actions": ["logGreen"]}},
            },
        },
    }


def interpreter_config() -> InterpreterConfig:
    return InterpreterConfig(
        update_state=copy_on_write_reducer,
        merge_outputs=concat_outputs,
        action_factory_map=ACTION_FACTORIES,
    )


def build_interpreter() -> Interpreter:
    return create_interpreter(create_machine, machine_config(), interpreter_config())
