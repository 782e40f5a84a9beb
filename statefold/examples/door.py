"""
Door: hierarchical machine, JSON patch updates, named and embedded actions.

An admin can open the door. Closing it with overrideAdmin revokes the
admin flag; opening it afterwards lands in closed.error, whose entry
action is embedded in the configuration.
"""

from typing import Any, Dict

from ..core import ActionResult, Interpreter, InterpreterConfig, create_interpreter
from ..machine import create_machine
from ..reducers import NO_JSON_PATCH_UPDATES, concat_outputs, json_patch_reducer

INITIAL_CONTEXT: Dict[str, Any] = {"isAdmin": True}


def cancel_admin(context, event, action):
    return ActionResult(
        updates=[{"op": "add", "path": "/isAdmin", "value": False}],
        outputs=["admin rights overriden"],
    )


def log_error_entry(context, event, action):
    return ActionResult(updates=NO_JSON_PATCH_UPDATES, outputs=["Entered .closed.error!", event])


ACTION_FACTORIES = {
    "cancelAdmin": cancel_admin,
}


def machine_config() -> Dict[str, Any]:
    return {
        "id": "door",
        "context": INITIAL_CONTEXT,
        "initial": "closed",
        "states": {
            "closed": {
                "initial": "idle",
                "states": {
                    "idle": {},
                    "error": {"onEntry": log_error_entry},
                },
                "on": {
                    "OPEN": [
                        {"target": "opened", "cond": lambda ctx, ev: ctx["isAdmin"]},
                        {"target": "closed.error"},
                    ]
                },
            },
            "opened": {
                "on": {
                    "CLOSE": [
                        {
                            "target": "closed",
                            "cond": lambda ctx, ev: ev.get("overrideAdmin"),
                            "actions": ["cancelAdmin"],
                        },
                        {"target": "closed", "cond": lambda ctx, ev: not ev.get("overrideAdmin")},
                    ]
                },
            },
        },
    }


def interpreter_config() -> InterpreterConfig:
    return InterpreterConfig(
        update_state=json_patch_reducer,
        merge_outputs=concat_outputs,
        action_factory_map=ACTION_FACTORIES,
    )


def build_interpreter() -> Interpreter:
    return create_interpreter(create_machine, machine_config(), interpreter_config())
