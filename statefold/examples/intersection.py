"""
Intersection: two parallel traffic lights, compound action descriptors.

Every colour change is announced by an "announce" action whose descriptor
carries the light and colour as parameters. The extended state counts the
announcements per light.
"""

from typing import Any, Dict

from ..core import ActionResult, Interpreter, InterpreterConfig, create_interpreter
from ..machine import create_machine
from ..reducers import concat_outputs, copy_on_write_reducer

COLOURS = ("green", "yellow", "red")
NEXT_COLOUR = {"green": "yellow", "yellow": "red", "red": "green"}


def announce(counts, event, action):
    light = action.params["light"]
    colour = action.params["colour"]

    def bump(draft):
        draft[light] = draft.get(light, 0) + 1

    return ActionResult(updates=bump, outputs=[f"{light}:{colour}"])


ACTION_FACTORIES = {
    "announce": announce,
}


def _light(name: str, initial: str) -> Dict[str, Any]:
    return {
        "initial": initial,
        "states": {
            colour: {
                "entry": [{"type": "announce", "light": name, "colour": colour}],
                "on": {"TIMER": NEXT_COLOUR[colour]},
            }
            for colour in COLOURS
        },
    }


def machine_config() -> Dict[str, Any]:
    return {
        "id": "intersection",
        "type": "parallel",
        "context": {},
        "states": {
            "northSouthLight": _light("northSouth", "green"),
            "eastWestLight": _light("eastWest", "red"),
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
