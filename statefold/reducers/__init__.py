"""Reference update and output reducers for InterpreterConfig."""

from .copy_on_write import NO_COPY_ON_WRITE_UPDATES, copy_on_write_reducer
from .json_patch import NO_JSON_PATCH_UPDATES, json_patch_reducer
from .outputs import concat_outputs

__all__ = [
    "NO_COPY_ON_WRITE_UPDATES",
    "copy_on_write_reducer",
    "NO_JSON_PATCH_UPDATES",
    "json_patch_reducer",
    "concat_outputs",
]
