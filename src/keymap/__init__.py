"""
VMC controller input to keyboard mapping.

The pynput-backed actions live in .keyboard and are imported on demand,
since pynput needs a display or input backend at import time.
"""

from .constants import VMCConstants, ListenerDefaults
from .vmc import ControllerInput, ControllerKeymap, KeyActions, decode_controller_input, build_controller_input

__all__ = [
    "VMCConstants",
    "ListenerDefaults",
    "ControllerInput",
    "ControllerKeymap",
    "KeyActions",
    "decode_controller_input",
    "build_controller_input",
]
