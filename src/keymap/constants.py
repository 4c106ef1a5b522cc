"""
Constants for the VMC keymap service.

This module centralizes addresses, button names and listener defaults.
"""


class VMCConstants:
    """VMC protocol values recognized by the keymap."""

    # Controller input: active, name, is_left, is_touch, is_axis, axis x/y/z
    CONTROLLER_INPUT_ADDRESS = b"/VMC/Ext/Con"
    CONTROLLER_INPUT_ARGUMENT_COUNT = 8

    # Right-hand controller buttons
    BUTTON_NEXT = b"ClickBbutton"
    BUTTON_PREVIOUS = b"ClickAbutton"

    ACTIVE_PRESSED = 1
    RIGHT_HAND = 0


class ListenerDefaults:
    """Defaults for the UDP listener."""

    HOST = "0.0.0.0"
    PORT = 39600
    MAX_DATAGRAM_SIZE = 65535
    LOG_LEVEL = "INFO"
