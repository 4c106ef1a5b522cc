"""
VMC controller input to key press mapping.

Decodes /VMC/Ext/Con messages out of OSC packets and turns right-hand
B/A button presses into next/previous (right/left arrow) key actions.
Other messages are ignored without error.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from ..osc import Atom, AtomKind, DecodeError, MessageDecoder, PacketDecoder, build_osc_message

from .constants import VMCConstants


logger = logging.getLogger(__name__)


class KeyActions(Protocol):
    """Key actions triggered by controller buttons."""

    def press_left(self) -> None:
        ...

    def press_right(self) -> None:
        ...


@dataclass(frozen=True)
class ControllerInput:
    """Decoded /VMC/Ext/Con arguments."""
    active: int
    name: memoryview
    is_left: int
    is_touch: int
    is_axis: int
    axis: Tuple[float, float, float]


def _expect(atom: Atom, kind: AtomKind):
    if atom.kind is not kind:
        raise DecodeError(f"Expected {kind.name} argument, got {atom.kind.name}")
    return atom.value


def decode_controller_input(message: MessageDecoder) -> Optional[ControllerInput]:
    """
    Decode a controller input message.

    Args:
        message: Freshly decoded message, no arguments read yet

    Returns:
        ControllerInput, or None if the message is not a controller input

    Raises:
        DecodeError: If an argument is truncated or of the wrong type
    """
    if message.address() != VMCConstants.CONTROLLER_INPUT_ADDRESS:
        return None
    if message.num_of_rest_arguments() != VMCConstants.CONTROLLER_INPUT_ARGUMENT_COUNT:
        return None

    active = _expect(message.read_argument(), AtomKind.INT32)
    name = _expect(message.read_argument(), AtomKind.STRING)
    is_left = _expect(message.read_argument(), AtomKind.INT32)
    is_touch = _expect(message.read_argument(), AtomKind.INT32)
    is_axis = _expect(message.read_argument(), AtomKind.INT32)
    axis_x = _expect(message.read_argument(), AtomKind.FLOAT32)
    axis_y = _expect(message.read_argument(), AtomKind.FLOAT32)
    axis_z = _expect(message.read_argument(), AtomKind.FLOAT32)

    return ControllerInput(
        active=active,
        name=name,
        is_left=is_left,
        is_touch=is_touch,
        is_axis=is_axis,
        axis=(axis_x, axis_y, axis_z),
    )


class ControllerKeymap:
    """
    Maps controller input packets to key actions.

    Packets are handled all-or-nothing in order: the first decode failure
    aborts the rest of the packet, but actions already fired for earlier
    messages are not undone. ``actions_triggered`` counts every action as it
    fires, including those of packets that later failed.
    """

    def __init__(self, actions: KeyActions):
        """
        Args:
            actions: Target for next/previous key presses
        """
        self.actions = actions
        self.actions_triggered = 0

    def handle_packet(self, data) -> int:
        """
        Decode one datagram and fire key actions for its button presses.

        Args:
            data: Raw UDP payload

        Returns:
            int: Number of key actions triggered by this packet

        Raises:
            DecodeError: If the packet or any message in it is malformed
        """
        triggered = 0
        for message in PacketDecoder(data):
            controller = decode_controller_input(message)
            if controller is None:
                continue
            if self.handle_input(controller):
                triggered += 1
                self.actions_triggered += 1
        return triggered

    def handle_input(self, controller: ControllerInput) -> bool:
        """Fire the key action for a controller input, if any. Returns True if fired."""
        if controller.active != VMCConstants.ACTIVE_PRESSED:
            return False
        if controller.is_left != VMCConstants.RIGHT_HAND:
            return False

        if controller.name == VMCConstants.BUTTON_NEXT:
            logger.debug("Next button pressed")
            self.actions.press_right()
            return True
        if controller.name == VMCConstants.BUTTON_PREVIOUS:
            logger.debug("Previous button pressed")
            self.actions.press_left()
            return True
        return False


def build_controller_input(
    name: str,
    active: int = 1,
    is_left: int = 0,
    is_touch: int = 0,
    is_axis: int = 0,
    axis: Tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> bytes:
    """Build a /VMC/Ext/Con message for the given button state."""
    axis_x, axis_y, axis_z = axis
    return build_osc_message(
        VMCConstants.CONTROLLER_INPUT_ADDRESS.decode("ascii"),
        active, name, is_left, is_touch, is_axis,
        float(axis_x), float(axis_y), float(axis_z),
    )
