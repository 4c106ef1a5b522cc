"""
OS-level key injection for the VMC keymap.

PynputKeyActions posts a key-down immediately followed by a key-up through
pynput. LoggingKeyActions is the dry-run stand-in that only logs.
"""

import logging
from typing import Any, Optional

from pynput.keyboard import Controller, Key


logger = logging.getLogger(__name__)


class PynputKeyActions:
    """Synthesizes arrow key presses with pynput."""

    def __init__(self, controller: Optional[Any] = None):
        """
        Args:
            controller: pynput keyboard Controller (created if omitted)
        """
        self.controller = controller if controller is not None else Controller()

    def _tap(self, key) -> None:
        self.controller.press(key)
        self.controller.release(key)

    def press_left(self) -> None:
        logger.info("Key: left arrow")
        self._tap(Key.left)

    def press_right(self) -> None:
        logger.info("Key: right arrow")
        self._tap(Key.right)


class LoggingKeyActions:
    """Logs key presses instead of injecting them."""

    def press_left(self) -> None:
        logger.info("[dry-run] Key: left arrow")

    def press_right(self) -> None:
        logger.info("[dry-run] Key: right arrow")
