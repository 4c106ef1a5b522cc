"""
Top-level OSC packet decoding.

A UDP datagram carries either a bundle or exactly one bare message.
PacketDecoder hides the difference behind is_end_of_data()/read_message(),
and can also be iterated directly.
"""

from enum import Enum
from typing import Iterator, Optional

from .atoms import DecodeError
from .bundle import BundleDecoder
from .message import MessageDecoder


class PacketKind(Enum):
    BUNDLE = "bundle"
    MESSAGE = "message"


class PacketDecoder:
    """
    Uniform message source for one datagram.

    The payload is tried as a bundle first and as a bare message second, so a
    message whose address is literally "#bundle" is not supported.

    Example:
        >>> packet = PacketDecoder(data)
        >>> for message in packet:
        ...     print(bytes(message.address()))
    """

    def __init__(self, data):
        """
        Args:
            data: Raw datagram bytes

        Raises:
            DecodeError: If the payload is neither a bundle nor a message
        """
        self._bundle: Optional[BundleDecoder] = None
        self._message: Optional[MessageDecoder] = None

        try:
            self._bundle = BundleDecoder(data)
            self.kind = PacketKind.BUNDLE
        except DecodeError:
            self._message = MessageDecoder(data)
            self.kind = PacketKind.MESSAGE

    def timestamp(self) -> Optional[int]:
        """Bundle timestamp, or None for a bare message."""
        if self.kind is PacketKind.BUNDLE:
            return self._bundle.timestamp()
        return None

    def is_end_of_data(self) -> bool:
        if self.kind is PacketKind.BUNDLE:
            return self._bundle.is_end_of_data()
        return self._message is None

    def read_message(self) -> MessageDecoder:
        """
        Return the next message of the packet.

        Raises:
            DecodeError: If the next bundle element is malformed, or the single
                message of a bare packet was already returned
        """
        if self.kind is PacketKind.BUNDLE:
            return self._bundle.read_message()

        message = self._message
        if message is None:
            raise DecodeError("Message packet already consumed")
        self._message = None
        return message

    def __iter__(self) -> Iterator[MessageDecoder]:
        while not self.is_end_of_data():
            yield self.read_message()
