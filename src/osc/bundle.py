"""
OSC bundle decoding.

Wire layout: "#bundle\\0", an 8-byte timestamp, then any number of
(int32 size, message bytes) elements. Nested bundles are not supported.
"""

from typing import Optional

from .atoms import AtomReader, DecodeError
from .message import MessageDecoder


BUNDLE_TAG = b'#bundle'


class BundleDecoder:
    """Decoder handing out the sub-messages of a bundle one at a time."""

    def __init__(self, data, start: int = 0, end: Optional[int] = None):
        """
        Parse the bundle header.

        Raises:
            DecodeError: If the data does not start with "#bundle\\0" followed
                by a complete timestamp
        """
        reader = AtomReader(data, start, end)
        if reader.read_string() != BUNDLE_TAG:
            raise DecodeError("Missing '#bundle' header")
        self._timestamp = reader.read_timestamp()
        self._reader = reader

    def timestamp(self) -> int:
        return self._timestamp

    def is_end_of_data(self) -> bool:
        return self._reader.is_end_of_data()

    def read_message(self) -> MessageDecoder:
        """
        Slice out the next length-prefixed element and decode it as a message.

        Raises:
            DecodeError: If the size prefix is truncated, negative or larger
                than the remaining bytes, or the element is not a valid message
        """
        reader = self._reader
        position = reader.position
        size = reader.read_int32()
        start, end = reader.remaining()
        if size < 0 or size > end - start:
            reader.position = position
            raise DecodeError(f"Bundle element size {size} exceeds remaining {end - start} bytes")

        reader.position = start + size
        return MessageDecoder(reader.data, start, start + size)
