"""
OSC message decoding.

A message is an address string, a type tag string starting with ',' and the
arguments described by the tags. Arguments are decoded on demand, one per
read_argument() call.
"""

from typing import List, Optional

from .atoms import Atom, AtomKind, AtomReader, DecodeError


_TAG_INT32 = ord(AtomKind.INT32.value)
_TAG_FLOAT32 = ord(AtomKind.FLOAT32.value)
_TAG_STRING = ord(AtomKind.STRING.value)
_TAG_PREFIX = ord(',')


class MessageDecoder:
    """
    Decoder for a single OSC message.

    Example:
        >>> msg = MessageDecoder(b'/ping\\x00\\x00\\x00,i\\x00\\x00\\x00\\x00\\x00\\x07')
        >>> bytes(msg.address())
        b'/ping'
        >>> msg.read_argument().as_int32()
        7
    """

    def __init__(self, data, start: int = 0, end: Optional[int] = None):
        """
        Parse the address and type tags of a message.

        Args:
            data: Buffer holding the message
            start: Offset of the message within ``data``
            end: Offset one past the message (default: len(data))

        Raises:
            DecodeError: If the address or type tag string is malformed
        """
        self._reader = AtomReader(data, start, end)
        self._address = self._reader.read_string()

        type_tags = self._reader.read_string()
        if len(type_tags) == 0 or type_tags[0] != _TAG_PREFIX:
            raise DecodeError("OSC type tags must start with ','")
        self._type_tags = type_tags[1:]
        self._tag_index = 0

    def address(self) -> memoryview:
        return self._address

    def type_tags(self) -> memoryview:
        """Type tags of the arguments not read yet."""
        return self._type_tags[self._tag_index:]

    def num_of_rest_arguments(self) -> int:
        return len(self._type_tags) - self._tag_index

    def read_argument(self) -> Atom:
        """
        Read the next argument.

        A failure leaves the tag and argument cursors out of step, so the rest
        of the message must be abandoned.

        Raises:
            DecodeError: If no tags remain, the tag is unsupported or the
                argument bytes are truncated
        """
        if self._tag_index >= len(self._type_tags):
            raise DecodeError("No OSC arguments left to read")
        tag = self._type_tags[self._tag_index]
        self._tag_index += 1

        if tag == _TAG_INT32:
            return Atom(AtomKind.INT32, self._reader.read_int32())
        elif tag == _TAG_FLOAT32:
            return Atom(AtomKind.FLOAT32, self._reader.read_float32())
        elif tag == _TAG_STRING:
            return Atom(AtomKind.STRING, self._reader.read_string())
        else:
            raise DecodeError(f"Unsupported OSC type tag: {chr(tag)!r}")

    def read_arguments(self) -> List[Atom]:
        """Read every remaining argument in order."""
        arguments = []
        while self.num_of_rest_arguments() > 0:
            arguments.append(self.read_argument())
        return arguments
