"""
OSC atom decoding.

Atoms are the primitive OSC values: NUL-terminated padded strings, big-endian
int32, big-endian float32 and the 8-byte bundle timestamp. The reader walks a
byte buffer without copying it; strings come back as memoryview slices of the
original datagram.

Reference: http://opensoundcontrol.org/spec-1_0
"""

import re
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


_INT32 = struct.Struct('>i')
_FLOAT32 = struct.Struct('>f')
_TIMESTAMP = struct.Struct('>Q')
_NUL = re.compile(b"\x00")


class DecodeError(ValueError):
    """Raised when OSC bytes are malformed, truncated or mistyped."""
    pass


class AtomKind(Enum):
    """OSC argument types, valued by their type tag character."""
    INT32 = 'i'
    FLOAT32 = 'f'
    STRING = 's'


@dataclass(frozen=True)
class Atom:
    """One decoded OSC argument."""
    kind: AtomKind
    value: Union[int, float, memoryview]

    def as_int32(self) -> Optional[int]:
        return self.value if self.kind is AtomKind.INT32 else None

    def as_float32(self) -> Optional[float]:
        return self.value if self.kind is AtomKind.FLOAT32 else None

    def as_string(self) -> Optional[memoryview]:
        return self.value if self.kind is AtomKind.STRING else None


class AtomReader:
    """
    Cursor over an OSC byte buffer.

    Every read either consumes exactly the bytes of one atom or raises
    DecodeError and leaves the cursor where it was. The cursor never moves
    past ``end``.
    """

    def __init__(self, data, start: int = 0, end: Optional[int] = None):
        """
        Initialize the reader.

        Args:
            data: Datagram buffer (bytes, bytearray or memoryview), owned by the caller
            start: Offset of the first byte to read
            end: Offset one past the last readable byte (default: len(data))
        """
        view = memoryview(data)
        if view.format != "B":
            view = view.cast("B")
        if end is None:
            end = len(view)
        if not 0 <= start <= end <= len(view):
            raise DecodeError(f"Invalid byte range [{start}, {end}) for {len(view)} bytes")
        self.data = data
        self.position = start
        self.end = end
        self._view = view

    def _require(self, size: int) -> None:
        if self.end - self.position < size:
            raise DecodeError(
                f"Need {size} bytes at offset {self.position}, "
                f"only {self.end - self.position} left"
            )

    def read_string(self) -> memoryview:
        """
        Read an OSC string (NUL-terminated, zero-padded to 4 bytes).

        Returns:
            memoryview: String content without terminator or padding
        """
        match = _NUL.search(self._view, self.position, self.end)
        if match is None:
            raise DecodeError(f"No null terminator for OSC string at offset {self.position}")

        null_idx = match.start()
        length = null_idx - self.position
        padded_length = length // 4 * 4 + 4
        self._require(padded_length)

        string = self._view[self.position:null_idx]
        self.position += padded_length
        return string

    def read_int32(self) -> int:
        """Read a big-endian 32-bit signed integer."""
        self._require(4)
        value = _INT32.unpack_from(self._view, self.position)[0]
        self.position += 4
        return value

    def read_float32(self) -> float:
        """Read a big-endian 32-bit IEEE-754 float."""
        self._require(4)
        value = _FLOAT32.unpack_from(self._view, self.position)[0]
        self.position += 4
        return value

    def read_timestamp(self) -> int:
        """
        Read an 8-byte bundle timestamp.

        The NTP seconds/fraction split is not decoded; the value is returned as
        one opaque unsigned 64-bit integer.
        """
        self._require(8)
        value = _TIMESTAMP.unpack_from(self._view, self.position)[0]
        self.position += 8
        return value

    def is_end_of_data(self) -> bool:
        return self.position == self.end

    def remaining(self) -> Tuple[int, int]:
        """Return the (start, end) offsets of the unconsumed tail."""
        return self.position, self.end

    def rest(self) -> memoryview:
        """Return the unconsumed tail as a view into the original buffer."""
        return self._view[self.position:self.end]
