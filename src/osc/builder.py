"""
OSC message and bundle builder.

Encodes messages in the subset of OSC the decoders understand (int32,
float32 and string arguments) plus bundles wrapping them. Used by the
sender tool and the tests.

Reference: http://opensoundcontrol.org/spec-1_0
"""

import struct
from typing import Any

from .bundle import BUNDLE_TAG


def _encode_string(s) -> bytes:
    """Encode a string as OSC string (null-terminated, padded to 4 bytes)."""
    if isinstance(s, str):
        s = s.encode('utf-8')
    if b'\x00' in s:
        raise ValueError("OSC strings cannot contain NUL bytes")
    # Always at least one NUL, rounded up to a multiple of 4
    return s + b'\x00' * (4 - len(s) % 4)


def _encode_int(i: int) -> bytes:
    """Encode an integer as OSC int32 (big-endian)."""
    return struct.pack('>i', i)


def _encode_float(f: float) -> bytes:
    """Encode a float as OSC float32 (big-endian)."""
    return struct.pack('>f', f)


def build_osc_message(address: str, *args: Any) -> bytes:
    """
    Build an OSC message with the given address pattern and arguments.

    Args:
        address: OSC address pattern (e.g., "/VMC/Ext/Con")
        *args: Variable arguments (int, float, str or bytes)

    Returns:
        bytes: Complete OSC message ready to send via UDP

    Example:
        >>> build_osc_message("/ping", 7)
        b'/ping\\x00\\x00\\x00,i\\x00\\x00\\x00\\x00\\x00\\x07'
    """
    if not address.startswith('/'):
        raise ValueError(f"OSC address must start with '/': {address}")

    type_tags = ','
    encoded_args = []

    for arg in args:
        if isinstance(arg, bool):
            raise TypeError("OSC booleans are not supported")
        elif isinstance(arg, int):
            type_tags += 'i'
            encoded_args.append(_encode_int(arg))
        elif isinstance(arg, float):
            type_tags += 'f'
            encoded_args.append(_encode_float(arg))
        elif isinstance(arg, (str, bytes)):
            type_tags += 's'
            encoded_args.append(_encode_string(arg))
        else:
            raise TypeError(f"Unsupported OSC argument type: {type(arg)}")

    return _encode_string(address) + _encode_string(type_tags) + b''.join(encoded_args)


def build_osc_bundle(timestamp: int, *messages: bytes) -> bytes:
    """
    Wrap already encoded messages in an OSC bundle.

    Args:
        timestamp: Opaque 64-bit time tag (1 means "immediately")
        *messages: Encoded OSC messages

    Returns:
        bytes: "#bundle" header, time tag and size-prefixed elements
    """
    bundle = _encode_string(BUNDLE_TAG) + struct.pack('>Q', timestamp)
    for message in messages:
        bundle += _encode_int(len(message)) + message
    return bundle