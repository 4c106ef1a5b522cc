"""
Zero-copy OSC decoding for UDP datagrams: atoms, messages, bundles and packets.
"""

from .atoms import Atom, AtomKind, AtomReader, DecodeError
from .message import MessageDecoder
from .bundle import BundleDecoder
from .packet import PacketDecoder, PacketKind
from .builder import build_osc_message, build_osc_bundle

__all__ = [
    "Atom",
    "AtomKind",
    "AtomReader",
    "DecodeError",
    "MessageDecoder",
    "BundleDecoder",
    "PacketDecoder",
    "PacketKind",
    "build_osc_message",
    "build_osc_bundle",
]
