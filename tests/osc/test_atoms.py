"""
Tests for the OSC atom reader.

Verifies that:
1. Strings follow the OSC padding rule and are returned without copying
2. Numeric atoms are decoded big-endian
3. Truncated input raises DecodeError and leaves the cursor untouched
"""

import struct

import pytest

from src.osc import Atom, AtomKind, AtomReader, DecodeError
from src.osc.builder import _encode_string


class TestReadString:
    """Test padded string decoding."""

    def test_simple_string(self):
        reader = AtomReader(b"abc\x00")
        assert reader.read_string() == b"abc"
        assert reader.position == 4
        assert reader.is_end_of_data()

    def test_string_on_boundary_takes_extra_block(self):
        reader = AtomReader(b"abcd\x00\x00\x00\x00rest")
        assert reader.read_string() == b"abcd"
        assert reader.position == 8

    def test_empty_string(self):
        reader = AtomReader(b"\x00\x00\x00\x00")
        assert reader.read_string() == b""
        assert reader.position == 4

    def test_padding_law(self):
        """Encoded size is the smallest multiple of 4 strictly greater than the length."""
        for length in range(0, 17):
            encoded = _encode_string(b"x" * length)
            assert len(encoded) == (length // 4 + 1) * 4
            assert len(encoded) > length
            assert len(encoded) % 4 == 0

            reader = AtomReader(encoded)
            assert reader.read_string() == b"x" * length
            assert reader.is_end_of_data()

        assert _encode_string(b"") == b"\x00\x00\x00\x00"
        assert len(_encode_string(b"abc")) == 4
        assert len(_encode_string(b"abcd")) == 8

    def test_missing_terminator(self):
        reader = AtomReader(b"abcd")
        with pytest.raises(DecodeError):
            reader.read_string()
        assert reader.position == 0

    def test_padding_past_end(self):
        reader = AtomReader(b"abcd\x00")
        with pytest.raises(DecodeError):
            reader.read_string()
        assert reader.position == 0

    def test_terminator_outside_range_is_ignored(self):
        """A NUL beyond ``end`` must not be used."""
        data = b"abcd\x00\x00\x00\x00"
        reader = AtomReader(data, 0, 4)
        with pytest.raises(DecodeError):
            reader.read_string()

    def test_string_is_a_view_of_the_buffer(self):
        data = b"/VMC/Ext/Con\x00\x00\x00\x00"
        string = AtomReader(data).read_string()
        assert isinstance(string, memoryview)
        assert string.obj is data


class TestNumericAtoms:
    """Test int32, float32 and timestamp decoding."""

    def test_read_int32(self):
        reader = AtomReader(struct.pack(">i", -2) + struct.pack(">i", 0x01020304))
        assert reader.read_int32() == -2
        assert reader.read_int32() == 0x01020304
        assert reader.is_end_of_data()

    def test_read_float32(self):
        reader = AtomReader(struct.pack(">f", 1.5) + struct.pack(">f", -0.25))
        assert reader.read_float32() == 1.5
        assert reader.read_float32() == -0.25

    def test_read_timestamp(self):
        reader = AtomReader(b"\x00" * 7 + b"\x01" + b"\xff" * 8)
        assert reader.read_timestamp() == 1
        assert reader.read_timestamp() == 2 ** 64 - 1
        assert reader.is_end_of_data()

    @pytest.mark.parametrize("method,size", [
        ("read_int32", 4),
        ("read_float32", 4),
        ("read_timestamp", 8),
    ])
    def test_truncated(self, method, size):
        for length in range(size):
            reader = AtomReader(b"\x00" * length)
            with pytest.raises(DecodeError):
                getattr(reader, method)()
            assert reader.position == 0


class TestCursor:
    """Test cursor bookkeeping."""

    def test_range(self):
        data = b"xxxx\x00\x00\x00\x07yyyy"
        reader = AtomReader(data, 4, 8)
        assert reader.remaining() == (4, 8)
        assert reader.read_int32() == 7
        assert reader.is_end_of_data()
        assert reader.remaining() == (8, 8)

    def test_rest(self):
        data = b"ab\x00\x00tail"
        reader = AtomReader(data)
        reader.read_string()
        rest = reader.rest()
        assert rest == b"tail"
        assert rest.obj is data

    def test_empty_buffer(self):
        reader = AtomReader(b"")
        assert reader.is_end_of_data()
        with pytest.raises(DecodeError):
            reader.read_string()

    def test_invalid_range(self):
        with pytest.raises(DecodeError):
            AtomReader(b"abcd", 3, 2)
        with pytest.raises(DecodeError):
            AtomReader(b"abcd", 0, 5)


class TestAtom:
    """Test Atom accessors."""

    def test_accessors_match_kind(self):
        atom = Atom(AtomKind.INT32, 5)
        assert atom.as_int32() == 5
        assert atom.as_float32() is None
        assert atom.as_string() is None

        atom = Atom(AtomKind.FLOAT32, 0.5)
        assert atom.as_float32() == 0.5
        assert atom.as_int32() is None

        atom = Atom(AtomKind.STRING, memoryview(b"hi"))
        assert atom.as_string() == b"hi"
        assert atom.as_int32() is None

    def test_kind_values_are_type_tags(self):
        assert [kind.value for kind in AtomKind] == ["i", "f", "s"]


class TestMemoryviewBuffer:
    """Readers over memoryview slices."""

    def test_reads_from_slice(self):
        buffer = bytearray(b"ab\x00\x00\x00\x00\x00\x05trailing")
        reader = AtomReader(memoryview(buffer)[:8])
        assert reader.read_string() == b"ab"
        assert reader.read_int32() == 5
        assert reader.is_end_of_data()

    def test_missing_terminator_in_slice(self):
        buffer = bytearray(b"abcd\x00\x00\x00\x00")
        reader = AtomReader(memoryview(buffer)[:4])
        with pytest.raises(DecodeError):
            reader.read_string()
