"""Unit tests for cursor encoding and decoding."""
from __future__ import annotations

import base64

import pytest

from relay_pagination.core.exceptions import CursorDecodeError
from relay_pagination.core.pagination.cursor import (
    CursorCodec,
    CursorPosition,
    decode_cursor,
    encode_cursor,
)


def _b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


@pytest.mark.unit
class TestEncode:
    """Tests for cursor encoding."""

    def test_encode_offset_uses_arrayconnection_prefix(self):
        """Offset cursors are base64 of 'arrayconnection:<offset>'."""
        assert CursorCodec.encode_offset(0) == _b64("arrayconnection:0")
        assert CursorCodec.encode_offset(42) == _b64("arrayconnection:42")

    def test_encode_record_uses_record_prefix(self):
        """Record cursors are base64 of 'record:<id>'."""
        assert CursorCodec.encode_record("user-7") == _b64("record:user-7")

    def test_encode_offset_rejects_negative(self):
        """Negative offsets are not positions."""
        with pytest.raises(ValueError):
            CursorCodec.encode_offset(-1)

    def test_encode_dispatches_on_type(self):
        """encode picks offset cursors for ints and record cursors for strings."""
        assert encode_cursor(3) == CursorCodec.encode_offset(3)
        assert encode_cursor("3") == CursorCodec.encode_record("3")


@pytest.mark.unit
class TestDecode:
    """Tests for cursor decoding."""

    @pytest.mark.parametrize("offset", [0, 1, 9, 12345])
    def test_offset_roundtrip(self, offset):
        """decode(encode_offset(n)) yields offset n."""
        decoded = CursorCodec.decode(CursorCodec.encode_offset(offset))

        assert decoded == CursorPosition(kind="offset", value=offset)
        assert decoded.offset == offset

    @pytest.mark.parametrize("identifier", ["1", "abc", "with:colon", "ünïcode", ""])
    def test_record_roundtrip(self, identifier):
        """decode(encode_record(s)) yields identifier s, kept as a string."""
        decoded = decode_cursor(CursorCodec.encode_record(identifier))

        assert decoded.kind == "id"
        assert decoded.value == identifier
        assert not decoded.is_offset

    def test_record_cursor_has_no_offset(self):
        """Asking a record cursor for its offset is a programming error."""
        with pytest.raises(TypeError):
            _ = CursorCodec.decode(CursorCodec.encode_record("9")).offset

    @pytest.mark.parametrize(
        "cursor",
        [
            "not valid base64!!",
            _b64("bogusprefix:5"),
            _b64("not_arrayconnection:5"),
            _b64("arrayconnection:five"),
            _b64("arrayconnection:5abc"),
            _b64("arrayconnection:-3"),
            _b64("arrayconnection:"),
            _b64("not a cursor at all"),
            "YXJyYXljb25uZWN0aW9uOjA",  # missing padding
        ],
    )
    def test_decode_rejects_garbage(self, cursor):
        """Malformed cursors fail instead of defaulting to a position."""
        with pytest.raises(CursorDecodeError):
            CursorCodec.decode(cursor)

    def test_decode_error_is_value_error(self):
        """CursorDecodeError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            CursorCodec.decode("%%%")

    def test_decode_is_deterministic(self):
        """The same cursor always decodes to the same position."""
        cursor = CursorCodec.encode_offset(7)

        assert CursorCodec.decode(cursor) == CursorCodec.decode(cursor)
