"""Cursor encoding and decoding for connection pagination.

Cursors are opaque strings that clients pass back unchanged. Internally a
cursor is the standard base64 encoding of one of two position tokens:

1. ``arrayconnection:<offset>`` - a zero-based position in an ordering
2. ``record:<identifier>`` - a stable identifier of the record at that position

Example:
    CursorCodec.encode_offset(3)        # "YXJyYXljb25uZWN0aW9uOjM="
    CursorCodec.decode("YXJyYXljb25uZWN0aW9uOjM=")
    # CursorPosition(kind="offset", value=3)
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any, Literal

from pydantic import BaseModel, Field

from relay_pagination.core.exceptions import CursorDecodeError

OFFSET_PREFIX = "arrayconnection:"
RECORD_PREFIX = "record:"

_OFFSET_RE = re.compile(r"[0-9]+")


class CursorPosition(BaseModel):
    """Decoded form of a cursor.

    Attributes:
        kind: ``offset`` for positional cursors, ``id`` for record cursors
        value: The integer offset, or the identifier string
    """

    kind: Literal["offset", "id"] = Field(description="Position token kind")
    value: int | str = Field(description="Offset or record identifier")

    model_config = {"frozen": True}

    @property
    def is_offset(self) -> bool:
        return self.kind == "offset"

    @property
    def offset(self) -> int:
        """Offset value; only meaningful for offset cursors."""
        if self.kind != "offset":
            raise TypeError("record cursors carry no offset")
        return int(self.value)


class CursorCodec:
    """Encode and decode pagination cursors.

    All methods are pure: the same input always yields the same output,
    so a cursor handed to a client round-trips back to the same position.

    Usage:
        cursor = CursorCodec.encode_offset(9)
        CursorCodec.decode(cursor).offset  # 9

        cursor = CursorCodec.encode_record("user-42")
        CursorCodec.decode(cursor).value  # "user-42"
    """

    @staticmethod
    def encode_offset(offset: int) -> str:
        """Encode a zero-based offset as an opaque cursor.

        Args:
            offset: Non-negative position in the ordering

        Returns:
            Base64 encoded cursor string

        Raises:
            ValueError: If offset is negative
        """
        if offset < 0:
            raise ValueError(f"cursor offset must be non-negative, got {offset}")
        return CursorCodec._encode(f"{OFFSET_PREFIX}{offset}")

    @staticmethod
    def encode_record(identifier: Any) -> str:
        """Encode a record identifier as an opaque cursor.

        Args:
            identifier: Stable identifier of the record (converted with ``str``)

        Returns:
            Base64 encoded cursor string
        """
        return CursorCodec._encode(f"{RECORD_PREFIX}{identifier}")

    @staticmethod
    def encode(position: int | str) -> str:
        """Encode an offset (``int``) or a record identifier (``str``)."""
        if isinstance(position, int) and not isinstance(position, bool):
            return CursorCodec.encode_offset(position)
        return CursorCodec.encode_record(position)

    @staticmethod
    def decode(cursor: str) -> CursorPosition:
        """Decode a cursor string to its position token.

        Args:
            cursor: Base64 encoded cursor string

        Returns:
            CursorPosition holding an offset or an identifier

        Raises:
            CursorDecodeError: On invalid base64, an unknown prefix or a
                non-integer offset payload
        """
        try:
            raw = base64.b64decode(cursor.encode("ascii"), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeError, AttributeError) as e:
            raise CursorDecodeError(f"Invalid cursor: {e}") from e

        if raw.startswith(OFFSET_PREFIX):
            payload = raw[len(OFFSET_PREFIX) :]
            if not _OFFSET_RE.fullmatch(payload):
                raise CursorDecodeError(f"Invalid cursor offset: {payload!r}")
            return CursorPosition(kind="offset", value=int(payload))

        if raw.startswith(RECORD_PREFIX):
            return CursorPosition(kind="id", value=raw[len(RECORD_PREFIX) :])

        raise CursorDecodeError("Invalid cursor: unknown prefix")

    @staticmethod
    def _encode(token: str) -> str:
        return base64.b64encode(token.encode("utf-8")).decode("ascii")


def encode_cursor(position: int | str) -> str:
    """Module-level alias of :meth:`CursorCodec.encode`."""
    return CursorCodec.encode(position)


def decode_cursor(cursor: str) -> CursorPosition:
    """Module-level alias of :meth:`CursorCodec.decode`."""
    return CursorCodec.decode(cursor)


__all__ = [
    "OFFSET_PREFIX",
    "RECORD_PREFIX",
    "CursorCodec",
    "CursorPosition",
    "decode_cursor",
    "encode_cursor",
]
