"""Relay cursor connections for GraphQL servers."""

from relay_pagination.core.exceptions import (
    CursorDecodeError,
    IdentifierOrderingError,
    InvalidCursorError,
    InvalidLimitError,
    MissingCountError,
    MissingLimitError,
    PaginationError,
)
from relay_pagination.core.pagination import (
    Connection,
    ConnectionOptions,
    CursorCodec,
    CursorPosition,
    Edge,
    EdgeItem,
    PageInfo,
    PaginationArguments,
    QueryWindow,
    decode_cursor,
    encode_cursor,
    from_async_query,
    from_list,
    from_query,
    from_slice,
    offset_and_limit_for_query,
    resolve_limit,
    resolve_position,
)

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "ConnectionOptions",
    "CursorCodec",
    "CursorDecodeError",
    "CursorPosition",
    "Edge",
    "EdgeItem",
    "IdentifierOrderingError",
    "InvalidCursorError",
    "InvalidLimitError",
    "MissingCountError",
    "MissingLimitError",
    "PageInfo",
    "PaginationArguments",
    "PaginationError",
    "QueryWindow",
    "decode_cursor",
    "encode_cursor",
    "from_async_query",
    "from_list",
    "from_query",
    "from_slice",
    "offset_and_limit_for_query",
    "resolve_limit",
    "resolve_position",
]
