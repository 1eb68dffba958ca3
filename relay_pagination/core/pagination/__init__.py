"""Relay cursor connection pagination.

Converts an ordered collection (or a page already fetched from one) into
a connection: a list of edges, each a node with an opaque cursor, plus
page info telling clients whether neighbouring pages exist.

In-memory list:
    connection = from_list(pets, {"first": 10, "after": cursor})

Page fetched elsewhere:
    window = offset_and_limit_for_query(args, ConnectionOptions(count=total))
    rows = fetch(offset=window.offset, limit=window.limit)
    connection = from_slice(rows, window.offset, ConnectionOptions(has_next_page=...))

SQLAlchemy statement:
    connection = from_query(stmt, lambda s: session.scalars(s).all(), args)

Cursors are base64 strings that clients pass back unchanged.
"""

from relay_pagination.core.pagination.arguments import (
    Direction,
    PagePosition,
    PaginationArguments,
    resolve_limit,
    resolve_position,
)
from relay_pagination.core.pagination.connection import (
    QueryWindow,
    from_list,
    from_slice,
    offset_and_limit_for_query,
)
from relay_pagination.core.pagination.cursor import (
    CursorCodec,
    CursorPosition,
    decode_cursor,
    encode_cursor,
)
from relay_pagination.core.pagination.query import (
    QueryPlan,
    from_async_query,
    from_query,
    plan_query,
)
from relay_pagination.core.pagination.schemas import (
    Connection,
    ConnectionOptions,
    Edge,
    EdgeItem,
    PageInfo,
)

__all__ = [
    "Connection",
    "ConnectionOptions",
    "CursorCodec",
    "CursorPosition",
    "Direction",
    "Edge",
    "EdgeItem",
    "PageInfo",
    "PagePosition",
    "PaginationArguments",
    "QueryPlan",
    "QueryWindow",
    "decode_cursor",
    "encode_cursor",
    "from_async_query",
    "from_list",
    "from_query",
    "from_slice",
    "offset_and_limit_for_query",
    "plan_query",
    "resolve_limit",
    "resolve_position",
]
