"""Connection building: turn ordered data into a page of edges.

Three entry points cover the ways data reaches a resolver:

- :func:`from_list` - the whole ordered collection is in memory; slicing
  happens here.
- :func:`from_slice` - the caller already fetched exactly the page and
  knows the page flags.
- :func:`offset_and_limit_for_query` - computes the window to request
  from a database; see :mod:`relay_pagination.core.pagination.query` for
  the adapter that runs it.

Example:
    data = list(range(10))
    page = from_list(data, {"first": 3})
    page.nodes                    # [0, 1, 2]
    page.page_info.has_next_page  # True

    page = from_list(data, {"first": 3, "after": page.page_info.end_cursor})
    page.nodes                    # [3, 4, 5]
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, NamedTuple

from relay_pagination.core.exceptions import (
    IdentifierOrderingError,
    InvalidCursorError,
    MissingCountError,
)
from relay_pagination.core.pagination.arguments import (
    Direction,
    PagePosition,
    PaginationArguments,
    apply_limit,
    resolve_limit,
    resolve_position,
)
from relay_pagination.core.pagination.cursor import CursorCodec
from relay_pagination.core.pagination.schemas import (
    Connection,
    ConnectionOptions,
    Edge,
    EdgeItem,
    PageInfo,
)
from relay_pagination.core.settings import get_pagination_settings
from relay_pagination.infra.logging import get_lazy_logger

logger = get_lazy_logger(__name__)

NodeId = Callable[[Any], Any]
Arguments = PaginationArguments | Mapping[str, Any]


class QueryWindow(NamedTuple):
    """Offset and page size to request from a query."""

    offset: int
    limit: int


def from_list(
    data: Sequence[Any],
    args: Arguments,
    options: ConnectionOptions | None = None,
    *,
    node_id: NodeId | None = None,
) -> Connection[Any]:
    """Get a connection object for a fully materialized list.

    The list must hold every item that later pagination requests may page
    over, in a stable order. Items may be bare nodes or :class:`EdgeItem`
    instances carrying extra edge fields.

    Args:
        data: The whole ordered collection
        args: Pagination arguments (``first``, ``last``, ``after``, ``before``)
        options: ``max`` caps the page size; ``identifier_ordering`` orders
            record identifiers
        node_id: Returns a node's stable identifier, or ``None``. When given,
            edges carry record cursors and record cursors can be paged from.

    Returns:
        Connection with the requested page

    Raises:
        MissingLimitError: Neither ``first`` nor ``last`` was supplied
        InvalidLimitError: ``first`` or ``last`` is negative
        InvalidCursorError: ``after``/``before`` cannot be decoded or used

    Example:
        from_list(["a", "b", "c"], {"last": 2}).nodes  # ["b", "c"]
    """
    options = options or ConnectionOptions()
    args = PaginationArguments.coerce(args)
    direction, limit = resolve_limit(args, effective_max(options))
    position = resolve_position(args)
    items = list(data)

    if position is not None and not position.is_offset:
        window, start, has_previous, has_next = _identifier_window(
            items, position, direction, limit, options, node_id
        )
    else:
        window, start, has_previous, has_next = _offset_window(
            items, position, direction, limit
        )

    if direction == "forward" and args.last is not None:
        window, start, has_previous = _keep_last(window, start, has_previous, args, options)

    logger.debug(
        "Resolved list window",
        extra={
            "direction": direction,
            "offset": start,
            "limit": limit,
            "count": len(items),
            "cursor_kind": position.kind if position else None,
        },
    )

    slice_options = options.model_copy(
        update={"has_previous_page": has_previous, "has_next_page": has_next}
    )
    return from_slice(window, start, slice_options, node_id=node_id)


def from_slice(
    items: Sequence[Any],
    offset: int | None,
    options: ConnectionOptions | None = None,
    *,
    node_id: NodeId | None = None,
) -> Connection[Any]:
    """Build a connection from a slice that is already exactly the page.

    Page flags are taken verbatim from ``options`` and default to ``False``.

    Args:
        items: The page, in order
        offset: Absolute position of the first item; ``None`` counts as 0
        options: Supplies ``has_previous_page`` / ``has_next_page``
        node_id: Returns a node's stable identifier, or ``None``; nodes with
            an identifier get a record cursor, the rest an offset cursor

    Example:
        rows = session.execute(stmt.limit(limit).offset(offset)).scalars().all()
        connection = from_slice(rows, offset)
    """
    options = options or ConnectionOptions()
    base = offset or 0

    edges = [
        _build_edge(item, base + index, node_id)
        for index, item in enumerate(items)
    ]
    page_info = PageInfo(
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
        has_previous_page=bool(options.has_previous_page),
        has_next_page=bool(options.has_next_page),
    )
    logger.debug("Built edges with cursors %s", lambda: [edge.cursor for edge in edges])
    return Connection(edges=edges, page_info=page_info)


def offset_and_limit_for_query(
    args: Arguments,
    options: ConnectionOptions | None = None,
) -> QueryWindow:
    """Compute the offset and limit to apply to an ordered query.

    ``last`` needs either a ``before`` cursor or an explicit ``count`` option,
    otherwise the end of the collection is unknown.

    Args:
        args: Pagination arguments
        options: ``max`` caps the limit; ``count`` is the total record count

    Returns:
        QueryWindow(offset, limit)

    Raises:
        MissingLimitError: Neither ``first`` nor ``last`` was supplied
        InvalidCursorError: A cursor is malformed or is not an offset cursor
        MissingCountError: ``last`` without ``before`` and without ``count``

    Example:
        offset_and_limit_for_query({"last": 5}, ConnectionOptions(count=30))
        # QueryWindow(offset=25, limit=5)
    """
    options = options or ConnectionOptions()
    direction, limit = resolve_limit(args, effective_max(options))
    position = resolve_position(args)

    if position is not None and not position.is_offset:
        raise InvalidCursorError(position.argument)
    boundary = int(position.value) if position is not None else None

    if direction == "forward":
        return QueryWindow(boundary or 0, limit)

    if boundary is None:
        if options.count is None:
            raise MissingCountError()
        return QueryWindow(max(options.count - limit, 0), limit)

    start = max(boundary - limit, 0)
    if start == 0:
        limit = boundary
    return QueryWindow(start, limit)


def identifier_key(options: ConnectionOptions) -> Callable[[Any], Any]:
    """Return the key function used to order record identifiers."""
    if options.identifier_ordering is not None:
        return options.identifier_ordering
    return get_pagination_settings().identifier_key()


def effective_max(options: ConnectionOptions) -> int | None:
    """Return the page size cap: the option when set, else the server-wide setting."""
    if options.max is not None:
        return options.max
    return get_pagination_settings().max_page_size


def _offset_window(
    items: list[Any],
    position: PagePosition | None,
    direction: Direction,
    limit: int,
) -> tuple[list[Any], int, bool, bool]:
    count = len(items)
    boundary = int(position.value) if position is not None else None

    if direction == "forward":
        start = boundary if boundary is not None else 0
        size = limit
    else:
        end = boundary if boundary is not None else count
        start = max(end - limit, 0)
        # Fewer items than requested before the boundary: take them all
        size = end if start == 0 else limit

    window = items[start : start + size]
    return window, start, start > 0, count > start + size


def _identifier_window(
    items: list[Any],
    position: PagePosition,
    direction: Direction,
    limit: int,
    options: ConnectionOptions,
    node_id: NodeId | None,
) -> tuple[list[Any], int, bool, bool]:
    if node_id is None:
        # Record cursors can only be located through node identifiers
        raise InvalidCursorError(position.argument)

    key = identifier_key(options)
    try:
        boundary = key(position.value)
    except (TypeError, ValueError) as e:
        raise InvalidCursorError(position.argument) from e

    after = position.argument == "after"
    result: list[int] = []
    remaining: list[int] = []
    for index, item in enumerate(items):
        ordered = _ordered_id(item, key, node_id)
        beyond = ordered > boundary if after else ordered < boundary
        (result if beyond else remaining).append(index)

    truncated = len(result) > limit
    if direction == "forward":
        picked = result[:limit]
        has_previous = after and bool(remaining)
        has_next = truncated or (not after and bool(remaining))
    else:
        picked = result[max(len(result) - limit, 0) :]
        has_previous = truncated or (after and bool(remaining))
        has_next = not after and bool(remaining)

    window = [items[index] for index in picked]
    start = picked[0] if picked else 0
    return window, start, has_previous, has_next


def _ordered_id(item: Any, key: Callable[[Any], Any], node_id: NodeId) -> Any:
    identifier = node_id(_node_of(item))
    if identifier is None:
        raise IdentifierOrderingError(
            None, "Every node needs an identifier to paginate by record cursor"
        )
    try:
        return key(identifier)
    except (TypeError, ValueError) as e:
        raise IdentifierOrderingError(identifier) from e


def _keep_last(
    window: list[Any],
    start: int,
    has_previous: bool,
    args: PaginationArguments,
    options: ConnectionOptions,
) -> tuple[list[Any], int, bool]:
    last = apply_limit("last", args.last, effective_max(options))
    if last >= len(window):
        return window, start, has_previous
    dropped = len(window) - last
    return window[dropped:], start + dropped, True


def _node_of(item: Any) -> Any:
    return item.node if isinstance(item, EdgeItem) else item


def _build_edge(item: Any, position: int, node_id: NodeId | None) -> Edge[Any]:
    node = _node_of(item)
    identifier = node_id(node) if node_id is not None else None
    if identifier is not None:
        cursor = CursorCodec.encode_record(identifier)
    else:
        cursor = CursorCodec.encode_offset(position)

    if not isinstance(item, EdgeItem):
        return Edge(node=node, cursor=cursor)

    fields: dict[str, Any] = {}
    for name, value in item.fields.items():
        if name == "node":
            logger.warning(
                "Ignoring additional node provided on edge (overriding is not allowed)",
                extra={"cursor": cursor},
            )
            continue
        fields[name] = value
    fields.setdefault("cursor", cursor)
    return Edge(node=node, **fields)


__all__ = [
    "QueryWindow",
    "from_list",
    "from_slice",
    "effective_max",
    "identifier_key",
    "offset_and_limit_for_query",
]
