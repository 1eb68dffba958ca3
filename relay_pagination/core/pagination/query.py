"""Build connections from SQLAlchemy statements.

The adapter computes the page window, applies it to the statement with one
extra lookahead row, runs the statement through a caller-supplied
``execute`` callable and trims the lookahead row before building edges.
The lookahead row tells whether a next page exists without a COUNT query.

Two windowing modes:

- Offset mode (default): ``LIMIT limit + 1 OFFSET offset``. The statement
  MUST carry an ORDER BY. ``last`` needs a ``before`` cursor or a ``count``.
- Keyset mode (``id_column`` given): record cursors become an identifier
  range predicate on that column, which also defines the ordering.

Example:
    stmt = select(Post).where(Post.author_id == user.id).order_by(Post.id)
    connection = from_query(
        stmt,
        lambda s: session.scalars(s).all(),
        {"first": 10, "after": after},
    )

    # Async session
    async def execute(s):
        return (await session.scalars(s)).all()

    connection = await from_async_query(stmt, execute, args)
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING, Any

from relay_pagination.core.database.filters import IdentifierRange, LimitOffset
from relay_pagination.core.exceptions import InvalidCursorError
from relay_pagination.core.pagination.arguments import (
    CursorArgument,
    Direction,
    PaginationArguments,
    resolve_limit,
    resolve_position,
)
from relay_pagination.core.pagination.connection import (
    NodeId,
    effective_max,
    from_slice,
    identifier_key,
    offset_and_limit_for_query,
)
from relay_pagination.core.pagination.schemas import Connection, ConnectionOptions

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.orm import InstrumentedAttribute

logger = logging.getLogger(__name__)

Arguments = PaginationArguments | Mapping[str, Any]


@dataclass(slots=True, frozen=True)
class QueryPlan:
    """A statement with its page window applied.

    Attributes:
        statement: Statement to execute (limit is ``limit + 1``)
        limit: Rows that belong to the page
        offset: Offset applied in offset mode, 0 in keyset mode
        direction: Pagination direction
        cursor_argument: Cursor argument used in keyset mode, if any
        keyset: Whether the plan seeks by identifier instead of offset
    """

    statement: Select[Any]
    limit: int
    offset: int
    direction: Direction
    cursor_argument: CursorArgument | None = None
    keyset: bool = False


def plan_query(
    statement: Select[Any],
    args: Arguments,
    options: ConnectionOptions | None = None,
    *,
    id_column: InstrumentedAttribute[Any] | None = None,
) -> QueryPlan:
    """Apply the page window for ``args`` to ``statement``.

    Raises:
        MissingLimitError: Neither ``first`` nor ``last`` was supplied
        InvalidCursorError: A cursor is malformed or of the wrong kind
        MissingCountError: Offset mode, ``last`` without ``before`` or ``count``
    """
    options = options or ConnectionOptions()

    if id_column is None:
        window = offset_and_limit_for_query(args, options)
        direction, _ = resolve_limit(args, effective_max(options))
        return QueryPlan(
            statement=LimitOffset(window.limit + 1, window.offset).apply(statement),
            limit=window.limit,
            offset=window.offset,
            direction=direction,
        )

    direction, limit = resolve_limit(args, effective_max(options))
    position = resolve_position(args)
    bounds: dict[str, Any] = {}
    argument: CursorArgument | None = None
    if position is not None:
        argument = position.argument
        if position.is_offset:
            raise InvalidCursorError(argument)
        try:
            bounds[argument] = identifier_key(options)(position.value)
        except (TypeError, ValueError) as e:
            raise InvalidCursorError(argument) from e

    range_filter = IdentifierRange(id_column, limit=limit + 1, direction=direction, **bounds)
    return QueryPlan(
        statement=range_filter.apply(statement),
        limit=limit,
        offset=0,
        direction=direction,
        cursor_argument=argument,
        keyset=True,
    )


def from_query(
    statement: Select[Any],
    execute: Callable[[Select[Any]], Sequence[Any]],
    args: Arguments,
    options: ConnectionOptions | None = None,
    *,
    node_id: NodeId | None = None,
    id_column: InstrumentedAttribute[Any] | None = None,
) -> Connection[Any]:
    """Build a connection by running a windowed statement.

    Args:
        statement: Ordered select statement without pagination
        execute: Runs a statement and returns its rows, e.g.
            ``lambda s: session.scalars(s).all()``
        args: Pagination arguments
        options: ``max``, ``count`` and ``identifier_ordering``
        node_id: Returns a row's identifier for record cursors. Defaults to
            the ``id_column`` attribute in keyset mode.
        id_column: Switches to keyset mode over this column

    Returns:
        Connection with the requested page

    Errors raised by ``execute`` propagate unchanged.
    """
    plan = plan_query(statement, args, options, id_column=id_column)
    _log_plan(plan)
    rows = list(execute(plan.statement))
    return _assemble(plan, rows, options, node_id, id_column)


async def from_async_query(
    statement: Select[Any],
    execute: Callable[[Select[Any]], Awaitable[Sequence[Any]]],
    args: Arguments,
    options: ConnectionOptions | None = None,
    *,
    node_id: NodeId | None = None,
    id_column: InstrumentedAttribute[Any] | None = None,
) -> Connection[Any]:
    """Async variant of :func:`from_query` for ``AsyncSession`` callers."""
    plan = plan_query(statement, args, options, id_column=id_column)
    _log_plan(plan)
    rows = list(await execute(plan.statement))
    return _assemble(plan, rows, options, node_id, id_column)


def _log_plan(plan: QueryPlan) -> None:
    logger.debug(
        "Executing paginated query",
        extra={
            "direction": plan.direction,
            "offset": plan.offset,
            "limit": plan.limit,
            "keyset": plan.keyset,
        },
    )


def _assemble(
    plan: QueryPlan,
    rows: list[Any],
    options: ConnectionOptions | None,
    node_id: NodeId | None,
    id_column: InstrumentedAttribute[Any] | None,
) -> Connection[Any]:
    options = options or ConnectionOptions()
    overflow = len(rows) > plan.limit
    rows = rows[: plan.limit]

    if not plan.keyset:
        flags = {"has_previous_page": plan.offset > 0, "has_next_page": overflow}
        return from_slice(rows, plan.offset, options.model_copy(update=flags), node_id=node_id)

    backward = plan.direction == "backward"
    if backward:
        rows.reverse()
    flags = {
        "has_previous_page": (overflow and backward) or plan.cursor_argument == "after",
        "has_next_page": (overflow and not backward) or plan.cursor_argument == "before",
    }
    if node_id is None and id_column is not None:
        node_id = attrgetter(id_column.key)

    return from_slice(rows, 0, options.model_copy(update=flags), node_id=node_id)


__all__ = ["QueryPlan", "from_async_query", "from_query", "plan_query"]
