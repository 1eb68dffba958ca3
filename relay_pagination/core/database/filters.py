"""Query filtering utilities for SQLAlchemy.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from relay_pagination.core.database.filters import LimitOffset, IdentifierRange

    stmt = select(User).order_by(User.id)
    stmt = LimitOffset(limit=11, offset=20).apply(stmt)

    stmt = select(User)
    stmt = IdentifierRange(User.id, after=42, limit=11).apply(stmt)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class LimitOffset(StatementFilter):
    """Pagination using LIMIT and OFFSET.

    The statement must already carry an ORDER BY; an offset means nothing
    without a stable ordering.

    Example:
        # Rows 20..29 plus one lookahead row
        stmt = LimitOffset(limit=11, offset=20).apply(stmt)
    """

    def __init__(self, limit: int, offset: int = 0):
        """Initialize pagination filter.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
        """
        self.limit = limit
        self.offset = offset

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply pagination to statement."""
        return statement.limit(self.limit).offset(self.offset)


class IdentifierRange(StatementFilter):
    """Keyset pagination over a single identifier column.

    Seeks past a boundary identifier instead of scanning with OFFSET:

    - ``after`` keeps rows with ``column > after``
    - ``before`` keeps rows with ``column < before``

    The filter owns the statement's ordering. Forward pages are ordered
    ascending; backward pages are ordered descending so that LIMIT keeps
    the rows closest to the boundary, and the caller reverses them back.

    Example:
        # Last 10 users before id 500 (plus one lookahead row)
        stmt = IdentifierRange(
            User.id, before=500, limit=11, direction="backward"
        ).apply(select(User))
    """

    def __init__(
        self,
        column: InstrumentedAttribute[Any],
        *,
        after: Any = None,
        before: Any = None,
        limit: int | None = None,
        direction: Literal["forward", "backward"] = "forward",
    ) -> None:
        """Initialize identifier range filter.

        Args:
            column: Identifier column the collection is ordered by
            after: Exclusive lower bound (None for no bound)
            before: Exclusive upper bound (None for no bound)
            limit: Maximum rows to return (None for no limit)
            direction: "forward" (ascending) or "backward" (descending)
        """
        self.column = column
        self.after = after
        self.before = before
        self.limit = limit
        self.direction = direction

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply range predicate, ordering and limit to statement."""
        if self.after is not None:
            statement = statement.where(self.column > self.after)
        if self.before is not None:
            statement = statement.where(self.column < self.before)

        ordering = self.column.desc() if self.direction == "backward" else self.column.asc()
        statement = statement.order_by(None).order_by(ordering)

        if self.limit is not None:
            statement = statement.limit(self.limit)
        return statement


__all__ = ["IdentifierRange", "LimitOffset", "StatementFilter"]
