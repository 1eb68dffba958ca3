"""Pagination argument resolution.

Turns the raw Relay arguments (``first``, ``last``, ``after``, ``before``)
into the pieces the connection builders work with: a direction, a page
size, and a starting position.

Example:
    args = PaginationArguments(first=3, after=CursorCodec.encode_offset(2))
    resolve_limit(args)      # ("forward", 3)
    resolve_position(args)   # PagePosition(kind="offset", value=3, argument="after")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from relay_pagination.core.exceptions import (
    CursorDecodeError,
    InvalidCursorError,
    InvalidLimitError,
    MissingLimitError,
)
from relay_pagination.core.pagination.cursor import CursorCodec

Direction = Literal["forward", "backward"]
CursorArgument = Literal["after", "before"]


class PaginationArguments(BaseModel):
    """The four standard connection arguments.

    Unknown keys are ignored so that a resolver can pass its whole argument
    mapping, custom arguments included.
    """

    after: str | None = Field(default=None, description="Cursor to start after (exclusive)")
    before: str | None = Field(default=None, description="Cursor to end before (exclusive)")
    first: int | None = Field(default=None, description="Number of items from the start")
    last: int | None = Field(default=None, description="Number of items from the end")

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def coerce(cls, args: PaginationArguments | Mapping[str, Any] | None) -> PaginationArguments:
        """Accept either an instance or a plain mapping of arguments."""
        if isinstance(args, cls):
            return args
        return cls.model_validate(dict(args or {}))


class PagePosition(BaseModel):
    """Where a page starts, as derived from ``after``/``before``.

    Attributes:
        kind: ``offset`` or ``id``
        value: Adjusted offset (``after`` offset + 1, or the ``before``
            boundary) or the raw record identifier
        argument: The argument the position came from
    """

    kind: Literal["offset", "id"]
    value: int | str
    argument: CursorArgument

    model_config = ConfigDict(frozen=True)

    @property
    def is_offset(self) -> bool:
        return self.kind == "offset"


def resolve_limit(
    args: PaginationArguments | Mapping[str, Any],
    max: int | None = None,
) -> tuple[Direction, int]:
    """Return the pagination direction and page size.

    ``first`` wins over ``last`` when both are given.

    Args:
        args: Pagination arguments
        max: Optional upper bound for the page size

    Returns:
        Tuple of ``("forward" | "backward", limit)``

    Raises:
        MissingLimitError: If neither ``first`` nor ``last`` is supplied
        InvalidLimitError: If the chosen value is negative
    """
    args = PaginationArguments.coerce(args)

    if args.first is not None:
        direction: Direction = "forward"
        argument, limit = "first", args.first
    elif args.last is not None:
        direction = "backward"
        argument, limit = "last", args.last
    else:
        raise MissingLimitError()

    return direction, apply_limit(argument, limit, max)


def apply_limit(argument: str, value: int, max: int | None = None) -> int:
    """Validate one of ``first``/``last`` and cap it at ``max``.

    Raises:
        InvalidLimitError: If ``value`` is negative
    """
    if value < 0:
        raise InvalidLimitError(argument, value)
    if max is not None:
        return min(max, value)
    return value


def resolve_position(args: PaginationArguments | Mapping[str, Any]) -> PagePosition | None:
    """Return the page start derived from the cursor arguments.

    ``after`` wins over ``before`` when both are given. An ``after`` offset
    cursor starts the page just past the referenced edge; a ``before``
    offset cursor is returned as the boundary offset, not yet adjusted by
    the page size.

    Returns:
        The position, or ``None`` when neither cursor is supplied

    Raises:
        InvalidCursorError: If the cursor cannot be decoded; the error names
            the argument that carried it
    """
    args = PaginationArguments.coerce(args)

    if args.after is not None:
        argument: CursorArgument = "after"
        cursor = args.after
    elif args.before is not None:
        argument = "before"
        cursor = args.before
    else:
        return None

    try:
        decoded = CursorCodec.decode(cursor)
    except CursorDecodeError as e:
        raise InvalidCursorError(argument) from e

    if not decoded.is_offset:
        return PagePosition(kind="id", value=decoded.value, argument=argument)

    if argument == "after":
        return PagePosition(kind="offset", value=decoded.offset + 1, argument=argument)
    return PagePosition(kind="offset", value=max(decoded.offset, 0), argument=argument)


__all__ = [
    "CursorArgument",
    "Direction",
    "PagePosition",
    "PaginationArguments",
    "apply_limit",
    "resolve_limit",
    "resolve_position",
]
