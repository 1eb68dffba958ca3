"""Connection schemas following the Relay cursor connection model.

A connection is built fresh for every resolver call and is never mutated
afterwards, so every model here is frozen.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PageInfo(BaseModel):
    """Pagination metadata following the Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first edge, ``None`` when there are no edges
        end_cursor: Cursor of the last edge, ``None`` when there are no edges
    """

    has_previous_page: bool = Field(
        default=False,
        description="Whether previous items exist",
    )
    has_next_page: bool = Field(
        default=False,
        description="Whether more items exist",
    )
    start_cursor: str | None = Field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = Field(
        default=None,
        description="Cursor of the last item",
    )

    model_config = ConfigDict(frozen=True)


class Edge(BaseModel, Generic[T]):
    """Edge wrapper for paginated items.

    Each edge contains a node (the actual item) and its cursor. Additional
    edge fields supplied through :class:`EdgeItem` (a membership role, for
    instance) are kept as extra attributes.
    """

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")

    model_config = ConfigDict(frozen=True, extra="allow", arbitrary_types_allowed=True)


class Connection(BaseModel, Generic[T]):
    """A page of edges plus the metadata needed to request neighbouring pages.

    Client navigation:
        # First page
        connection(first: 10)

        # Next page (using end_cursor from previous response)
        connection(first: 10, after: "YXJyYXljb25uZWN0aW9uOjk=")

        # Previous page (using start_cursor)
        connection(last: 10, before: "YXJyYXljb25uZWN0aW9uOjEw")
    """

    edges: list[Edge] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(
        default_factory=PageInfo,
        description="Pagination metadata",
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


class EdgeItem(NamedTuple):
    """A node together with extra fields to place on its edge.

    Pass these instead of bare nodes to attach edge-level data::

        from_list(
            [EdgeItem(homer, {"role": "owner"}), EdgeItem(lisa, {"role": "member"})],
            {"first": 2},
        )

    A ``cursor`` field replaces the generated cursor. A ``node`` field is
    ignored (with a warning), since the node cannot be overridden.
    """

    node: Any
    fields: Mapping[str, Any]


class ConnectionOptions(BaseModel):
    """Named options accepted by the connection builders.

    Attributes:
        max: Upper bound for ``first``/``last``. Falls back to the
            ``PAGINATION_MAX_PAGE_SIZE`` setting when unset.
        count: Total number of records; lets query pagination go backward
            without a ``before`` cursor.
        has_previous_page: Page flag for ``from_slice`` (trusted as given)
        has_next_page: Page flag for ``from_slice`` (trusted as given)
        identifier_ordering: Key function placing record identifiers in
            the collection's order. Falls back to the
            ``PAGINATION_DEFAULT_IDENTIFIER_ORDERING`` setting when unset.
    """

    max: int | None = Field(default=None, ge=0, description="Maximum page size")
    count: int | None = Field(default=None, ge=0, description="Total record count")
    has_previous_page: bool | None = Field(default=None)
    has_next_page: bool | None = Field(default=None)
    identifier_ordering: Callable[[Any], Any] | None = Field(default=None)

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


__all__ = [
    "Connection",
    "ConnectionOptions",
    "Edge",
    "EdgeItem",
    "PageInfo",
]
