"""Base GraphQL types shared by every connection."""

import strawberry

from relay_pagination.core.pagination.schemas import PageInfo


@strawberry.type(name="PageInfo", description="Information about pagination in a connection")
class PageInfoType:
    """GraphQL Relay PageInfo for cursor-based pagination.

    Mirrors relay_pagination.core.pagination.schemas.PageInfo.
    """

    has_previous_page: bool = strawberry.field(description="Whether previous items exist")
    has_next_page: bool = strawberry.field(description="Whether more items exist")
    start_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = strawberry.field(
        default=None,
        description="Cursor of the last item",
    )

    @classmethod
    def from_pydantic(cls, page_info: PageInfo) -> "PageInfoType":
        return cls(
            has_previous_page=page_info.has_previous_page,
            has_next_page=page_info.has_next_page,
            start_cursor=page_info.start_cursor,
            end_cursor=page_info.end_cursor,
        )


__all__ = ["PageInfoType"]
