"""Generic Relay connection types for strawberry schemas.

Creates ``<Prefix>Edge`` and ``<Prefix>Connection`` types for a node type,
so features don't hand-write the same two classes over and over.

Example:
    PetConnection = create_connection(PetType, "Pet")

    @strawberry.type
    class Query:
        @strawberry.field
        @translate_pagination_errors
        def pets(
            self,
            first: int | None = None,
            after: str | None = None,
            last: int | None = None,
            before: str | None = None,
        ) -> PetConnection:
            args = {"first": first, "after": after, "last": last, "before": before}
            return to_connection_type(PetConnection, from_list(PETS, args))
"""

from collections.abc import Callable
from typing import Any

import strawberry

from relay_pagination.core.pagination.arguments import PaginationArguments
from relay_pagination.core.pagination.schemas import Connection
from relay_pagination.features.graphql.types.base import PageInfoType

__all__ = [
    "ConnectionArgsInput",
    "create_connection",
    "create_edge",
    "to_connection_type",
]


# ============================================================================
# Connection Arguments Input
# ============================================================================


@strawberry.input(name="ConnectionArgs", description="Input for cursor-based pagination")
class ConnectionArgsInput:
    """The four Relay pagination arguments grouped as one input."""

    first: int | None = strawberry.field(
        default=None,
        description="Number of items to return from the start",
    )
    after: str | None = strawberry.field(
        default=None,
        description="Cursor to start pagination from (exclusive)",
    )
    last: int | None = strawberry.field(
        default=None,
        description="Number of items to return from the end",
    )
    before: str | None = strawberry.field(
        default=None,
        description="Cursor to end pagination at (exclusive)",
    )

    def to_arguments(self) -> PaginationArguments:
        return PaginationArguments(
            first=self.first, after=self.after, last=self.last, before=self.before
        )


# ============================================================================
# Connection Factories
# ============================================================================


def create_edge(
    node_type: type,
    type_name_prefix: str,
    edge_fields: dict[str, type] | None = None,
) -> type:
    """Create a Relay Edge type for ``node_type``.

    Args:
        node_type: Strawberry type of the node
        type_name_prefix: Prefix for the type name ("Pet" -> "PetEdge")
        edge_fields: Extra nullable edge fields, e.g. ``{"role": str}``

    Returns:
        A Strawberry Edge type class
    """
    annotations: dict[str, Any] = {"node": node_type | None, "cursor": str}
    namespace: dict[str, Any] = {
        "node": strawberry.field(description="The item at the end of the edge"),
        "cursor": strawberry.field(description="Opaque cursor for this edge used in pagination"),
    }
    for name, field_type in (edge_fields or {}).items():
        annotations[name] = field_type | None
        namespace[name] = strawberry.field(default=None)
    namespace["__annotations__"] = annotations

    edge_cls = type(f"{type_name_prefix}Edge", (), namespace)
    return strawberry.type(
        edge_cls,
        name=f"{type_name_prefix}Edge",
        description=f"An edge in a connection of {type_name_prefix}",
    )


def create_connection(
    node_type: type,
    type_name_prefix: str,
    edge_fields: dict[str, type] | None = None,
) -> type:
    """Create a Relay Connection type for ``node_type``.

    Args:
        node_type: Strawberry type of the node
        type_name_prefix: Prefix for the type name ("Pet" -> "PetConnection")
        edge_fields: Extra nullable edge fields, passed to :func:`create_edge`

    Returns:
        A Strawberry Connection type class; its edge type is available as
        ``__edge_type__``
    """
    edge_type = create_edge(node_type, type_name_prefix, edge_fields)

    namespace: dict[str, Any] = {
        "__annotations__": {"edges": list[edge_type], "page_info": PageInfoType},
        "edges": strawberry.field(description="List of edges containing nodes and their cursors"),
        "page_info": strawberry.field(description="Pagination information"),
    }
    connection_cls = strawberry.type(
        type(f"{type_name_prefix}Connection", (), namespace),
        name=f"{type_name_prefix}Connection",
        description=f"A paginated list of {type_name_prefix}",
    )
    connection_cls.__edge_type__ = edge_type
    connection_cls.__edge_fields__ = tuple(edge_fields or ())
    return connection_cls


# ============================================================================
# Conversion
# ============================================================================


def to_connection_type(
    connection_type: type,
    connection: Connection[Any],
    node_converter: Callable[[Any], Any] | None = None,
) -> Any:
    """Convert a core connection into an instance of ``connection_type``.

    Args:
        connection_type: A class returned by :func:`create_connection`
        connection: Result of ``from_list``/``from_slice``/``from_query``
        node_converter: Maps each node to the GraphQL node type
            (e.g. ``PetType.from_model``); nodes pass through when omitted

    Returns:
        Instance of ``connection_type``
    """
    edge_type = connection_type.__edge_type__
    edge_fields = connection_type.__edge_fields__
    convert = node_converter or (lambda node: node)

    edges = []
    for edge in connection.edges:
        extra = edge.model_extra or {}
        edges.append(
            edge_type(
                node=convert(edge.node),
                cursor=edge.cursor,
                **{name: extra.get(name) for name in edge_fields},
            )
        )
    return connection_type(
        edges=edges,
        page_info=PageInfoType.from_pydantic(connection.page_info),
    )
