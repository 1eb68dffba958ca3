"""GraphQL types for Relay connections."""

from relay_pagination.features.graphql.types.base import PageInfoType
from relay_pagination.features.graphql.types.pagination import (
    ConnectionArgsInput,
    create_connection,
    create_edge,
    to_connection_type,
)

__all__ = [
    "ConnectionArgsInput",
    "PageInfoType",
    "create_connection",
    "create_edge",
    "to_connection_type",
]
