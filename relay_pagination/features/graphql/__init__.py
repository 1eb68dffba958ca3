"""Strawberry GraphQL surface for Relay connections.

Provides the PageInfo type, a connection type factory, a converter from
core connections to GraphQL objects, and resolver error translation.
"""

from relay_pagination.features.graphql.errors import (
    ErrorCategory,
    to_graphql_error,
    translate_pagination_errors,
)
from relay_pagination.features.graphql.types import (
    ConnectionArgsInput,
    PageInfoType,
    create_connection,
    create_edge,
    to_connection_type,
)

__all__ = [
    "ConnectionArgsInput",
    "ErrorCategory",
    "PageInfoType",
    "create_connection",
    "create_edge",
    "to_connection_type",
    "to_graphql_error",
    "translate_pagination_errors",
]
