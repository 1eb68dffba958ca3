"""Pagination error translation for GraphQL resolvers.

Pagination failures are client errors: they are reported as field errors
with a structured code, never masked and never turned into an empty page.

Usage:
    @strawberry.field
    @translate_pagination_errors
    def pets(self, first: int | None = None, after: str | None = None) -> PetConnection:
        ...
"""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from graphql import GraphQLError

from relay_pagination.core.exceptions import PaginationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

__all__ = [
    "ErrorCategory",
    "to_graphql_error",
    "translate_pagination_errors",
]


class ErrorCategory:
    """Error codes placed in ``extensions.code``."""

    VALIDATION = "VALIDATION_ERROR"


def to_graphql_error(error: PaginationError) -> GraphQLError:
    """Convert a pagination error into a GraphQL field error.

    The message is the error detail; ``extensions`` carries the error code,
    the problem type and, when known, the offending argument.
    """
    extensions: dict[str, Any] = {
        "code": ErrorCategory.VALIDATION,
        "type": error.type,
    }
    if error.argument is not None:
        extensions["argument"] = error.argument
    return GraphQLError(error.detail, original_error=error, extensions=extensions)


def translate_pagination_errors(resolver: F) -> F:
    """Wrap a sync or async resolver so PaginationError becomes a GraphQLError."""
    if inspect.iscoroutinefunction(resolver):

        @functools.wraps(resolver)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await resolver(*args, **kwargs)
            except PaginationError as e:
                _log_rejected(resolver, e)
                raise to_graphql_error(e) from e

        return async_wrapper  # type: ignore[return-value]

    @functools.wraps(resolver)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return resolver(*args, **kwargs)
        except PaginationError as e:
            _log_rejected(resolver, e)
            raise to_graphql_error(e) from e

    return wrapper  # type: ignore[return-value]


def _log_rejected(resolver: Callable[..., Any], error: PaginationError) -> None:
    logger.info(
        "Rejected pagination arguments",
        extra={
            "resolver": getattr(resolver, "__qualname__", repr(resolver)),
            "error_type": error.type,
            "argument": error.argument,
        },
    )
