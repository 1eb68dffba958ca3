"""Custom exception classes for connection pagination."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details so a schema surface can render the
    failure without knowing the concrete class.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=400,
            detail="Invalid cursor provided as `after` argument",
            type="invalid-cursor",
            extra={"argument": "after"},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class PaginationError(AppException):
    """Base class for every pagination failure reported to callers.

    Attributes:
        argument: Name of the pagination argument that caused the failure,
            when one can be blamed (``after``, ``before``, ``first``, ``last``).
    """

    def __init__(
        self,
        detail: str,
        type: str = "pagination-error",
        argument: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.argument = argument
        merged = dict(extra or {})
        if argument is not None:
            merged.setdefault("argument", argument)
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Invalid Pagination Arguments",
            extra=merged,
        )


class MissingLimitError(PaginationError):
    """Raised when neither ``first`` nor ``last`` was supplied."""

    def __init__(self) -> None:
        super().__init__(
            detail="You must either supply `:first` or `:last`",
            type="missing-pagination-limit",
        )


class InvalidLimitError(PaginationError):
    """Raised when ``first`` or ``last`` is negative."""

    def __init__(self, argument: str, value: int) -> None:
        super().__init__(
            detail=f"`{argument}` must be a non-negative integer, got {value}",
            type="invalid-pagination-limit",
            argument=argument,
            extra={"value": value},
        )


class InvalidCursorError(PaginationError):
    """Raised when the cursor supplied as ``after`` or ``before`` cannot be used."""

    def __init__(self, argument: str) -> None:
        super().__init__(
            detail=f"Invalid cursor provided as `{argument}` argument",
            type="invalid-cursor",
            argument=argument,
        )


class MissingCountError(PaginationError):
    """Raised when a query is paginated backward with no ``before`` and no count."""

    def __init__(self) -> None:
        super().__init__(
            detail=(
                "You must supply a count (total number of records) option "
                "if using `last` without `before`"
            ),
            type="missing-count",
        )


class CursorDecodeError(ValueError):
    """Raised by the cursor codec for a malformed cursor.

    Carries no argument name; callers that know which argument produced
    the cursor translate it into :class:`InvalidCursorError`.
    """


class IdentifierOrderingError(AppException):
    """Raised when a node identifier cannot be placed in the configured ordering.

    This is a configuration problem on the server side, not a client error:
    the identifiers returned by ``node_id`` do not fit the ordering used to
    compare them with record cursors.
    """

    def __init__(self, identifier: Any, detail: str | None = None) -> None:
        super().__init__(
            status_code=500,
            detail=detail or f"Identifier {identifier!r} does not fit the configured ordering",
            type="identifier-ordering",
            title="Pagination Configuration Error",
            extra={"identifier": identifier},
        )


__all__ = [
    "AppException",
    "CursorDecodeError",
    "IdentifierOrderingError",
    "InvalidCursorError",
    "InvalidLimitError",
    "MissingCountError",
    "MissingLimitError",
    "PaginationError",
]
