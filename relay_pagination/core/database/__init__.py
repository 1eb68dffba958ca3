"""SQLAlchemy helpers used by the query adapter."""

from relay_pagination.core.database.filters import (
    IdentifierRange,
    LimitOffset,
    StatementFilter,
)

__all__ = ["IdentifierRange", "LimitOffset", "StatementFilter"]
