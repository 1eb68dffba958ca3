"""Pagination settings for connection resolvers.

Centralizes the server-side defaults every connection shares, so that a
deployment can tune them without touching resolver code.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_MAX_PAGE_SIZE=100, PAGINATION_DEFAULT_IDENTIFIER_ORDERING=string
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

IdentifierOrdering = Literal["integer", "string"]

_INTEGER_RE = re.compile(r"-?[0-9]+")


def _integer_key(identifier: Any) -> int:
    if isinstance(identifier, bool):
        raise ValueError(f"identifier {identifier!r} is not integer-ordered")
    if isinstance(identifier, int):
        return identifier
    if isinstance(identifier, str) and _INTEGER_RE.fullmatch(identifier):
        return int(identifier)
    raise ValueError(f"identifier {identifier!r} is not integer-ordered")


_ORDERINGS: dict[str, Callable[[Any], Any]] = {
    "integer": _integer_key,
    "string": str,
}


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        max_page_size: Upper bound applied to ``first``/``last`` when a
            connection does not pass its own ``max`` option. ``None`` means
            no server-wide cap.
        default_identifier_ordering: How record identifiers are compared
            when a connection does not pass its own ``identifier_ordering``.

    Example:
        settings = PaginationSettings(max_page_size=50)
        key = settings.identifier_key()
        key("42")  # 42
    """

    max_page_size: int | None = Field(
        default=None,
        ge=1,
        le=10000,
        description="Server-wide cap on first/last (None disables the cap)",
    )
    default_identifier_ordering: IdentifierOrdering = Field(
        default="integer",
        description="Ordering used to compare record identifiers (integer|string)",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    def identifier_key(self) -> Callable[[Any], Any]:
        """Return the key function for the configured identifier ordering."""
        return _ORDERINGS[self.default_identifier_ordering]


__all__ = ["IdentifierOrdering", "PaginationSettings"]
