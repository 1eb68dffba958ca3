"""Unit tests for SQLAlchemy statement filters."""
from __future__ import annotations

import pytest
from sqlalchemy import select

from relay_pagination.core.database import IdentifierRange, LimitOffset


def _sql(statement) -> str:
    return str(statement.compile(compile_kwargs={"literal_binds": True})).replace("\n", " ")


@pytest.mark.unit
class TestLimitOffset:
    def test_applies_limit_and_offset(self, pet_model):
        stmt = LimitOffset(limit=11, offset=20).apply(select(pet_model).order_by(pet_model.id))

        sql = _sql(stmt)
        assert "ORDER BY pets.id" in sql
        assert "LIMIT 11" in sql
        assert "OFFSET 20" in sql


@pytest.mark.unit
class TestIdentifierRange:
    def test_after_orders_ascending(self, pet_model):
        stmt = IdentifierRange(pet_model.id, after=42, limit=4).apply(select(pet_model))

        sql = _sql(stmt)
        assert "pets.id > 42" in sql
        assert "ORDER BY pets.id ASC" in sql
        assert "LIMIT 4" in sql

    def test_before_backward_orders_descending(self, pet_model):
        stmt = IdentifierRange(
            pet_model.id, before=7, limit=3, direction="backward"
        ).apply(select(pet_model))

        sql = _sql(stmt)
        assert "pets.id < 7" in sql
        assert "ORDER BY pets.id DESC" in sql

    def test_replaces_existing_ordering(self, pet_model):
        """The identifier column defines the page order."""
        stmt = IdentifierRange(pet_model.id).apply(select(pet_model).order_by(pet_model.name))

        sql = _sql(stmt)
        assert "pets.name" not in sql.split("ORDER BY")[1]
        assert "LIMIT" not in sql
