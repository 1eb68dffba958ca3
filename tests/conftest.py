"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: isolate cached settings between tests
    - Data Fixtures: ordered collections and identifiable records
    - Database Fixtures: in-memory SQLite engines and sessions
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass

import pytest
from sqlalchemy import Integer, String, create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

# Tests must not pick up deployment configuration
for _var in ("PAGINATION_MAX_PAGE_SIZE", "PAGINATION_DEFAULT_IDENTIFIER_ORDERING"):
    os.environ.pop(_var, None)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _clear_settings_caches() -> Generator[None]:
    """Reload settings for every test so env overrides never leak."""
    from relay_pagination.core.settings import clear_all_caches

    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Data Fixtures
# ============================================================================


@dataclass(frozen=True)
class Record:
    """An application entity with a stable identifier."""

    id: str
    name: str


@pytest.fixture
def numbers() -> list[int]:
    """Ten nodes whose value equals their index."""
    return list(range(10))


@pytest.fixture
def records() -> list[Record]:
    """Ten records ordered by integer identifier 1..10."""
    return [Record(id=str(i), name=f"record-{i}") for i in range(1, 11)]


# ============================================================================
# Database Fixtures
# ============================================================================


class Base(DeclarativeBase):
    pass


class Pet(Base):
    __tablename__ = "pets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50))


@pytest.fixture
def db_session() -> Generator[Session]:
    """Sync session on in-memory SQLite holding pets 1..10."""
    engine = create_engine("sqlite://", echo=False)
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all([Pet(id=i, name=f"pet-{i}") for i in range(1, 11)])
        session.commit()
        yield session
    engine.dispose()


@pytest.fixture
async def async_db_session() -> AsyncGenerator[AsyncSession]:
    """Async session on in-memory SQLite holding pets 1..10."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        session.add_all([Pet(id=i, name=f"pet-{i}") for i in range(1, 11)])
        await session.commit()
        yield session

    await engine.dispose()


@pytest.fixture
def pet_model() -> type[Pet]:
    """The mapped model behind the database fixtures."""
    return Pet
