"""Pytest configuration and fixtures for service layer tests."""

import copy

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from recipe_vault.models.base import Base
from recipe_vault.services import database as db_module
from recipe_vault.utils.config import reset_config


SOUP = {
    "id": 42,
    "title": "Soup",
    "image": "https://img.example.com/soup.jpg",
    "servings": 4,
    "readyInMinutes": 30,
    "pricePerServing": 1.5,
    "extendedIngredients": [
        {"id": 7, "name": "Salt", "amount": 1, "unit": "tsp"},
    ],
}

STEW = {
    "id": 43,
    "title": "Stew",
    "image": "https://img.example.com/stew.jpg",
    "servings": 6,
    "readyInMinutes": 90,
    "pricePerServing": 3.25,
    "extendedIngredients": [
        {"id": 7, "name": "Salt", "amount": 2, "unit": "tsp"},
        {"id": 11, "name": "Beef", "image": "beef.png", "amount": 500, "unit": "g"},
        {"id": 12, "name": "Carrot", "amount": 3},
    ],
}


async def _make_database(database_url, monkeypatch):
    engine = db_module.create_database_engine(database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)

    # Monkey-patch the global session factory for tests
    monkeypatch.setattr(db_module, "get_session_factory", lambda: session_factory)
    return engine, session_factory


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="function")
async def test_db(monkeypatch):
    """Provide a clean in-memory database for each test function.

    This fixture:
    1. Creates an in-memory SQLite engine (StaticPool, foreign keys on)
    2. Creates all tables
    3. Routes session_scope() to it
    4. Drops all tables and disposes the engine afterwards
    """
    engine, session_factory = await _make_database("sqlite+aiosqlite:///:memory:", monkeypatch)

    yield session_factory

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture(scope="function")
async def file_db(tmp_path, monkeypatch):
    """Provide a file-backed database with a real connection pool.

    Needed where two units of work must hold separate connections at once.
    """
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'concurrency.db'}"
    engine, session_factory = await _make_database(database_url, monkeypatch)

    yield session_factory

    await engine.dispose()


@pytest.fixture
def count_rows():
    """Return a coroutine that counts rows of a model, optionally filtered by column values."""

    async def _count(session_factory, model, **filters):
        stmt = select(func.count()).select_from(model)
        for column, value in filters.items():
            stmt = stmt.where(getattr(model, column) == value)
        async with session_factory() as session:
            return await session.scalar(stmt)

    return _count


@pytest.fixture
def soup_payload():
    """A fresh copy of the single-ingredient soup recipe."""
    return copy.deepcopy(SOUP)


@pytest.fixture
def stew_payload():
    """A fresh copy of the stew recipe, which shares Salt with the soup."""
    return copy.deepcopy(STEW)
