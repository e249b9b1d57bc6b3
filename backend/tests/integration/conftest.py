"""MongoDB fixtures: one throwaway database per test module."""

import asyncio
from contextlib import asynccontextmanager

import pytest

from movies_library.config import Settings, load_settings
from movies_library.controller import MoviesLibraryController
from movies_library.repository import MoviesRepository
from movies_library.storage import (
    check_connection,
    create_client,
    drop_database,
    generate_database_name,
    mongo_movie_store,
)


@pytest.fixture(scope="module")
def mongo_settings() -> Settings:
    settings = load_settings()

    async def ping() -> bool:
        client = create_client(settings)
        try:
            return await check_connection(client)
        finally:
            client.close()

    if not asyncio.run(ping()):
        pytest.skip(f"MongoDB is not reachable at {settings.mongodb.url}")
    return settings


@pytest.fixture(scope="module")
def movies_database(mongo_settings: Settings):
    """Fresh database name for the module, dropped at teardown."""
    name = generate_database_name(mongo_settings.mongodb.test_database_prefix)
    yield name

    async def drop() -> None:
        client = create_client(mongo_settings)
        try:
            await drop_database(client, name)
        finally:
            client.close()

    asyncio.run(drop())


@pytest.fixture
def open_library(mongo_settings: Settings, movies_database: str):
    """Factory for an async context yielding (controller, store) on an emptied collection.

    Motor clients are bound to one event loop, so each test opens its own
    inside its asyncio.run call.
    """

    @asynccontextmanager
    async def _open():
        async with mongo_movie_store(mongo_settings, movies_database) as store:
            await store.clear()
            yield MoviesLibraryController(MoviesRepository(store)), store

    return _open
