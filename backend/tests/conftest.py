"""Shared fixtures: movie builders and in-memory store wiring."""

from typing import Any, Callable, Sequence

import pytest

from movies_library.controller import MoviesLibraryController
from movies_library.models import Movie
from movies_library.repository import MoviesRepository
from movies_library.storage import InMemoryMovieStore, MovieQuery, MovieStore


class RecordingStore(MovieStore):
    """Delegates to another store and records every call made on it."""

    def __init__(self, inner: MovieStore):
        self.inner = inner
        self.calls: list[str] = []

    async def find(self, query: MovieQuery) -> list[Movie]:
        self.calls.append("find")
        return await self.inner.find(query)

    async def insert_one(self, movie: Movie) -> str:
        self.calls.append("insert_one")
        return await self.inner.insert_one(movie)

    async def insert_many(self, movies: Sequence[Movie]) -> list[str]:
        self.calls.append("insert_many")
        return await self.inner.insert_many(movies)

    async def replace_one(self, query: MovieQuery, movie: Movie) -> int:
        self.calls.append("replace_one")
        return await self.inner.replace_one(query, movie)

    async def delete_one(self, query: MovieQuery) -> int:
        self.calls.append("delete_one")
        return await self.inner.delete_one(query)

    async def clear(self) -> None:
        self.calls.append("clear")
        await self.inner.clear()


def build_movie(**overrides: Any) -> Movie:
    fields = {
        "title": "Test Movie",
        "director": "Test Director",
        "year_released": 2022,
        "genre": "Action",
        "duration": 120,
        "rating": 7.5,
    }
    fields.update(overrides)
    return Movie(**fields)


@pytest.fixture
def make_movie() -> Callable[..., Movie]:
    return build_movie


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore(InMemoryMovieStore())


@pytest.fixture
def repository(store: RecordingStore) -> MoviesRepository:
    return MoviesRepository(store)


@pytest.fixture
def controller(repository: MoviesRepository) -> MoviesLibraryController:
    return MoviesLibraryController(repository)
