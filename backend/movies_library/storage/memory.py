"""In-memory movie store for unit tests and local runs without MongoDB."""

import logging
from typing import Sequence

from bson import ObjectId

from movies_library.models import Movie
from movies_library.storage.base import MovieQuery, MovieStore

logger = logging.getLogger(__name__)


class InMemoryMovieStore(MovieStore):
    """Keeps deep copies of movies in insertion order.

    Ids are bson ObjectId strings so records look the same as those read back
    from MongoDB.
    """

    def __init__(self, movies: Sequence[Movie] | None = None):
        self._movies: list[Movie] = []
        for movie in movies or []:
            self._insert(movie)

    def _insert(self, movie: Movie) -> str:
        stored = movie.model_copy(deep=True)
        if stored.id is None:
            stored.id = str(ObjectId())
        elif any(m.id == stored.id for m in self._movies):
            raise ValueError(f"Duplicate movie id: {stored.id}")
        self._movies.append(stored)
        return stored.id

    def _first_index(self, query: MovieQuery) -> int | None:
        for i, movie in enumerate(self._movies):
            if query.matches(movie):
                return i
        return None

    async def find(self, query: MovieQuery) -> list[Movie]:
        return [m.model_copy(deep=True) for m in self._movies if query.matches(m)]

    async def insert_one(self, movie: Movie) -> str:
        return self._insert(movie)

    async def insert_many(self, movies: Sequence[Movie]) -> list[str]:
        return [self._insert(movie) for movie in movies]

    async def replace_one(self, query: MovieQuery, movie: Movie) -> int:
        index = self._first_index(query)
        if index is None:
            return 0
        replacement = movie.model_copy(deep=True)
        replacement.id = self._movies[index].id
        self._movies[index] = replacement
        return 1

    async def delete_one(self, query: MovieQuery) -> int:
        index = self._first_index(query)
        if index is None:
            return 0
        del self._movies[index]
        return 1

    async def clear(self) -> None:
        logger.debug(f"Clearing {len(self._movies)} in-memory movies")
        self._movies.clear()
