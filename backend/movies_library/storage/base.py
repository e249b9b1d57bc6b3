"""Store access interface shared by the in-memory and MongoDB stores."""

from abc import ABC, abstractmethod
from typing import Sequence

from pydantic import BaseModel, model_validator

from movies_library.models import Movie


class MovieQuery(BaseModel):
    """Document predicate. At most one criterion; none matches every movie."""

    id: str | None = None
    title: str | None = None
    title_contains: str | None = None  # case-sensitive substring

    @model_validator(mode="after")
    def single_criterion(self) -> "MovieQuery":
        criteria = [v for v in (self.id, self.title, self.title_contains) if v is not None]
        if len(criteria) > 1:
            raise ValueError("MovieQuery accepts at most one criterion")
        return self

    def matches(self, movie: Movie) -> bool:
        """Evaluate the predicate against a movie held in memory."""
        if self.id is not None:
            return movie.id == self.id
        if self.title is not None:
            return movie.title == self.title
        if self.title_contains is not None:
            return movie.title is not None and self.title_contains in movie.title
        return True


class MovieStore(ABC):
    """Narrow async interface over one movies collection."""

    @abstractmethod
    async def find(self, query: MovieQuery) -> list[Movie]:
        """Return every matching movie in store order."""

    @abstractmethod
    async def insert_one(self, movie: Movie) -> str:
        """Store a copy of `movie` and return its id."""

    @abstractmethod
    async def insert_many(self, movies: Sequence[Movie]) -> list[str]:
        """Store copies of `movies` and return their ids in order."""

    @abstractmethod
    async def replace_one(self, query: MovieQuery, movie: Movie) -> int:
        """Replace the first match, keeping its id. Returns matched count."""

    @abstractmethod
    async def delete_one(self, query: MovieQuery) -> int:
        """Delete the first match. Returns deleted count."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every document."""
