"""
MoviesRepository

Movie CRUD over a MovieStore, addressed by title.

Methods:
- add(movie): insert one document, duplicates allowed
- get_all() -> list[Movie]: every movie, empty list when none
- get_by_title(title) -> Movie | None: first exact title match
- search_by_fragment(fragment) -> list[Movie]: substring match, raises on none
- delete(title): delete exact title match, raises when missing
- update(movie): replace the stored document by id, else by title
"""

import logging

from movies_library.exceptions import InvalidMovieOperationError, MovieNotFoundError
from movies_library.models import Movie
from movies_library.storage.base import MovieQuery, MovieStore

logger = logging.getLogger(__name__)


class MoviesRepository:
    """Translates movie operations into store calls."""

    def __init__(self, store: MovieStore):
        self.store = store

    async def add(self, movie: Movie) -> None:
        movie_id = await self.store.insert_one(movie)
        logger.debug(f"Inserted movie '{movie.title}' with id {movie_id}")

    async def get_all(self) -> list[Movie]:
        return await self.store.find(MovieQuery())

    async def get_by_title(self, title: str | None) -> Movie | None:
        # An empty MovieQuery matches everything, so None must not reach the store
        if title is None:
            return None
        movies = await self.store.find(MovieQuery(title=title))
        return movies[0] if movies else None

    async def search_by_fragment(self, fragment: str | None) -> list[Movie]:
        movies = [] if fragment is None else await self.store.find(MovieQuery(title_contains=fragment))
        if not movies:
            logger.info(f"No movies found with title containing '{fragment}'")
            raise MovieNotFoundError("No movies found matching the title fragment.")
        return movies

    async def delete(self, title: str | None) -> None:
        deleted = 0 if title is None else await self.store.delete_one(MovieQuery(title=title))
        if not deleted:
            logger.info(f"Delete skipped, no movie titled '{title}'")
            raise InvalidMovieOperationError(f"Movie with title '{title}' does not exist.")
        logger.debug(f"Deleted movie '{title}'")

    async def update(self, movie: Movie) -> None:
        """Replace the whole stored document with `movie`'s fields.

        Records read back from the store carry an id, which lets the title
        itself be changed. Records without one are matched by title.
        """
        if movie.id is not None:
            query = MovieQuery(id=movie.id)
        elif movie.title is not None:
            query = MovieQuery(title=movie.title)
        else:
            logger.warning("Update skipped, movie has neither id nor title")
            return

        matched = await self.store.replace_one(query, movie)
        if not matched:
            logger.warning(f"Update matched no stored movie for {query.model_dump(exclude_none=True)}")
