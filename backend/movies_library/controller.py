"""Public movie operations: validation in front of the repository."""

import logging

from movies_library.exceptions import MovieArgumentError, MovieValidationError
from movies_library.models import Movie, movie_validation_errors
from movies_library.repository import MoviesRepository

logger = logging.getLogger(__name__)


class MoviesLibraryController:
    """Validates input, then delegates to MoviesRepository.

    Every operation is a single store round trip. Invalid input is rejected
    before the store is touched.
    """

    def __init__(self, repository: MoviesRepository):
        self.repository = repository

    def _ensure_valid(self, movie: Movie) -> None:
        errors = movie_validation_errors(movie)
        if errors:
            logger.debug(f"Rejected movie '{movie.title}': {'; '.join(errors)}")
            raise MovieValidationError(errors=errors)

    async def add(self, movie: Movie) -> None:
        """Add a movie.

        Raises:
            MovieValidationError: The movie fails a field constraint.
        """
        self._ensure_valid(movie)
        await self.repository.add(movie)

    async def delete(self, title: str | None) -> None:
        """Delete the movie with exactly this title.

        Raises:
            MovieArgumentError: Title is None, empty or whitespace.
            InvalidMovieOperationError: No movie has this title.
        """
        if title is None or not title.strip():
            raise MovieArgumentError("Title cannot be null or empty.")
        await self.repository.delete(title)

    async def get_all(self) -> list[Movie]:
        return await self.repository.get_all()

    async def get_by_title(self, title: str | None) -> Movie | None:
        """Return the first movie with this exact title, or None."""
        return await self.repository.get_by_title(title)

    async def search_by_title_fragment(self, fragment: str | None) -> list[Movie]:
        """Return movies whose title contains `fragment` (case-sensitive).

        Raises:
            MovieNotFoundError: No title contains the fragment.
        """
        return await self.repository.search_by_fragment(fragment)

    async def update(self, movie: Movie) -> None:
        """Replace a stored movie with `movie`.

        Raises:
            MovieValidationError: The movie fails a field constraint.
        """
        self._ensure_valid(movie)
        await self.repository.update(movie)
