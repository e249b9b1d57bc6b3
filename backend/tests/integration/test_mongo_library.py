"""
Integration Test: MoviesLibraryController over MongoDB

Runs the controller end to end against a real MongoDB server in a database
created for this module. Skipped when MongoDB is not reachable.
"""

import asyncio

import pytest

from movies_library.exceptions import (
    InvalidMovieOperationError,
    MovieArgumentError,
    MovieNotFoundError,
    MovieValidationError,
)
from movies_library.storage import MovieQuery


def test_add_valid_movie_persists_all_fields(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            await controller.add(make_movie())

            stored = await store.find(MovieQuery(title="Test Movie"))
            assert len(stored) == 1
            result = stored[0]
            assert result.title == "Test Movie"
            assert result.director == "Test Director"
            assert result.year_released == 2022
            assert result.genre == "Action"
            assert result.duration == 120
            assert result.rating == 7.5

    asyncio.run(run())


def test_add_invalid_movie_writes_nothing(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            with pytest.raises(MovieValidationError, match="Movie is not valid."):
                await controller.add(make_movie(title=None))

            assert await store.find(MovieQuery()) == []

    asyncio.run(run())


def test_delete_existing_movie(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            await controller.add(make_movie())

            await controller.delete("Test Movie")

            assert await store.find(MovieQuery(title="Test Movie")) == []

    asyncio.run(run())


@pytest.mark.parametrize("title", [None, ""])
def test_delete_blank_title_raises(open_library, title) -> None:
    async def run() -> None:
        async with open_library() as (controller, _):
            with pytest.raises(MovieArgumentError):
                await controller.delete(title)

    asyncio.run(run())


def test_delete_missing_title_raises(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            await controller.add(make_movie())

            with pytest.raises(InvalidMovieOperationError):
                await controller.delete("NotExistingMovie")

            assert len(await store.find(MovieQuery())) == 1

    asyncio.run(run())


def test_get_all_empty(open_library) -> None:
    async def run() -> None:
        async with open_library() as (controller, _):
            assert await controller.get_all() == []

    asyncio.run(run())


def test_get_all_returns_three_movies(open_library, make_movie) -> None:
    movies = [
        make_movie(duration=86),
        make_movie(title="Another Life", director="Teddy", year_released=2023, genre="Drama", rating=6.5),
        make_movie(title="ScaryMovie", director="Nical Cage", year_released=1999, genre="Horror", duration=101, rating=9.8),
    ]

    async def run() -> None:
        async with open_library() as (controller, _):
            for movie in movies:
                await controller.add(movie)

            result = await controller.get_all()
            assert len(result) == 3
            assert {m.title for m in result} == {"Test Movie", "Another Life", "ScaryMovie"}
            by_title = {m.title: m.model_dump(exclude={"id"}) for m in result}
            for movie in movies:
                assert by_title[movie.title] == movie.model_dump(exclude={"id"})

    asyncio.run(run())


def test_get_by_title(open_library, make_movie) -> None:
    movie = make_movie(title="Titanic", director="James Cameron", year_released=1977, genre="DramaRomance", duration=86, rating=7.9)

    async def run() -> None:
        async with open_library() as (controller, _):
            await controller.add(movie)

            result = await controller.get_by_title("Titanic")
            assert result is not None
            assert result.model_dump(exclude={"id"}) == movie.model_dump(exclude={"id"})
            assert await controller.get_by_title("Fake Title") is None

    asyncio.run(run())


def test_search_by_title_fragment(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            await store.insert_many([
                make_movie(title="Titanic", year_released=1977),
                make_movie(title="Another Life", year_released=2023),
            ])

            result = await controller.search_by_title_fragment("Life")
            assert len(result) == 1
            assert result[0].title == "Another Life"
            assert result[0].year_released == 2023

            with pytest.raises(MovieNotFoundError):
                await controller.search_by_title_fragment("Does not exist")

    asyncio.run(run())


def test_update_renames_movie(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            await store.insert_many([
                make_movie(title="Titanic", director="James Cameron"),
                make_movie(title="Another Life", director="Teddy"),
            ])

            movie_to_update = await controller.get_by_title("Titanic")
            movie_to_update.title = "Titanic2"
            await controller.update(movie_to_update)

            result = await controller.get_by_title("Titanic2")
            assert result is not None
            assert result.director == "James Cameron"
            assert await controller.get_by_title("Titanic") is None

    asyncio.run(run())


def test_update_invalid_movie_raises(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, _):
            with pytest.raises(MovieValidationError):
                await controller.update(make_movie(title="Invalid Life", director=None))

    asyncio.run(run())


def test_add_same_title_twice_is_not_deduplicated(open_library, make_movie) -> None:
    async def run() -> None:
        async with open_library() as (controller, store):
            movie = make_movie()
            await controller.add(movie)
            await controller.add(movie)

            assert len(await store.find(MovieQuery(title="Test Movie"))) == 2

    asyncio.run(run())
