"""Movies Library CLI entry point."""

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from dotenv import load_dotenv
from pydantic import ValidationError
from pymongo.errors import PyMongoError

env_file = Path(__file__).parent.parent / ".env"
load_dotenv(env_file)

from movies_library import __version__
from movies_library.config import get_settings
from movies_library.controller import MoviesLibraryController
from movies_library.exceptions import MoviesLibraryError
from movies_library.models import Movie
from movies_library.repository import MoviesRepository
from movies_library.storage import (
    check_connection,
    create_client,
    mongo_movie_store,
    sanitize_mongodb_url,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


def _init_logfire() -> None:
    """Apply the configured log level and initialize Logfire, without failing commands."""
    try:
        from movies_library.observability import initialize_logfire

        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level)
        initialize_logfire(settings)
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


@asynccontextmanager
async def _controller() -> AsyncIterator[MoviesLibraryController]:
    async with mongo_movie_store(get_settings()) as store:
        yield MoviesLibraryController(MoviesRepository(store))


def _print_movie(movie: Movie) -> None:
    print(
        f"  {movie.title} ({movie.year_released}) - {movie.director} | "
        f"{movie.genre} | {movie.duration} min | {movie.rating}/10"
    )


def _run(command: str, coro) -> int:
    """Run a command coroutine, mapping library errors to exit code 1."""
    _init_logfire()
    try:
        asyncio.run(coro)
        return 0
    except MoviesLibraryError as e:
        print(f"\n❌ {e.message} ({e.kind.value})\n")
        return 1
    except Exception as e:
        logger.error(f"{command} failed: {e}", exc_info=True)
        print(f"\n❌ {command} failed: {e}\n")
        return 1


def _print_config_errors(e: ValidationError) -> None:
    print("\n❌ Configuration Error:\n")
    for error in e.errors():
        print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
    print()


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    try:
        settings = get_settings()

        print("\n=== Movies Library Configuration ===\n")
        print(f"Config File: {settings.config_path}")
        print(f"Log Level: {settings.log_level}\n")

        print("MongoDB:")
        print(f"  URL: {sanitize_mongodb_url(settings.mongodb.url)}")
        print(f"  Database: {settings.mongodb.database}")
        print(f"  Collection: {settings.mongodb.collection}")
        print(f"  Server Selection Timeout: {settings.mongodb.server_selection_timeout_ms}ms")
        print(f"  Test Database Prefix: {settings.mongodb.test_database_prefix}\n")

        print(f"Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")
        return 0

    except ValidationError as e:
        _print_config_errors(e)
        return 1


def cmd_ping(args: argparse.Namespace) -> int:
    """Check MongoDB connectivity."""
    _init_logfire()

    async def run() -> bool:
        client = create_client(get_settings())
        try:
            return await check_connection(client)
        finally:
            client.close()

    try:
        reachable = asyncio.run(run())
    except ValidationError as e:
        _print_config_errors(e)
        return 1
    except PyMongoError as e:
        print(f"\n❌ Invalid MongoDB connection settings: {e}\n")
        return 1

    if reachable:
        print("\n✓ MongoDB connection successful\n")
        return 0
    print("\n❌ MongoDB is not reachable\n")
    return 1


def cmd_list(args: argparse.Namespace) -> int:
    """List every movie."""

    async def run() -> None:
        async with _controller() as controller:
            movies = await controller.get_all()
        print(f"\nMovies: {len(movies)}")
        for movie in movies:
            _print_movie(movie)
        print()

    return _run("list", run())


def cmd_get(args: argparse.Namespace) -> int:
    """Show one movie by exact title."""

    async def run() -> None:
        async with _controller() as controller:
            movie = await controller.get_by_title(args.title)
        if movie is None:
            print(f"\nNo movie titled '{args.title}'\n")
            return
        print()
        _print_movie(movie)
        print()

    return _run("get", run())


def cmd_search(args: argparse.Namespace) -> int:
    """Search movies by title fragment."""

    async def run() -> None:
        async with _controller() as controller:
            movies = await controller.search_by_title_fragment(args.fragment)
        print(f"\nMatches for '{args.fragment}': {len(movies)}")
        for movie in movies:
            _print_movie(movie)
        print()

    return _run("search", run())


def cmd_add(args: argparse.Namespace) -> int:
    """Add a movie."""
    movie = Movie(
        title=args.title,
        director=args.director,
        year_released=args.year,
        genre=args.genre,
        duration=args.duration,
        rating=args.rating,
    )

    async def run() -> None:
        async with _controller() as controller:
            await controller.add(movie)
        print(f"\n✓ Added '{movie.title}'\n")

    return _run("add", run())


def cmd_delete(args: argparse.Namespace) -> int:
    """Delete a movie by exact title."""

    async def run() -> None:
        async with _controller() as controller:
            await controller.delete(args.title)
        print(f"\n✓ Deleted '{args.title}'\n")

    return _run("delete", run())


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Movies Library: movie catalog backed by MongoDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Movies Library {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_config = subparsers.add_parser("config", help="Display merged configuration")
    parser_config.set_defaults(func=cmd_config)

    parser_ping = subparsers.add_parser("ping", help="Check MongoDB connectivity")
    parser_ping.set_defaults(func=cmd_ping)

    parser_list = subparsers.add_parser("list", help="List all movies")
    parser_list.set_defaults(func=cmd_list)

    parser_get = subparsers.add_parser("get", help="Show a movie by exact title")
    parser_get.add_argument("title", help="Movie title")
    parser_get.set_defaults(func=cmd_get)

    parser_search = subparsers.add_parser("search", help="Search movies by title fragment")
    parser_search.add_argument("fragment", help="Case-sensitive title fragment")
    parser_search.set_defaults(func=cmd_search)

    parser_add = subparsers.add_parser("add", help="Add a movie")
    parser_add.add_argument("--title", required=True)
    parser_add.add_argument("--director", required=True)
    parser_add.add_argument("--year", type=int, required=True, help="Year released")
    parser_add.add_argument("--genre", required=True)
    parser_add.add_argument("--duration", type=int, required=True, help="Duration in minutes")
    parser_add.add_argument("--rating", type=float, required=True, help="Rating from 0 to 10")
    parser_add.set_defaults(func=cmd_add)

    parser_delete = subparsers.add_parser("delete", help="Delete a movie by exact title")
    parser_delete.add_argument("title", help="Movie title")
    parser_delete.set_defaults(func=cmd_delete)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
