"""Storage layer for Movies Library - document store access.

This package provides:
- MovieStore interface and MovieQuery predicate
- InMemoryMovieStore for tests and offline use
- MongoMovieStore over a Motor collection, plus connection helpers
"""

from .base import MovieQuery, MovieStore
from .connection import (
    check_connection,
    create_client,
    drop_database,
    generate_database_name,
    get_collection,
    mongo_movie_store,
    sanitize_mongodb_url,
)
from .memory import InMemoryMovieStore
from .mongo import MongoMovieStore

__all__ = [
    # Interface
    "MovieQuery",
    "MovieStore",
    # Implementations
    "InMemoryMovieStore",
    "MongoMovieStore",
    # Connection management
    "check_connection",
    "create_client",
    "drop_database",
    "generate_database_name",
    "get_collection",
    "mongo_movie_store",
    "sanitize_mongodb_url",
]
