"""
MongoDB connection management via Motor (async driver).

This module provides:
- Client creation from settings
- Collection lookup, optionally in a per-run database
- Health check and database drop utilities
- URL sanitizing for safe logging
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from movies_library.config import Settings
from movies_library.storage.mongo import MongoMovieStore

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncIOMotorClient:
    """
    Create a Motor client for the configured MongoDB server.
    """
    logger.info(f"Connecting to MongoDB at {sanitize_mongodb_url(settings.mongodb.url)}")
    return AsyncIOMotorClient(
        settings.mongodb.url,
        serverSelectionTimeoutMS=settings.mongodb.server_selection_timeout_ms,
    )


def get_collection(
    client: AsyncIOMotorClient,
    settings: Settings,
    database_name: Optional[str] = None,
) -> AsyncIOMotorCollection:
    """
    Get the movies collection, from `database_name` if given.
    """
    database = client[database_name or settings.mongodb.database]
    return database[settings.mongodb.collection]


async def check_connection(client: AsyncIOMotorClient) -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    try:
        await client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


def generate_database_name(prefix: str) -> str:
    """
    Unique database name so concurrent test runs never share data.
    """
    return f"{prefix}_{uuid.uuid4()}"


async def drop_database(client: AsyncIOMotorClient, name: str) -> None:
    """
    Drop a database and everything in it.
    """
    await client.drop_database(name)
    logger.info(f"Dropped database {name}")


@asynccontextmanager
async def mongo_movie_store(
    settings: Settings,
    database_name: Optional[str] = None,
) -> AsyncIterator[MongoMovieStore]:
    """
    Yield a MongoMovieStore and close its client on exit.

    Usage:
        async with mongo_movie_store(settings) as store:
            movies = await store.find(MovieQuery())
    """
    client = create_client(settings)
    try:
        yield MongoMovieStore(get_collection(client, settings, database_name))
    finally:
        client.close()


def sanitize_mongodb_url(url: str) -> str:
    """
    Hide password in MongoDB URL for safe logging.
    """
    if "@" not in url or "://" not in url:
        return url

    protocol, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" in credentials:
        username = credentials.split(":", 1)[0]
        return f"{protocol}://{username}:***@{host}"
    return url
