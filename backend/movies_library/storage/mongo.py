"""MongoDB movie store backed by a Motor collection."""

import logging
import re
from typing import Any, Sequence

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from movies_library.models import Movie
from movies_library.storage.base import MovieQuery, MovieStore

logger = logging.getLogger(__name__)


def _to_filter(query: MovieQuery) -> dict[str, Any]:
    """Translate a MovieQuery into a MongoDB filter document."""
    if query.id is not None:
        # Ids that are not ObjectIds cannot match anything we inserted
        return {"_id": ObjectId(query.id) if ObjectId.is_valid(query.id) else query.id}
    if query.title is not None:
        return {"title": query.title}
    if query.title_contains is not None:
        return {"title": {"$regex": re.escape(query.title_contains)}}
    return {}


def _to_document(movie: Movie) -> dict[str, Any]:
    document = movie.model_dump(exclude={"id"})
    if movie.id is not None:
        document["_id"] = ObjectId(movie.id) if ObjectId.is_valid(movie.id) else movie.id
    return document


def _from_document(document: dict[str, Any]) -> Movie:
    return Movie.model_validate({**document, "_id": str(document["_id"])})


class MongoMovieStore(MovieStore):
    """MovieStore over a single MongoDB collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def find(self, query: MovieQuery) -> list[Movie]:
        cursor = self.collection.find(_to_filter(query))
        return [_from_document(doc) async for doc in cursor]

    async def insert_one(self, movie: Movie) -> str:
        result = await self.collection.insert_one(_to_document(movie))
        return str(result.inserted_id)

    async def insert_many(self, movies: Sequence[Movie]) -> list[str]:
        if not movies:
            return []
        result = await self.collection.insert_many([_to_document(m) for m in movies])
        return [str(inserted_id) for inserted_id in result.inserted_ids]

    async def replace_one(self, query: MovieQuery, movie: Movie) -> int:
        replacement = movie.model_dump(exclude={"id"})
        result = await self.collection.replace_one(_to_filter(query), replacement)
        return result.matched_count

    async def delete_one(self, query: MovieQuery) -> int:
        result = await self.collection.delete_one(_to_filter(query))
        return result.deleted_count

    async def clear(self) -> None:
        result = await self.collection.delete_many({})
        logger.debug(f"Deleted {result.deleted_count} movies from {self.collection.full_name}")
