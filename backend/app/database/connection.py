from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from app.config import settings

_client: AsyncIOMotorClient | None = None


def get_client() -> AsyncIOMotorClient:
    if _client is None:
        raise RuntimeError("MongoDB client is not initialized")
    return _client


def get_db() -> AsyncIOMotorDatabase:
    return get_client()[settings.mongodb_db_name]


async def connect_to_mongo() -> None:
    global _client
    if _client is not None:
        return

    _client = AsyncIOMotorClient(
        settings.mongodb_url,
        serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
        uuidRepresentation="standard",
    )


async def close_mongo_connection() -> None:
    global _client
    if _client is None:
        return

    _client.close()
    _client = None


async def ensure_mongo_indexes() -> None:
    classes_collection = get_db()["classes"]
    students_collection = get_db()["students"]

    await classes_collection.create_index([("name", ASCENDING)], name="idx_classes_name")
    await students_collection.create_index(
        [("class_id", ASCENDING), ("created_at", ASCENDING)],
        name="idx_students_class_created_at",
    )
