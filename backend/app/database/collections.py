from motor.motor_asyncio import AsyncIOMotorCollection

from app.database.connection import get_db

CLASSES = "classes"
STUDENTS = "students"

_KNOWN_COLLECTIONS = {CLASSES, STUDENTS}


def get_collection(name: str) -> AsyncIOMotorCollection:
    if name not in _KNOWN_COLLECTIONS:
        raise KeyError(f"Unknown collection: {name}")
    return get_db()[name]
