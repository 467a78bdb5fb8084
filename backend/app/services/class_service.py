from __future__ import annotations

import logging
from datetime import datetime

from bson import ObjectId
from fastapi import HTTPException, status

from app.database.collections import get_collection
from app.models.student import STUDENT_NAME_MAX_LENGTH
from app.services.group_service import sessions

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.utcnow()


def _parse_oid(value: str, *, label: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label} id")
    return ObjectId(value)


def serialize_class(doc: dict, *, student_count: int | None = None) -> dict:
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name") or "",
        "student_count": student_count,
        "created_at": doc.get("created_at"),
    }


def serialize_student(doc: dict, *, absent: bool = False) -> dict:
    return {
        "id": str(doc["_id"]),
        "class_id": str(doc["class_id"]),
        "full_name": doc.get("full_name") or "",
        "absent": absent,
        "created_at": doc.get("created_at"),
    }


async def find_class_or_404(class_id: str) -> dict:
    class_oid = _parse_oid(class_id, label="class")
    classes_collection = get_collection("classes")
    doc = await classes_collection.find_one({"_id": class_oid})
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return doc


async def create_class(*, name: str) -> dict:
    classes_collection = get_collection("classes")
    doc = {"name": name.strip(), "created_at": _now()}
    result = await classes_collection.insert_one(doc)
    doc["_id"] = result.inserted_id
    logger.info(f"Class created: id={result.inserted_id}, name={doc['name']}")
    return doc


async def list_classes() -> list[dict]:
    classes_collection = get_collection("classes")
    return await (
        classes_collection.find({})
        .sort([("name", 1), ("_id", 1)])
        .to_list(length=None)
    )


async def delete_class(*, class_id: str) -> None:
    doc = await find_class_or_404(class_id)
    students_collection = get_collection("students")
    classes_collection = get_collection("classes")

    await students_collection.delete_many({"class_id": doc["_id"]})
    await classes_collection.delete_one({"_id": doc["_id"]})
    sessions.drop(str(doc["_id"]))
    logger.info(f"Class deleted: id={doc['_id']}")


async def list_students(*, class_id: str) -> list[dict]:
    doc = await find_class_or_404(class_id)
    students_collection = get_collection("students")
    return await (
        students_collection.find({"class_id": doc["_id"]})
        .sort([("created_at", 1), ("_id", 1)])
        .to_list(length=None)
    )


async def add_student(*, class_id: str, full_name: str) -> dict:
    created = await bulk_add_students(class_id=class_id, names=[full_name])
    return created[0]


def parse_bulk_names(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


async def bulk_add_students(*, class_id: str, names: list[str]) -> list[dict]:
    cleaned = [n.strip() for n in names if isinstance(n, str) and n.strip()]
    if not cleaned:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No student names given")
    too_long = [n for n in cleaned if len(n) > STUDENT_NAME_MAX_LENGTH]
    if too_long:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Student names must be at most {STUDENT_NAME_MAX_LENGTH} characters",
        )

    doc = await find_class_or_404(class_id)
    students_collection = get_collection("students")

    now = _now()
    student_docs = [
        {"class_id": doc["_id"], "full_name": name, "created_at": now}
        for name in cleaned
    ]
    await students_collection.insert_many(student_docs)
    logger.info(f"Students added: class={doc['_id']}, count={len(student_docs)}")
    return student_docs


async def find_student_or_404(class_doc: dict, student_id: str) -> dict:
    student_oid = _parse_oid(student_id, label="student")
    students_collection = get_collection("students")
    student = await students_collection.find_one({"_id": student_oid, "class_id": class_doc["_id"]})
    if not student:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return student


async def delete_student(*, class_id: str, student_id: str) -> None:
    doc = await find_class_or_404(class_id)
    student = await find_student_or_404(doc, student_id)
    student_oid = student["_id"]
    students_collection = get_collection("students")

    await students_collection.delete_one({"_id": student_oid})
    session = sessions.peek(str(doc["_id"]))
    if session is not None:
        session.forget_student(str(student_oid))
    logger.info(f"Student deleted: class={doc['_id']}, id={student_oid}")
