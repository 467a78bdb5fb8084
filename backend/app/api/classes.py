import logging

from fastapi import APIRouter, HTTPException, Response, status

from app.database.collections import get_collection
from app.models.classroom import ClassCreateRequest, ClassResponse
from app.models.student import (
    AttendanceListResponse,
    AttendanceResponse,
    StudentBulkCreateRequest,
    StudentCreateRequest,
    StudentResponse,
)
from app.services import class_service
from app.services.group_service import sessions

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class(request: ClassCreateRequest):
    try:
        created = await class_service.create_class(name=request.name)
        return ClassResponse(**class_service.serialize_class(created, student_count=0))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Class creation error: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create class",
        )


@router.get("", response_model=list[ClassResponse])
async def list_classes():
    docs = await class_service.list_classes()
    return [ClassResponse(**class_service.serialize_class(d)) for d in docs]


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    students_collection = get_collection("students")
    student_count = await students_collection.count_documents({"class_id": doc["_id"]})
    return ClassResponse(**class_service.serialize_class(doc, student_count=student_count))


@router.delete("/{class_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_class(class_id: str):
    await class_service.delete_class(class_id=class_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{class_id}/students", response_model=list[StudentResponse])
async def list_students(class_id: str):
    class_doc = await class_service.find_class_or_404(class_id)
    docs = await class_service.list_students(class_id=class_id)
    session = sessions.peek(str(class_doc["_id"]))
    absent_ids = session.absent_ids if session else frozenset()
    return [
        StudentResponse(**class_service.serialize_student(d, absent=str(d["_id"]) in absent_ids))
        for d in docs
    ]


@router.post("/{class_id}/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def add_student(class_id: str, request: StudentCreateRequest):
    created = await class_service.add_student(class_id=class_id, full_name=request.full_name)
    return StudentResponse(**class_service.serialize_student(created))


@router.post(
    "/{class_id}/students/bulk",
    response_model=list[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def bulk_add_students(class_id: str, request: StudentBulkCreateRequest):
    names = class_service.parse_bulk_names(request.text)
    created = await class_service.bulk_add_students(class_id=class_id, names=names)
    return [StudentResponse(**class_service.serialize_student(d)) for d in created]


@router.delete("/{class_id}/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(class_id: str, student_id: str):
    await class_service.delete_student(class_id=class_id, student_id=student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{class_id}/attendance", response_model=AttendanceListResponse)
async def get_attendance(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    session = sessions.peek(str(doc["_id"]))
    absent_ids = sorted(session.absent_ids) if session else []
    return AttendanceListResponse(class_id=str(doc["_id"]), absent_ids=absent_ids)


@router.put("/{class_id}/attendance/{student_id}", response_model=AttendanceResponse)
async def toggle_attendance(class_id: str, student_id: str):
    doc = await class_service.find_class_or_404(class_id)
    student = await class_service.find_student_or_404(doc, student_id)

    student_key = str(student["_id"])
    absent = sessions.get(str(doc["_id"])).toggle_absent(student_key)
    logger.info(f"Attendance toggled: class={doc['_id']}, student={student_key}, absent={absent}")
    return AttendanceResponse(student_id=student_key, absent=absent)
