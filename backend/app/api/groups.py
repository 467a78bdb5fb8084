from typing import Optional

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from app.models.group import GroupGenerateRequest, GroupListResponse, PickResponse
from app.services import class_service
from app.services.group_service import (
    current_groups_for_class,
    generate_groups_for_class,
    groups_text_for_class,
    pick_student_for_class,
    regenerate_groups_for_class,
    serialize_assignment,
    sessions,
)

router = APIRouter()


@router.post("/{class_id}/groups", response_model=GroupListResponse, status_code=status.HTTP_201_CREATED)
async def create_groups(class_id: str, request: Optional[GroupGenerateRequest] = None):
    request = request or GroupGenerateRequest()
    doc = await class_service.find_class_or_404(class_id)
    students = await class_service.list_students(class_id=class_id)
    session = generate_groups_for_class(
        class_id=str(doc["_id"]),
        students=students,
        group_size=request.group_size,
        strategy=request.strategy,
    )
    return GroupListResponse(**serialize_assignment(session))


@router.post(
    "/{class_id}/groups/regenerate",
    response_model=GroupListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def regenerate_groups(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    students = await class_service.list_students(class_id=class_id)
    session = regenerate_groups_for_class(class_id=str(doc["_id"]), students=students)
    return GroupListResponse(**serialize_assignment(session))


@router.get("/{class_id}/groups", response_model=GroupListResponse)
async def get_groups(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    return GroupListResponse(**current_groups_for_class(class_id=str(doc["_id"])))


@router.get("/{class_id}/groups/text", response_class=PlainTextResponse)
async def get_groups_text(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    return groups_text_for_class(class_id=str(doc["_id"]))


@router.delete("/{class_id}/groups", status_code=status.HTTP_204_NO_CONTENT)
async def clear_groups(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    session = sessions.peek(str(doc["_id"]))
    if session is not None:
        session.clear_groups()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{class_id}/pick", response_model=PickResponse)
async def pick_student(class_id: str):
    doc = await class_service.find_class_or_404(class_id)
    result = pick_student_for_class(class_id=str(doc["_id"]))
    return PickResponse(name=result.name, remaining=result.remaining)
