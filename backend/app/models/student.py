from datetime import datetime

from pydantic import BaseModel, Field

STUDENT_NAME_MAX_LENGTH = 120


class StudentCreateRequest(BaseModel):
    full_name: str = Field(min_length=1, max_length=STUDENT_NAME_MAX_LENGTH)


class StudentBulkCreateRequest(BaseModel):
    # one name per line, blank lines ignored
    text: str = Field(min_length=1)


class StudentResponse(BaseModel):
    id: str
    class_id: str
    full_name: str
    absent: bool = False
    created_at: datetime


class AttendanceResponse(BaseModel):
    student_id: str
    absent: bool


class AttendanceListResponse(BaseModel):
    class_id: str
    absent_ids: list[str] = Field(default_factory=list)
