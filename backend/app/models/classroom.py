from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ClassCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)


class ClassResponse(BaseModel):
    id: str
    name: str
    student_count: Optional[int] = None
    created_at: datetime
