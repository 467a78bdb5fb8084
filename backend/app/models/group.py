from typing import Optional

from pydantic import BaseModel, Field

from app.config import settings
from app.grouping import GroupingStrategy


class GroupGenerateRequest(BaseModel):
    group_size: int = Field(default=settings.default_group_size, ge=1, le=settings.max_group_size)
    strategy: GroupingStrategy = GroupingStrategy(settings.default_grouping_strategy)


class GroupResponse(BaseModel):
    name: str
    members: list[str] = Field(default_factory=list)


class GroupListResponse(BaseModel):
    class_id: str
    group_size: int
    strategy: GroupingStrategy
    remaining_count: int = 0
    member_count: int = 0
    groups: list[GroupResponse] = Field(default_factory=list)
    picked: Optional[str] = None


class PickResponse(BaseModel):
    name: str
    remaining: int
