from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from taskboard.schemas.base import APIModel


class TaskCreate(BaseModel):
    title: Optional[str] = None
    status: Optional[str] = None


class TaskUpdate(BaseModel):
    # Partial update: only fields present in the request body are applied
    title: Optional[str] = None
    status: Optional[str] = None


class TaskOut(APIModel):
    id: int
    title: str
    status: str
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class TaskResponse(APIModel):
    success: bool = True
    message: Optional[str] = None
    data: TaskOut


class TaskListResponse(APIModel):
    success: bool = True
    count: int
    data: List[TaskOut]


class TaskStats(APIModel):
    total: int
    todo: int
    in_progress: int
    completed: int


class TaskStatsResponse(APIModel):
    success: bool = True
    data: TaskStats
