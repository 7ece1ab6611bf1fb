# taskboard/routers/tasks.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.schemas import ErrorResponse, MessageResponse
from taskboard.schemas.task import (
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)
from taskboard.services.task_service import TaskService
from taskboard.models.user import User
from taskboard.utils.auth import get_current_user
from taskboard.utils.errors import InternalError

logger = logging.getLogger(__name__)

# Every route below sits behind the bearer token gate
router = APIRouter(
    prefix="/api/tasks",
    tags=["Tasks"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def _storage_failure(action: str, error: SQLAlchemyError) -> InternalError:
    logger.exception(f"Error {action}")
    return InternalError(f"Server error {action}", detail=str(error))


@router.get("", response_model=TaskListResponse)
def get_tasks(
    status: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tasks = TaskService.list_tasks(db, current_user.id, status=status, search=search)
    except SQLAlchemyError as e:
        raise _storage_failure("fetching tasks", e)
    return {"success": True, "count": len(tasks), "data": tasks}


# Must be declared before /{task_id}
@router.get("/stats", response_model=TaskStatsResponse)
def get_task_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        stats = TaskService.get_stats(db, current_user.id)
    except SQLAlchemyError as e:
        raise _storage_failure("fetching statistics", e)
    return {"success": True, "data": stats}


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = TaskService.get_task(db, current_user.id, task_id)
    except SQLAlchemyError as e:
        raise _storage_failure("fetching task", e)
    return {"success": True, "data": task}


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_task = TaskService.create_task(db, current_user.id, title=task.title, status=task.status)
    except SQLAlchemyError as e:
        raise _storage_failure("creating task", e)
    return {"success": True, "message": "Task created successfully", "data": db_task}


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_task(
    task_id: int,
    task_update: Optional[TaskUpdate] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # Only fields present in the request body are applied; no body means no changes
    update_data = task_update.model_dump(exclude_unset=True) if task_update is not None else {}
    try:
        task = TaskService.update_task(db, current_user.id, task_id, update_data)
    except SQLAlchemyError as e:
        raise _storage_failure("updating task", e)
    return {"success": True, "message": "Task updated successfully", "data": task}


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        TaskService.delete_task(db, current_user.id, task_id)
    except SQLAlchemyError as e:
        raise _storage_failure("deleting task", e)
    return {"success": True, "message": "Task deleted successfully"}
