# taskboard/services/task_service.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from taskboard.models.task import Task, TaskStatus
from taskboard.utils.errors import NotFound, ValidationError

logger = logging.getLogger(__name__)

INVALID_STATUS_MESSAGE = "Invalid status. Must be: Todo, In Progress, or Completed"
UPDATABLE_FIELDS = ("title", "status")


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _check_status(status: Any) -> None:
    if status not in TaskStatus.values():
        raise ValidationError(INVALID_STATUS_MESSAGE)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


class TaskService:
    """Task CRUD scoped to a single owner.

    Every lookup filters on id and owner in the same query, so a task that
    belongs to somebody else is reported exactly like a missing one.
    """

    @staticmethod
    def _owned(db: Session, owner_id: int) -> Query:
        return db.query(Task).filter(Task.user_id == owner_id)

    @staticmethod
    def list_tasks(
        db: Session,
        owner_id: int,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Task]:
        query = TaskService._owned(db, owner_id)
        if status:
            query = query.filter(Task.status == status)
        if search:
            query = query.filter(Task.title.ilike(f"%{_escape_like(search)}%", escape="\\"))
        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    @staticmethod
    def get_task(db: Session, owner_id: int, task_id: int) -> Task:
        task = TaskService._owned(db, owner_id).filter(Task.id == task_id).first()
        if not task:
            raise NotFound("Task not found")
        return task

    @staticmethod
    def create_task(
        db: Session,
        owner_id: int,
        title: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("Title is required")
        if status is not None:
            _check_status(status)

        task = Task(
            title=title,
            status=status or TaskStatus.TODO.value,
            user_id=owner_id,
        )
        db.add(task)
        _commit(db)
        db.refresh(task)

        logger.info(f"User {owner_id} created task {task.id}")
        return task

    @staticmethod
    def update_task(db: Session, owner_id: int, task_id: int, changes: Dict[str, Any]) -> Task:
        """Apply only the supplied fields; an empty title is a value, not an omission"""
        task = TaskService.get_task(db, owner_id, task_id)

        update_data = {key: value for key, value in changes.items() if key in UPDATABLE_FIELDS}
        if "status" in update_data:
            _check_status(update_data["status"])
        if "title" in update_data and not isinstance(update_data["title"], str):
            raise ValidationError("Title must be a string")

        if not update_data:
            return task

        for key, value in update_data.items():
            setattr(task, key, value)
        _commit(db)
        db.refresh(task)

        logger.info(f"User {owner_id} updated task {task.id}: {sorted(update_data)}")
        return task

    @staticmethod
    def delete_task(db: Session, owner_id: int, task_id: int) -> None:
        task = TaskService.get_task(db, owner_id, task_id)
        db.delete(task)
        _commit(db)
        logger.info(f"User {owner_id} deleted task {task_id}")

    @staticmethod
    def get_stats(db: Session, owner_id: int) -> Dict[str, int]:
        """Per-status counts, recomputed from the owner's tasks on every call"""
        rows = (
            db.query(Task.status, func.count(Task.id))
            .filter(Task.user_id == owner_id)
            .group_by(Task.status)
            .all()
        )
        counts = {status: count for status, count in rows}
        return {
            "total": sum(counts.values()),
            "todo": counts.get(TaskStatus.TODO.value, 0),
            "in_progress": counts.get(TaskStatus.IN_PROGRESS.value, 0),
            "completed": counts.get(TaskStatus.COMPLETED.value, 0),
        }
