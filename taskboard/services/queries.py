"""Filtered, paginated listings across the owner-or-collaborator boundary.

Visibility is expressed with ``EXISTS`` over the membership table rather than
a join, so a project reachable through several paths still yields one row.
"""

import enum
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from sqlalchemy import case, exists, func, or_
from sqlmodel import Session, select

from ..errors import ValidationError
from ..models import Project, ProjectCollaborator, Task, TaskPriority, TaskStatus

T = TypeVar("T")


class TaskSortField(str, enum.Enum):
    created_at = "created_at"
    updated_at = "updated_at"
    priority = "priority"
    status = "status"


class SortOrder(str, enum.Enum):
    asc = "asc"
    desc = "desc"


# Sort by declared order, not by the stored text.
_PRIORITY_RANK = {TaskPriority.low: 0, TaskPriority.medium: 1, TaskPriority.high: 2}
_STATUS_RANK = {TaskStatus.pending: 0, TaskStatus.in_progress: 1, TaskStatus.completed: 2}


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


@dataclass
class TaskFilters:
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    project_id: Optional[int] = None
    assigned_to: Optional[int] = None
    sort_by: TaskSortField = TaskSortField.created_at
    order: SortOrder = SortOrder.desc


def visible_to(user_id: int):
    """Predicate on ``Project``: the user owns it or holds a membership row."""
    membership = exists().where(
        ProjectCollaborator.project_id == Project.id,
        ProjectCollaborator.user_id == user_id,
    )
    return or_(Project.owner_id == user_id, membership)


def paginate(session: Session, statement, page: int, limit: int) -> Page:
    """Run ``statement`` for one page and count all rows it would match."""
    if page < 1 or limit < 1:
        raise ValidationError("page and limit must be >= 1")
    total = session.exec(
        select(func.count()).select_from(statement.order_by(None).subquery())
    ).one()
    items = session.exec(statement.offset((page - 1) * limit).limit(limit)).all()
    return Page(items=list(items), total=total, page=page, limit=limit)


def list_projects(session: Session, user_id: int, page: int = 1, limit: int = 10) -> Page:
    statement = (
        select(Project)
        .where(visible_to(user_id))
        .order_by(Project.created_at.desc(), Project.id.desc())
    )
    return paginate(session, statement, page, limit)


def _task_sort_column(sort_by: TaskSortField):
    if sort_by is TaskSortField.priority:
        return case(_PRIORITY_RANK, value=Task.priority)
    if sort_by is TaskSortField.status:
        return case(_STATUS_RANK, value=Task.status)
    if sort_by is TaskSortField.updated_at:
        return Task.updated_at
    return Task.created_at


def list_tasks(
    session: Session,
    user_id: int,
    filters: Optional[TaskFilters] = None,
    page: int = 1,
    limit: int = 10,
) -> Page:
    filters = filters or TaskFilters()
    statement = select(Task).join(Project, Task.project_id == Project.id).where(visible_to(user_id))

    if filters.status is not None:
        statement = statement.where(Task.status == filters.status)
    if filters.priority is not None:
        statement = statement.where(Task.priority == filters.priority)
    if filters.project_id is not None:
        statement = statement.where(Task.project_id == filters.project_id)
    if filters.assigned_to is not None:
        statement = statement.where(Task.assigned_to == filters.assigned_to)

    column = _task_sort_column(filters.sort_by)
    if filters.order is SortOrder.asc:
        statement = statement.order_by(column.asc(), Task.id.asc())
    else:
        statement = statement.order_by(column.desc(), Task.id.desc())

    return paginate(session, statement, page, limit)
