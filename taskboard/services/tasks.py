"""Task aggregate.

Tasks inherit access from their project: any owner or collaborator may read,
create, update and delete them. An assignee must have access to the project
at the moment of assignment.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlmodel import Session, select

from ..errors import Forbidden, NotFound, ValidationError
from ..models import Project, Task, TaskPriority, TaskStatus
from .access import AccessResolver
from .patches import TaskPatch
from .queries import Page, TaskFilters, list_tasks

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 255


def _check_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError(
            "Task title is required",
            errors=[{"field": "title", "message": "Task title is required"}],
        )
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            "Task title is too long",
            errors=[{"field": "title", "message": f"At most {TITLE_MAX_LENGTH} characters"}],
        )
    return title


class TaskService:
    def __init__(self, session: Session, access: Optional[AccessResolver] = None):
        self.session = session
        self.access = access or AccessResolver(session)

    def _get_project_or_404(self, project_id: int) -> Project:
        project = self.session.get(Project, project_id)
        if project is None:
            raise NotFound("Project not found")
        return project

    def _get_task_or_404(self, task_id: int) -> Task:
        task = self.session.get(Task, task_id)
        if task is None:
            raise NotFound("Task not found")
        return task

    def _require_access(self, project_id: int, user_id: int, message: str = "Access denied") -> None:
        if not self.access.has_access(project_id, user_id):
            logger.warning("Denied task access on project=%s for user=%s", project_id, user_id)
            raise Forbidden(message)

    def _check_assignee(self, project_id: int, assignee_id: Optional[int]) -> None:
        if assignee_id is None:
            return
        if not self.access.has_access(project_id, assignee_id):
            raise ValidationError(
                "Cannot assign task to user who is not a project member",
                errors=[{"field": "assigned_to", "message": "User is not a project member"}],
            )

    # ---- reads ----

    def get(self, task_id: int, user_id: int) -> Task:
        task = self._get_task_or_404(task_id)
        self._require_access(task.project_id, user_id)
        return task

    def list_by_project(self, project_id: int, user_id: int) -> List[Task]:
        self._get_project_or_404(project_id)
        self._require_access(project_id, user_id)
        statement = (
            select(Task)
            .where(Task.project_id == project_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        return list(self.session.exec(statement).all())

    def list_for_user(
        self,
        user_id: int,
        filters: Optional[TaskFilters] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page:
        return list_tasks(self.session, user_id, filters, page=page, limit=limit)

    # ---- mutations ----

    def create(
        self,
        user_id: int,
        title: str,
        project_id: int,
        description: Optional[str] = None,
        status: TaskStatus = TaskStatus.pending,
        priority: TaskPriority = TaskPriority.medium,
        assigned_to: Optional[int] = None,
    ) -> Task:
        title = _check_title(title)
        self._get_project_or_404(project_id)
        self._require_access(project_id, user_id, "You do not have access to this project")
        self._check_assignee(project_id, assigned_to)

        task = Task(
            title=title,
            description=description,
            status=status,
            priority=priority,
            project_id=project_id,
            assigned_to=assigned_to,
            created_by=user_id,
        )
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        logger.info("Created task id=%s project=%s by user=%s", task.id, project_id, user_id)
        return task

    def update(self, task_id: int, user_id: int, patch: TaskPatch) -> Task:
        task = self._get_task_or_404(task_id)
        self._require_access(task.project_id, user_id)

        changes = patch.changes()
        if "title" in changes:
            changes["title"] = _check_title(changes["title"])
        for field in ("status", "priority"):
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} may not be null")
        if "assigned_to" in changes:
            self._check_assignee(task.project_id, changes["assigned_to"])
        if not changes:
            return task

        for field, value in changes.items():
            setattr(task, field, value)
        task.updated_at = datetime.now(timezone.utc)

        self.session.commit()
        self.session.refresh(task)
        logger.info("Updated task id=%s fields=%s", task.id, sorted(changes))
        return task

    def delete(self, task_id: int, user_id: int) -> None:
        task = self._get_task_or_404(task_id)
        self._require_access(task.project_id, user_id)

        self.session.delete(task)
        self.session.commit()
        logger.info("Deleted task id=%s", task_id)
