from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from ..models import Task as TaskModel, TaskPriority, TaskStatus


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium


class TaskCreate(TaskBase):
    """Schema for creating new tasks."""
    project_id: int = Field(gt=0)
    assigned_to: Optional[int] = Field(default=None, gt=0)


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks.

    ``assigned_to: null`` unassigns; the other fields may be omitted but not
    set to null.
    """
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_to: Optional[int] = Field(default=None, gt=0)

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} may not be null")
        return value


class Task(TaskBase):
    """Task as returned by the API, with project and user details joined in."""
    id: int
    project_id: int
    project_name: str
    assigned_to: Optional[int] = None
    assigned_to_name: Optional[str] = None
    assigned_to_email: Optional[str] = None
    created_by: int
    created_by_name: str
    created_by_email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, task: TaskModel) -> "Task":
        assignee = task.assignee
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            project_id=task.project_id,
            project_name=task.project.name,
            assigned_to=task.assigned_to,
            assigned_to_name=assignee.display_name if assignee else None,
            assigned_to_email=assignee.email if assignee else None,
            created_by=task.created_by,
            created_by_name=task.creator.display_name,
            created_by_email=task.creator.email,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
