from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
from typing import Optional
import enum


# Member names equal their values so the stored text is the API text.
class TaskStatus(str, enum.Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Task(SQLModel, table=True):
    """Work item inside a project.

    ``assigned_to`` is checked against project access when it is set and is
    not re-verified if the assignee later loses access.
    """
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    status: TaskStatus = Field(default=TaskStatus.pending, index=True)
    priority: TaskPriority = Field(default=TaskPriority.medium, index=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    assigned_to: Optional[int] = Field(
        default=None, foreign_key="users.id", index=True, ondelete="SET NULL"
    )
    created_by: int = Field(foreign_key="users.id", ondelete="CASCADE")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    project: Optional["Project"] = Relationship(back_populates="tasks")
    assignee: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Task.assigned_to]"}
    )
    creator: Optional["User"] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Task.created_by]"}
    )
