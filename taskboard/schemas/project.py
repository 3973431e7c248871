from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from ..models import Project as ProjectModel, ProjectCollaborator


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    """Partial update; only keys present in the body are applied."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("Project name may not be null")
        return value


class CollaboratorAdd(BaseModel):
    user_id: int = Field(gt=0)


class Project(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    owner_id: int
    owner_name: str
    owner_email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, project: ProjectModel) -> "Project":
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            owner_id=project.owner_id,
            owner_name=project.owner.display_name,
            owner_email=project.owner.email,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class Collaborator(BaseModel):
    id: int
    email: str
    name: str
    added_at: datetime

    @classmethod
    def from_model(cls, membership: ProjectCollaborator) -> "Collaborator":
        return cls(
            id=membership.user_id,
            email=membership.user.email,
            name=membership.user.display_name,
            added_at=membership.added_at,
        )
