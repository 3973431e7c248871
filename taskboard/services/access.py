"""Project access resolution.

Every read and every task operation is gated on ``has_access``; project
administration is gated on ``is_owner``. Nothing here is cached: each call
queries the session so a decision always reflects the current rows.
"""

import enum
import logging

from sqlmodel import Session, select

from ..models import Project, ProjectCollaborator

logger = logging.getLogger(__name__)


class AccessLevel(str, enum.Enum):
    OWNER = "owner"
    COLLABORATOR = "collaborator"
    NONE = "none"

    @property
    def has_access(self) -> bool:
        return self is not AccessLevel.NONE


class AccessResolver:
    def __init__(self, session: Session):
        self.session = session

    def resolve(self, project_id: int, user_id: int) -> AccessLevel:
        """Return the subject's relationship to the project.

        A missing project resolves to ``NONE``; telling "not found" apart from
        "forbidden" is the caller's job.
        """
        owner_id = self.session.exec(
            select(Project.owner_id).where(Project.id == project_id)
        ).first()
        if owner_id is None:
            return AccessLevel.NONE
        if owner_id == user_id:
            return AccessLevel.OWNER
        if self.is_collaborator(project_id, user_id):
            return AccessLevel.COLLABORATOR
        return AccessLevel.NONE

    def is_owner(self, project_id: int, user_id: int) -> bool:
        return self.resolve(project_id, user_id) is AccessLevel.OWNER

    def is_collaborator(self, project_id: int, user_id: int) -> bool:
        membership_id = self.session.exec(
            select(ProjectCollaborator.id).where(
                ProjectCollaborator.project_id == project_id,
                ProjectCollaborator.user_id == user_id,
            )
        ).first()
        return membership_id is not None

    def has_access(self, project_id: int, user_id: int) -> bool:
        return self.resolve(project_id, user_id).has_access
