"""Project aggregate: owner-only administration and collaborator membership.

Every operation on an existing project checks existence first (404), then the
caller's access level (403), then mutates.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..errors import Conflict, Forbidden, NotFound, ValidationError
from ..models import Project, ProjectCollaborator, User
from .access import AccessLevel, AccessResolver
from .patches import ProjectPatch
from .queries import Page, list_projects

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 255


def _check_name(name: Optional[str]) -> str:
    if name is None or not name.strip():
        raise ValidationError(
            "Project name is required",
            errors=[{"field": "name", "message": "Project name is required"}],
        )
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            "Project name is too long",
            errors=[{"field": "name", "message": f"At most {NAME_MAX_LENGTH} characters"}],
        )
    return name


class ProjectService:
    def __init__(self, session: Session, access: Optional[AccessResolver] = None):
        self.session = session
        self.access = access or AccessResolver(session)

    # ---- lookups ----

    def _get_or_404(self, project_id: int) -> Project:
        project = self.session.get(Project, project_id)
        if project is None:
            raise NotFound("Project not found")
        return project

    def _require_owner(self, project: Project, user_id: int, action: str) -> None:
        if self.access.resolve(project.id, user_id) is not AccessLevel.OWNER:
            logger.warning("Denied %s on project=%s for user=%s", action, project.id, user_id)
            raise Forbidden(f"Only project owner can {action}")

    def _require_access(self, project: Project, user_id: int) -> None:
        if not self.access.has_access(project.id, user_id):
            logger.warning("Denied read on project=%s for user=%s", project.id, user_id)
            raise Forbidden("Access denied")

    # ---- reads ----

    def get(self, project_id: int, user_id: int) -> Project:
        project = self._get_or_404(project_id)
        self._require_access(project, user_id)
        return project

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page:
        return list_projects(self.session, user_id, page=page, limit=limit)

    def list_collaborators(self, project_id: int, user_id: int) -> List[ProjectCollaborator]:
        project = self._get_or_404(project_id)
        self._require_access(project, user_id)
        statement = (
            select(ProjectCollaborator)
            .where(ProjectCollaborator.project_id == project_id)
            .order_by(ProjectCollaborator.added_at.desc(), ProjectCollaborator.id.desc())
        )
        return list(self.session.exec(statement).all())

    # ---- mutations ----

    def create(self, owner_id: int, name: str, description: Optional[str] = None) -> Project:
        project = Project(name=_check_name(name), description=description, owner_id=owner_id)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        logger.info("Created project id=%s owner=%s", project.id, owner_id)
        return project

    def update(self, project_id: int, user_id: int, patch: ProjectPatch) -> Project:
        project = self._get_or_404(project_id)
        self._require_owner(project, user_id, "update the project")

        changes = patch.changes()
        if "name" in changes:
            changes["name"] = _check_name(changes["name"])
        if not changes:
            return project

        for field, value in changes.items():
            setattr(project, field, value)
        project.updated_at = datetime.now(timezone.utc)

        self.session.commit()
        self.session.refresh(project)
        logger.info("Updated project id=%s fields=%s", project.id, sorted(changes))
        return project

    def delete(self, project_id: int, user_id: int) -> None:
        project = self._get_or_404(project_id)
        self._require_owner(project, user_id, "delete the project")

        # Memberships and tasks go with it (ORM cascade plus ON DELETE CASCADE).
        self.session.delete(project)
        self.session.commit()
        logger.info("Deleted project id=%s", project_id)

    def add_collaborator(
        self, project_id: int, user_id: int, collaborator_id: int
    ) -> ProjectCollaborator:
        project = self._get_or_404(project_id)
        self._require_owner(project, user_id, "add collaborators")

        if self.session.get(User, collaborator_id) is None:
            raise NotFound("User not found")
        if collaborator_id == project.owner_id:
            raise ValidationError("Project owner is already a member")
        if self.access.is_collaborator(project_id, collaborator_id):
            raise Conflict("User is already a collaborator")

        membership = ProjectCollaborator(project_id=project_id, user_id=collaborator_id)
        self.session.add(membership)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent add of the same user.
            self.session.rollback()
            raise Conflict("User is already a collaborator")
        self.session.refresh(membership)
        logger.info("Added collaborator user=%s to project=%s", collaborator_id, project_id)
        return membership

    def remove_collaborator(self, project_id: int, user_id: int, collaborator_id: int) -> None:
        project = self._get_or_404(project_id)
        self._require_owner(project, user_id, "remove collaborators")

        membership = self.session.exec(
            select(ProjectCollaborator).where(
                ProjectCollaborator.project_id == project_id,
                ProjectCollaborator.user_id == collaborator_id,
            )
        ).first()
        if membership is None:
            raise NotFound("Collaborator not found")

        self.session.delete(membership)
        self.session.commit()
        logger.info("Removed collaborator user=%s from project=%s", collaborator_id, project_id)
