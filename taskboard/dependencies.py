"""
FastAPI providers for the aggregates.

Each request gets fresh service objects wired to that request's session, so
tests can swap the session (or any provider) through
``app.dependency_overrides``.
"""

from fastapi import Depends, Query
from sqlmodel import Session

from .database import get_db
from .services import AccessResolver, ProjectService, TaskService, UserStore


def get_access_resolver(db: Session = Depends(get_db)) -> AccessResolver:
    return AccessResolver(db)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_project_service(
    db: Session = Depends(get_db),
    access: AccessResolver = Depends(get_access_resolver),
) -> ProjectService:
    return ProjectService(db, access)


def get_task_service(
    db: Session = Depends(get_db),
    access: AccessResolver = Depends(get_access_resolver),
) -> TaskService:
    return TaskService(db, access)


class PageParams:
    """``page``/``limit`` query parameters shared by the paginated listings."""

    def __init__(
        self,
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        self.page = page
        self.limit = limit
