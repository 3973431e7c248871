from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import PageParams, get_project_service
from ..models import User
from ..schemas.common import ApiResponse, PaginatedResponse, paginated
from ..schemas.project import (
    Collaborator,
    CollaboratorAdd,
    Project as ProjectSchema,
    ProjectCreate,
    ProjectUpdate,
)
from ..services import ProjectPatch, ProjectService
from .auth import get_current_user

router = APIRouter()


@router.get("", response_model=PaginatedResponse[ProjectSchema])
def list_projects(
    params: PageParams = Depends(),
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Projects the user owns or collaborates on, newest first."""
    page = projects.list_for_user(current_user.id, page=params.page, limit=params.limit)
    return paginated(page, [ProjectSchema.from_model(p) for p in page.items])


@router.get("/{project_id}", response_model=ApiResponse[ProjectSchema])
def get_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    project = projects.get(project_id, current_user.id)
    return ApiResponse(data=ProjectSchema.from_model(project))


@router.post("", response_model=ApiResponse[ProjectSchema], status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    project = projects.create(current_user.id, payload.name, payload.description)
    return ApiResponse(
        message="Project created successfully",
        data=ProjectSchema.from_model(project),
    )


@router.put("/{project_id}", response_model=ApiResponse[ProjectSchema])
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Owner-only partial update."""
    project = projects.update(project_id, current_user.id, ProjectPatch.from_schema(payload))
    return ApiResponse(
        message="Project updated successfully",
        data=ProjectSchema.from_model(project),
    )


@router.delete("/{project_id}", response_model=ApiResponse[None])
def delete_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    """Owner-only; removes the project's memberships and tasks too."""
    projects.delete(project_id, current_user.id)
    return ApiResponse(message="Project deleted successfully")


@router.get("/{project_id}/collaborators", response_model=ApiResponse[List[Collaborator]])
def list_collaborators(
    project_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    memberships = projects.list_collaborators(project_id, current_user.id)
    return ApiResponse(data=[Collaborator.from_model(m) for m in memberships])


@router.post(
    "/{project_id}/collaborators",
    response_model=ApiResponse[Collaborator],
    status_code=status.HTTP_201_CREATED,
)
def add_collaborator(
    project_id: int,
    payload: CollaboratorAdd,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    membership = projects.add_collaborator(project_id, current_user.id, payload.user_id)
    return ApiResponse(
        message="Collaborator added successfully",
        data=Collaborator.from_model(membership),
    )


@router.delete("/{project_id}/collaborators/{user_id}", response_model=ApiResponse[None])
def remove_collaborator(
    project_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    projects: ProjectService = Depends(get_project_service),
):
    projects.remove_collaborator(project_id, current_user.id, user_id)
    return ApiResponse(message="Collaborator removed successfully")
