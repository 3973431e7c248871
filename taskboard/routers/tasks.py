from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..dependencies import PageParams, get_task_service
from ..models import TaskPriority, TaskStatus, User
from ..schemas.common import ApiResponse, PaginatedResponse, paginated
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from ..services import SortOrder, TaskFilters, TaskPatch, TaskService, TaskSortField
from .auth import get_current_user

router = APIRouter()


@router.get("", response_model=PaginatedResponse[TaskSchema])
def get_tasks(
    params: PageParams = Depends(),
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    project_id: Optional[int] = Query(None, gt=0),
    assigned_to: Optional[int] = Query(None, gt=0),
    sort_by: TaskSortField = TaskSortField.created_at,
    order: SortOrder = SortOrder.desc,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Tasks across every project the user can see, filtered and paginated."""
    filters = TaskFilters(
        status=status,
        priority=priority,
        project_id=project_id,
        assigned_to=assigned_to,
        sort_by=sort_by,
        order=order,
    )
    page = tasks.list_for_user(current_user.id, filters, page=params.page, limit=params.limit)
    return paginated(page, [TaskSchema.from_model(t) for t in page.items])


@router.get("/project/{project_id}", response_model=ApiResponse[List[TaskSchema]])
def get_tasks_by_project(
    project_id: int,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    items = tasks.list_by_project(project_id, current_user.id)
    return ApiResponse(data=[TaskSchema.from_model(t) for t in items])


@router.get("/{task_id}", response_model=ApiResponse[TaskSchema])
def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.get(task_id, current_user.id)
    return ApiResponse(data=TaskSchema.from_model(task))


@router.post("", response_model=ApiResponse[TaskSchema], status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.create(
        current_user.id,
        title=payload.title,
        project_id=payload.project_id,
        description=payload.description,
        status=payload.status,
        priority=payload.priority,
        assigned_to=payload.assigned_to,
    )
    return ApiResponse(message="Task created successfully", data=TaskSchema.from_model(task))


@router.put("/{task_id}", response_model=ApiResponse[TaskSchema])
def update_task(
    task_id: int,
    payload: TaskUpdate,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Any project member may update; only supplied fields change."""
    task = tasks.update(task_id, current_user.id, TaskPatch.from_schema(payload))
    return ApiResponse(message="Task updated successfully", data=TaskSchema.from_model(task))


@router.delete("/{task_id}", response_model=ApiResponse[None])
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    tasks.delete(task_id, current_user.id)
    return ApiResponse(message="Task deleted successfully")
