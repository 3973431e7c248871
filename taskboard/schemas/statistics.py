from pydantic import BaseModel


class TaskStatusCounts(BaseModel):
    pending: int = 0
    in_progress: int = 0
    completed: int = 0


class UserStatistics(BaseModel):
    total_projects: int = 0
    owned_projects: int = 0
    collaborating_projects: int = 0
    total_tasks: int = 0
    tasks_by_status: TaskStatusCounts = TaskStatusCounts()
    tasks_assigned_to_me: int = 0
    tasks_created_by_me: int = 0
