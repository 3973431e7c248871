from .user import User
from .project import Project, ProjectCollaborator
from .task import Task, TaskPriority, TaskStatus

# Export all models for easy importing
__all__ = ["User", "Project", "ProjectCollaborator", "Task", "TaskPriority", "TaskStatus"]
