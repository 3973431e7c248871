from .access import AccessLevel, AccessResolver
from .patches import UNSET, ProjectPatch, TaskPatch
from .projects import ProjectService
from .queries import Page, SortOrder, TaskFilters, TaskSortField
from .statistics import collect_statistics
from .tasks import TaskService
from .users import UserStore

__all__ = [
    "AccessLevel",
    "AccessResolver",
    "UNSET",
    "ProjectPatch",
    "TaskPatch",
    "ProjectService",
    "Page",
    "SortOrder",
    "TaskFilters",
    "TaskSortField",
    "collect_statistics",
    "TaskService",
    "UserStore",
]
