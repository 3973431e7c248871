"""Dashboard counters for one user, computed over the projects they can see."""

from sqlalchemy import func
from sqlmodel import Session, select

from ..models import Project, ProjectCollaborator, Task, TaskStatus
from ..schemas.statistics import TaskStatusCounts, UserStatistics
from .queries import visible_to


def _count(session: Session, statement) -> int:
    return session.exec(select(func.count()).select_from(statement.subquery())).one()


def collect_statistics(session: Session, user_id: int) -> UserStatistics:
    visible_projects = select(Project.id).where(visible_to(user_id))
    owned_projects = select(Project.id).where(Project.owner_id == user_id)
    collaborating = select(ProjectCollaborator.project_id).where(
        ProjectCollaborator.user_id == user_id
    )

    visible_tasks = select(Task.id, Task.status, Task.assigned_to, Task.created_by).join(
        Project, Task.project_id == Project.id
    ).where(visible_to(user_id))
    tasks = visible_tasks.subquery()

    by_status = {
        status: count
        for status, count in session.exec(
            select(tasks.c.status, func.count()).group_by(tasks.c.status)
        ).all()
    }

    return UserStatistics(
        total_projects=_count(session, visible_projects),
        owned_projects=_count(session, owned_projects),
        collaborating_projects=_count(session, collaborating),
        total_tasks=_count(session, visible_tasks),
        tasks_by_status=TaskStatusCounts(
            pending=by_status.get(TaskStatus.pending, 0),
            in_progress=by_status.get(TaskStatus.in_progress, 0),
            completed=by_status.get(TaskStatus.completed, 0),
        ),
        tasks_assigned_to_me=_count(session, select(tasks.c.id).where(tasks.c.assigned_to == user_id)),
        tasks_created_by_me=_count(session, select(tasks.c.id).where(tasks.c.created_by == user_id)),
    )
