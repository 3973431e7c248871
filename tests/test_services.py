# tests/test_services.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.errors import ValidationError
from taskboard.models import Project, Task
from taskboard.services import ProjectPatch, ProjectService, TaskPatch, TaskService


def _utc_naive(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo; compare everything as naive UTC.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None)


def test_timestamps_round_trip_through_the_database(session, make_user) -> None:
    alice = make_user("Alice")
    projects, tasks = ProjectService(session), TaskService(session)
    before = _utc_naive(datetime.now(timezone.utc))

    project = projects.create(alice.id, "P1")
    task = tasks.create(alice.id, "t", project.id)
    session.expire_all()

    stored = session.get(Project, project.id)
    assert before - timedelta(seconds=5) <= _utc_naive(stored.created_at) <= before + timedelta(minutes=1)
    assert _utc_naive(session.get(Task, task.id).created_at) >= _utc_naive(stored.created_at)


def test_updates_move_updated_at_forward(session, make_user) -> None:
    alice = make_user("Alice")
    projects, tasks = ProjectService(session), TaskService(session)
    project = projects.create(alice.id, "P1")
    task = tasks.create(alice.id, "t", project.id)
    project_created, task_created = project.created_at, task.created_at

    project = projects.update(project.id, alice.id, ProjectPatch(name="Renamed"))
    task = tasks.update(task.id, alice.id, TaskPatch(title="Renamed"))

    assert project.name == "Renamed"
    assert _utc_naive(project.updated_at) >= _utc_naive(project_created)
    assert _utc_naive(task.updated_at) >= _utc_naive(task_created)


def test_blank_title_is_rejected_before_project_lookup(session, make_user) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    tasks = TaskService(session)
    private = ProjectService(session).create(alice.id, "Private")

    with pytest.raises(ValidationError):
        tasks.create(alice.id, "   ", 999999)
    with pytest.raises(ValidationError):
        tasks.create(bob.id, "", private.id)
