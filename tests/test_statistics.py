# tests/test_statistics.py

from __future__ import annotations

from taskboard.models import TaskStatus
from taskboard.services import ProjectService, TaskService, collect_statistics


def test_statistics_cover_visible_projects_only(session, make_user) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    projects, tasks = ProjectService(session), TaskService(session)

    own = projects.create(bob.id, "Bob's")
    shared = projects.create(alice.id, "Shared")
    hidden = projects.create(alice.id, "Hidden")
    projects.add_collaborator(shared.id, alice.id, bob.id)

    tasks.create(bob.id, "a", own.id, status=TaskStatus.completed)
    tasks.create(alice.id, "b", shared.id, assigned_to=bob.id)
    tasks.create(bob.id, "c", shared.id, status=TaskStatus.in_progress, assigned_to=alice.id)
    tasks.create(alice.id, "d", hidden.id, assigned_to=alice.id)

    stats = collect_statistics(session, bob.id)

    assert stats.total_projects == 2
    assert stats.owned_projects == 1
    assert stats.collaborating_projects == 1
    assert stats.total_tasks == 3
    assert stats.tasks_by_status.pending == 1
    assert stats.tasks_by_status.in_progress == 1
    assert stats.tasks_by_status.completed == 1
    assert stats.tasks_assigned_to_me == 1
    assert stats.tasks_created_by_me == 2


def test_statistics_for_new_user_are_zero(session, make_user) -> None:
    carol = make_user("Carol")

    stats = collect_statistics(session, carol.id)

    assert stats.total_projects == 0
    assert stats.total_tasks == 0
    assert stats.tasks_by_status.pending == 0


def test_statistics_endpoint(client, register) -> None:
    alice = register("Alice")
    resp = client.post("/api/projects", json={"name": "P1"}, headers=alice.headers)
    project_id = resp.json()["data"]["id"]
    client.post("/api/tasks", json={"title": "t", "project_id": project_id}, headers=alice.headers)

    resp = client.get("/api/statistics", headers=alice.headers)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total_projects"] == 1
    assert data["owned_projects"] == 1
    assert data["total_tasks"] == 1
    assert data["tasks_by_status"] == {"pending": 1, "in_progress": 0, "completed": 0}
    assert data["tasks_created_by_me"] == 1
