# tests/test_patches.py

from __future__ import annotations

from taskboard.models import TaskStatus
from taskboard.schemas.project import ProjectUpdate
from taskboard.schemas.task import TaskUpdate
from taskboard.services import UNSET, ProjectPatch, TaskPatch


def test_omitted_fields_stay_unset() -> None:
    patch = TaskPatch.from_schema(TaskUpdate.model_validate({"status": "completed"}))

    assert patch.changes() == {"status": TaskStatus.completed}
    assert patch.title is UNSET
    assert not patch.is_set("assigned_to")


def test_explicit_null_is_a_change() -> None:
    patch = TaskPatch.from_schema(TaskUpdate.model_validate({"assigned_to": None}))
    assert patch.changes() == {"assigned_to": None}

    patch = ProjectPatch.from_schema(ProjectUpdate.model_validate({"description": None}))
    assert patch.changes() == {"description": None}


def test_empty_patch_has_no_changes() -> None:
    assert ProjectPatch().changes() == {}
    assert repr(UNSET) == "UNSET"
