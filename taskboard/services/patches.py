"""Partial-update values.

Each field is either ``UNSET`` (leave the column alone) or the new value,
which may itself be ``None`` for nullable columns.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

from ..models import TaskPriority, TaskStatus


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class _Patch:
    def changes(self) -> Dict[str, Any]:
        """Fields that were supplied, mapped to their new values."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    @classmethod
    def from_schema(cls, schema: BaseModel):
        # Only keys present in the request body become part of the patch.
        return cls(**schema.model_dump(exclude_unset=True))


@dataclass(frozen=True)
class ProjectPatch(_Patch):
    name: Union[str, _Unset] = UNSET
    description: Union[Optional[str], _Unset] = UNSET


@dataclass(frozen=True)
class TaskPatch(_Patch):
    title: Union[str, _Unset] = UNSET
    description: Union[Optional[str], _Unset] = UNSET
    status: Union[TaskStatus, _Unset] = UNSET
    priority: Union[TaskPriority, _Unset] = UNSET
    assigned_to: Union[Optional[int], _Unset] = UNSET
