"""Pydantic schemas for task requests and responses."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def values(cls) -> list[str]:
        return [p.value for p in cls]

    @classmethod
    def parse(cls, value: object) -> Optional["Priority"]:
        """Return the matching Priority, or None for anything else."""
        if isinstance(value, str) and value in cls.values():
            return cls(value)
        return None


class SortOrder(str, Enum):
    """Recognised ``sort`` query values. Both orderings go by task id."""

    CREATED_AT = "createdAt"
    DATE = "date"
    CREATED_AT_DESC = "createdAt-desc"
    DATE_DESC = "date-desc"

    @property
    def descending(self) -> bool:
        return self in (SortOrder.CREATED_AT_DESC, SortOrder.DATE_DESC)

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SortOrder"]:
        try:
            return cls(value)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TaskPayload(BaseModel):
    """Body of a create or update request, built only after validation.

    ``completed`` and ``priority`` are optional; use ``model_fields_set`` to
    tell "not sent" apart from a sent value.
    """

    title: str
    description: str
    completed: Optional[bool] = None
    priority: Optional[Priority] = None

    def provided(self, name: str) -> bool:
        return name in self.model_fields_set


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    error: str


class DeleteResponse(BaseModel):
    message: str
    task: dict
