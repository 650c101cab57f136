"""The Task record held by the store.

``to_dict()`` is the single serialisation path used by the store and the
router. JSON keys are camelCase (``createdAt``) to match the wire format;
keys carried over from seed records are kept verbatim in ``extra``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from tasks.models.schemas import Priority


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-05-01T09:30:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Task:
    """A single task.

    ``title``, ``description`` and ``completed`` are always set for tasks
    created through the API. Legacy seed records may lack them, in which case
    they stay ``None`` and are left out of ``to_dict()``.
    """

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Priority = Priority.MEDIUM
    created_at: str = field(default_factory=utc_timestamp)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data["id"] = self.id
        if self.title is not None:
            data["title"] = self.title
        if self.description is not None:
            data["description"] = self.description
        if self.completed is not None:
            data["completed"] = self.completed
        data["priority"] = self.priority.value
        data["createdAt"] = self.created_at
        return data
