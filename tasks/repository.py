"""In-memory task store.

TaskStore owns the ordered task list and the id generator. Handlers never
touch the list directly: they go through list/get/create/update/delete,
each of which runs under one lock and returns plain dicts (``to_dict()``),
so nothing outside the store can mutate a stored task.
"""

from __future__ import annotations

import threading
from typing import Optional

from fastapi import Request

from tasks.models.schemas import Priority, SortOrder, TaskPayload
from tasks.models.task import Task, utc_timestamp


class TaskStore:
    """Ordered, append-only-by-id collection of tasks.

    Ids are handed out sequentially from ``next_id`` and never reused, even
    after a delete::

        store = TaskStore()
        task = store.create(TaskPayload(title="Write", description="Docs"))
        store.get(task["id"])
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._next_id = 1
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    @property
    def next_id(self) -> int:
        with self._lock:
            return self._next_id

    # -- Bulk load --

    def load(self, tasks: list[Task]) -> None:
        """Replace the contents with ``tasks`` and reset the id generator."""
        with self._lock:
            self._tasks = list(tasks)
            self._next_id = max((t.id for t in self._tasks), default=0) + 1

    # -- List --

    def list(
        self,
        completed: Optional[bool] = None,
        priority: Optional[Priority] = None,
        sort: Optional[SortOrder] = None,
    ) -> list[dict]:
        """Filtered copy of the collection.

        Without ``sort`` the result keeps store (insertion) order. Sorting is
        by id, which tracks creation order for tasks created here.
        """
        with self._lock:
            tasks = list(self._tasks)

            if completed is not None:
                tasks = [t for t in tasks if t.completed is completed]

            if priority is not None:
                tasks = [t for t in tasks if t.priority == priority]

            if sort is not None:
                tasks.sort(key=lambda t: t.id, reverse=sort.descending)

            return [t.to_dict() for t in tasks]

    def list_by_priority(self, priority: Priority) -> list[dict]:
        with self._lock:
            return [t.to_dict() for t in self._tasks if t.priority == priority]

    # -- Get by ID --

    def get(self, task_id: int) -> Optional[dict]:
        with self._lock:
            task = self._find(task_id)
            return task.to_dict() if task else None

    # -- Create --

    def create(self, payload: TaskPayload) -> dict:
        """Append a new task built from a validated payload."""
        with self._lock:
            task = Task(
                id=self._next_id,
                title=payload.title.strip(),
                description=payload.description.strip(),
                completed=payload.completed if payload.completed is not None else False,
                priority=payload.priority or Priority.MEDIUM,
                created_at=utc_timestamp(),
            )
            self._next_id += 1
            self._tasks.append(task)
            return task.to_dict()

    # -- Update --

    def update(self, task_id: int, payload: TaskPayload) -> Optional[dict]:
        """Replace title/description; completed/priority only if sent.

        ``id``, ``created_at`` and any seed passthrough keys are kept.
        Returns None if no task has ``task_id``.
        """
        with self._lock:
            task = self._find(task_id)
            if task is None:
                return None

            task.title = payload.title.strip()
            task.description = payload.description.strip()
            if payload.provided("completed"):
                task.completed = payload.completed
            if payload.provided("priority"):
                task.priority = payload.priority
            return task.to_dict()

    # -- Delete --

    def delete(self, task_id: int) -> Optional[dict]:
        """Remove a task and return its last value, or None if not found."""
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    return self._tasks.pop(index).to_dict()
            return None

    def _find(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_task_store(request: Request) -> TaskStore:
    """FastAPI dependency returning the app's TaskStore."""
    return request.app.state.task_store
