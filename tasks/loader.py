"""Seed loader: fills the store from a JSON file at startup.

The file looks like ``{"tasks": [{"id": 1, "title": ..., ...}, ...]}``. It
is read once and never written back. Loading fails soft: if the file is
missing, unreadable or not valid JSON, a warning is logged and the store
starts empty.
"""

import json
import logging
from pathlib import Path
from typing import Any

from tasks.models.schemas import Priority
from tasks.models.task import Task, utc_timestamp
from tasks.repository import TaskStore

logger = logging.getLogger(__name__)

_KNOWN_KEYS = ("id", "title", "description", "completed", "priority", "createdAt")


def _is_task_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def normalize_record(record: dict, task_id: int, loaded_at: str) -> Task:
    """Turn one seed record into a Task.

    A missing priority becomes ``medium`` and a missing ``createdAt`` becomes
    ``loaded_at`` (the load time, not the real creation time). Unknown keys
    are kept as-is.
    """
    raw_priority = record.get("priority")
    priority = Priority.parse(raw_priority)
    if priority is None:
        if raw_priority:
            logger.warning(
                "Task %s has unknown priority %r, using %s",
                task_id,
                raw_priority,
                Priority.MEDIUM.value,
            )
        priority = Priority.MEDIUM

    return Task(
        id=task_id,
        title=record.get("title"),
        description=record.get("description"),
        completed=record.get("completed"),
        priority=priority,
        created_at=record.get("createdAt") or loaded_at,
        extra={k: v for k, v in record.items() if k not in _KNOWN_KEYS},
    )


def parse_seed(document: Any) -> list[Task]:
    """Build tasks from a parsed seed document.

    Records with an integer id keep it. Records without one get fresh ids
    after the highest seeded id. A record repeating an id already seen is
    dropped so ids stay unique.
    """
    if not isinstance(document, dict):
        raise ValueError("seed document must be a JSON object")

    records = document.get("tasks") or []
    if not isinstance(records, list):
        raise ValueError("'tasks' must be a JSON array")

    loaded_at = utc_timestamp()
    skipped = sum(1 for r in records if not isinstance(r, dict))
    if skipped:
        logger.warning("Skipping %d seed record(s) that are not JSON objects", skipped)
    records = [r for r in records if isinstance(r, dict)]
    max_id = max((r["id"] for r in records if _is_task_id(r.get("id"))), default=0)
    next_id = max_id + 1

    tasks: list[Task] = []
    seen: set[int] = set()
    for record in records:
        task_id = record.get("id")
        if not _is_task_id(task_id):
            task_id = next_id
            next_id += 1
        elif task_id in seen:
            logger.warning("Skipping seed task with duplicate id %d", task_id)
            continue
        seen.add(task_id)
        tasks.append(normalize_record(record, task_id, loaded_at))

    return tasks


def load_seed_file(path: str | Path) -> list[Task]:
    """Read and parse the seed file, returning [] on any load failure."""
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            document = json.load(fh)
        return parse_seed(document)
    except (OSError, ValueError) as exc:
        logger.warning(
            "Could not load tasks from %s, starting with empty store (%s)", path, exc
        )
        return []


def seed_store(store: TaskStore, path: str | Path) -> int:
    """Load the seed file into ``store``. Returns the number of tasks loaded."""
    tasks = load_seed_file(path)
    store.load(tasks)
    logger.info("Loaded %d task(s) from %s, next id %d", len(tasks), path, store.next_id)
    return len(tasks)
