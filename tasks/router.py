"""Tasks API router.

Routes:
- GET    /tasks                    list, with completed/priority/sort query
- GET    /tasks/priority/{level}   list one priority level
- GET    /tasks/{task_id}          fetch one
- POST   /tasks                    create
- PUT    /tasks/{task_id}          replace title/description, optionally completed/priority
- DELETE /tasks/{task_id}          remove

Create and update bodies go through ``validated_payload`` before the handler
runs. The store is injected via FastAPI Depends.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request

from api.errors import BadRequestError, NotFoundError
from tasks.models.schemas import (
    DeleteResponse,
    ErrorResponse,
    Priority,
    SortOrder,
    TaskPayload,
)
from tasks.repository import TaskStore, get_task_store
from tasks.validation import parse_task_id, validate_task_payload

logger = logging.getLogger(__name__)

router = APIRouter()

TASK_NOT_FOUND = "Task not found"
INVALID_LEVEL = "Invalid priority level. Must be one of: low, medium, high"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_ERRORS = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


async def validated_payload(request: Request) -> TaskPayload:
    """Read the body and validate it.

    Form-encoded bodies are read as plain string fields, so ``completed``
    sent that way fails the boolean check. Anything else is parsed as JSON;
    an empty body counts as ``{}``.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return validate_task_payload(dict(form.items()))

    raw = await request.body()
    if not raw.strip():
        return validate_task_payload({})
    try:
        body = json.loads(raw)
    except ValueError:
        raise BadRequestError("Malformed JSON body")
    return validate_task_payload(body)


# ============================================================================
# Collection
# ============================================================================

@router.get("/tasks")
async def list_tasks(
    completed: Optional[str] = None,
    priority: Optional[str] = None,
    sort: Optional[str] = None,
    store: TaskStore = Depends(get_task_store),
):
    """List tasks.

    - ``completed``: ``true`` keeps completed tasks, any other value keeps
      the rest
    - ``priority``: filter by level; unknown levels are ignored
    - ``sort``: ``createdAt``/``date`` ascending, ``createdAt-desc``/``date-desc``
      descending; anything else keeps store order
    """
    return store.list(
        completed=(completed == "true") if completed is not None else None,
        priority=Priority.parse(priority),
        sort=SortOrder.parse(sort),
    )


@router.get("/tasks/priority/{level}", responses=_ERRORS)
async def list_tasks_by_priority(
    level: str,
    store: TaskStore = Depends(get_task_store),
):
    """List tasks at one priority level (case-insensitive)."""
    priority = Priority.parse(level.lower())
    if priority is None:
        raise BadRequestError(INVALID_LEVEL)
    return store.list_by_priority(priority)


@router.post("/tasks", status_code=201, responses=_ERRORS)
async def create_task(
    payload: TaskPayload = Depends(validated_payload),
    store: TaskStore = Depends(get_task_store),
):
    """Create a task. ``completed`` defaults to false, ``priority`` to medium."""
    task = store.create(payload)
    logger.info("Created task %d", task["id"])
    return task


# ============================================================================
# Single task
# ============================================================================

@router.get("/tasks/{task_id}", responses=_ERRORS)
async def get_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
):
    task = store.get(parse_task_id(task_id))
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return task


@router.put("/tasks/{task_id}", responses=_ERRORS)
async def update_task(
    task_id: str,
    payload: TaskPayload = Depends(validated_payload),
    store: TaskStore = Depends(get_task_store),
):
    """Update a task.

    Title and description are required, as on create. ``completed`` and
    ``priority`` keep their current values unless sent.
    """
    task = store.update(parse_task_id(task_id), payload)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    logger.info("Updated task %d", task["id"])
    return task


@router.delete("/tasks/{task_id}", response_model=DeleteResponse, responses=_ERRORS)
async def delete_task(
    task_id: str,
    store: TaskStore = Depends(get_task_store),
):
    task = store.delete(parse_task_id(task_id))
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    logger.info("Deleted task %d", task["id"])
    return DeleteResponse(message="Task deleted successfully", task=task)
