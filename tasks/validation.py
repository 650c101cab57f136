"""Request validation for task create/update.

Each check is a pure function: body dict in, RuleResult out. No store
access, no side effects. ``validate_task_payload`` runs them in order and
raises on the first failure, so a rejected request never reaches the store.
"""

import re
from dataclasses import dataclass
from typing import Any

from api.errors import BadRequestError
from tasks.models.schemas import Priority, TaskPayload

TITLE_ERROR = "Title is required and must be a non-empty string"
DESCRIPTION_ERROR = "Description is required and must be a non-empty string"
COMPLETED_ERROR = "Completed must be a boolean value"
PRIORITY_ERROR = "Priority must be one of: low, medium, high"
INVALID_ID_ERROR = "Invalid task ID"

_PAYLOAD_FIELDS = ("title", "description", "completed", "priority")

# Leading integer, as in "12", " -3", "12abc".
_ID_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")


class TaskValidationError(BadRequestError):
    """A create/update body failed one of the checks below."""


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single check."""

    passed: bool
    rule_name: str
    message: str


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------

def _is_non_blank_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def check_title(body: dict) -> RuleResult:
    passed = _is_non_blank_string(body.get("title"))
    return RuleResult(passed=passed, rule_name="title", message="ok" if passed else TITLE_ERROR)


def check_description(body: dict) -> RuleResult:
    passed = _is_non_blank_string(body.get("description"))
    return RuleResult(
        passed=passed,
        rule_name="description",
        message="ok" if passed else DESCRIPTION_ERROR,
    )


def check_completed(body: dict) -> RuleResult:
    """``completed`` is optional, but a sent value (even null) must be a bool."""
    passed = "completed" not in body or isinstance(body["completed"], bool)
    return RuleResult(
        passed=passed,
        rule_name="completed",
        message="ok" if passed else COMPLETED_ERROR,
    )


def check_priority(body: dict) -> RuleResult:
    passed = "priority" not in body or Priority.parse(body["priority"]) is not None
    return RuleResult(
        passed=passed,
        rule_name="priority",
        message="ok" if passed else PRIORITY_ERROR,
    )


CHECKS = (check_title, check_description, check_completed, check_priority)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def validate_task_payload(body: Any) -> TaskPayload:
    """Run every check in order and build the payload.

    Anything other than a JSON object is treated as an empty body, which
    then fails the title check.

    Raises:
        TaskValidationError: with the message of the first failing check.
    """
    if not isinstance(body, dict):
        body = {}

    for check in CHECKS:
        result = check(body)
        if not result.passed:
            raise TaskValidationError(result.message)

    return TaskPayload(**{name: body[name] for name in _PAYLOAD_FIELDS if name in body})


def parse_task_id(raw: str) -> int:
    """Parse the leading integer of a path segment.

    Raises:
        BadRequestError: if the segment does not start with an integer.
    """
    match = _ID_PREFIX.match(raw)
    if not match:
        raise BadRequestError(INVALID_ID_ERROR)
    return int(match.group(1))
