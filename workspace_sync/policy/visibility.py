"""Task visibility rules for the "member" role.

A state document is an opaque mapping. The only key read here is ``tasks``,
a list of task mappings carrying an optional ``assigneeEmail``. Members see
only their own tasks and can only create, change or drop their own tasks;
everyone else's tasks survive a member's write untouched.

All functions are pure: inputs are never mutated.
"""

from collections.abc import Mapping
from typing import Any, Optional

TASKS_KEY = "tasks"
ASSIGNEE_KEY = "assigneeEmail"


def normalize_email(email: Optional[str]) -> str:
    """Lowercase an email, treating None/empty as ""."""
    return (email or "").lower()


def is_assigned_to(task: Any, email: Optional[str]) -> bool:
    """True when ``task`` is assigned to ``email`` (case-insensitive).

    Non-mapping entries have no assignee and compare as "".
    """
    assignee = task.get(ASSIGNEE_KEY) if isinstance(task, Mapping) else None
    if not isinstance(assignee, str):
        assignee = ""
    return assignee.lower() == normalize_email(email)


def _as_task_list(tasks: Any) -> list:
    return list(tasks) if isinstance(tasks, list) else []


def filter_for_member(tasks: Any, email: Optional[str]) -> list:
    """Return the caller's own tasks, in their original order.

    Anything that is not a list yields an empty list.
    """
    return [task for task in _as_task_list(tasks) if is_assigned_to(task, email)]


def merge_for_member(existing_tasks: Any, incoming_tasks: Any, email: Optional[str]) -> list:
    """Merge a member's write into the stored task list.

    Result is every stored task NOT owned by the caller (verbatim, stored
    order) followed by every incoming task owned by the caller (incoming
    order). Whatever the incoming payload says about other users' tasks is
    ignored.

    Example:
        >>> merge_for_member(
        ...     [{"assigneeEmail": "a@x.com", "id": 1}, {"assigneeEmail": "b@x.com", "id": 2}],
        ...     [{"assigneeEmail": "b@x.com", "id": 2, "done": True}, {"assigneeEmail": "b@x.com", "id": 3}],
        ...     "b@x.com",
        ... )
        [{'assigneeEmail': 'a@x.com', 'id': 1}, {'assigneeEmail': 'b@x.com', 'id': 2, 'done': True}, {'assigneeEmail': 'b@x.com', 'id': 3}]
    """
    preserved_others = [
        task for task in _as_task_list(existing_tasks) if not is_assigned_to(task, email)
    ]
    own_tasks = filter_for_member(incoming_tasks, email)
    return preserved_others + own_tasks


def scope_state_for_member(state: Mapping[str, Any], email: Optional[str]) -> dict[str, Any]:
    """Return a copy of ``state`` with ``tasks`` restricted to the caller.

    A ``tasks`` value that is not a list becomes []. Documents without
    ``tasks`` are returned as a plain copy.
    """
    scoped = dict(state)
    if TASKS_KEY in scoped:
        scoped[TASKS_KEY] = filter_for_member(scoped[TASKS_KEY], email)
    return scoped


def merge_state_for_member(
    existing_state: Optional[Mapping[str, Any]],
    incoming_state: Mapping[str, Any],
    email: Optional[str],
) -> dict[str, Any]:
    """Build the document to store for a member's write.

    Shallow merge: incoming top-level keys override stored ones, except
    ``tasks``, which becomes ``merge_for_member(stored, incoming)``.
    """
    existing_state = existing_state or {}
    merged = {**existing_state, **incoming_state}
    merged[TASKS_KEY] = merge_for_member(
        existing_state.get(TASKS_KEY),
        incoming_state.get(TASKS_KEY),
        email,
    )
    return merged
