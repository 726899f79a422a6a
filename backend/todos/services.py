"""Todo lifecycle operations and aggregate statistics.

Both the JSON API and the browser pages go through these functions; they
take and return plain values and model instances, never requests.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from django.db.models import Count
from django.utils import timezone

from .models import Priority, Todo
from .query import TodoQuery

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "done", "priority", "category", "due_date")


class TodoNotFound(Exception):
    """Raised when an operation references a todo id that does not exist."""

    def __init__(self, todo_id: Any):
        super().__init__(f"Todo {todo_id!s} not found")
        self.todo_id = todo_id


def _parse_id(todo_id: Any) -> uuid.UUID:
    if isinstance(todo_id, uuid.UUID):
        return todo_id
    try:
        return uuid.UUID(str(todo_id))
    except ValueError:
        raise TodoNotFound(todo_id)


def get_todo(todo_id: Any) -> Todo:
    pk = _parse_id(todo_id)
    try:
        return Todo.objects.get(pk=pk)
    except Todo.DoesNotExist:
        raise TodoNotFound(todo_id)


def list_todos(query: Optional[TodoQuery] = None) -> List[Todo]:
    query = query or TodoQuery()
    logger.debug("Listing todos with %s", query)
    return list(query.apply(Todo.objects.all()))


def create_todo(title: str,
                description: Optional[str] = None,
                priority: Optional[str] = None,
                category: Optional[str] = None,
                due_date: Optional[datetime] = None) -> Todo:
    """Persist a new todo.

    Empty optional values are treated as absent: they are not stored and the
    model defaults apply (MEDIUM priority, no description/category/due date).
    """
    todo = Todo(title=title)
    if description:
        todo.description = description
    if priority:
        todo.priority = priority
    if category:
        todo.category = category
    if due_date:
        todo.due_date = due_date
    todo.save()
    logger.info("Created todo %s (%s)", todo.pk, todo.priority)
    return todo


def update_todo(todo_id: Any, changes: Mapping[str, Any]) -> Todo:
    """Apply a partial update.

    Only keys present in `changes` are written, so `{"due_date": None}` clears
    the due date while a mapping without `due_date` leaves it alone. Unknown
    keys are ignored.
    """
    pk = _parse_id(todo_id)
    values = {name: changes[name] for name in UPDATABLE_FIELDS if name in changes}
    values["updated_at"] = timezone.now()
    # a single UPDATE; zero rows means the todo is gone (possibly deleted concurrently)
    if not Todo.objects.filter(pk=pk).update(**values):
        raise TodoNotFound(todo_id)
    logger.debug("Updated todo %s fields=%s", pk, sorted(values))
    return get_todo(pk)


def delete_todo(todo_id: Any) -> None:
    pk = _parse_id(todo_id)
    deleted, _ = Todo.objects.filter(pk=pk).delete()
    if not deleted:
        raise TodoNotFound(todo_id)
    logger.info("Deleted todo %s", pk)


def clear_completed() -> int:
    deleted, _ = Todo.objects.filter(done=True).delete()
    logger.info("Cleared %d completed todo(s)", deleted)
    return deleted


def compute_stats(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Summary counts over every todo, computed fresh on each call.

    Returns:
        dict with 'total', 'completed', 'active', 'overdue' and 'byPriority'
        (only priorities that occur in the data appear as keys).
    """
    now = now or timezone.now()
    todos = Todo.objects.all()

    total = todos.count()
    completed = todos.filter(done=True).count()
    active = todos.filter(done=False).count()
    overdue = todos.filter(done=False, due_date__lt=now).count()

    by_priority: Dict[str, int] = {}
    rows = todos.order_by().values("priority").annotate(count=Count("id"))
    for row in sorted(rows, key=lambda r: Priority.rank(r["priority"])):
        by_priority[row["priority"]] = row["count"]

    return {
        "total": total,
        "completed": completed,
        "active": active,
        "overdue": overdue,
        "byPriority": by_priority,
    }
