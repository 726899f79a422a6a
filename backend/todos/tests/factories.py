from datetime import timedelta

from django.utils import timezone

from todos.models import Todo


def make_todo(title="Task", created_offset=None, **fields):
    """Insert a todo directly; `created_offset` (seconds) pins created_at relative to now."""
    todo = Todo(title=title, **fields)
    if created_offset is not None:
        todo.created_at = timezone.now() + timedelta(seconds=created_offset)
    todo.save()
    return todo
