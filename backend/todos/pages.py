"""Server-rendered browser page for the todo list.

GET / renders the stats, filter controls, the add form and the filtered list
for the `ViewState` in the query string. The form actions below mutate
through `services` and redirect back to the state they came from.
"""

import logging

from django.contrib import messages
from django.http import QueryDict
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from . import services
from .models import Priority
from .query import Completion, SortKey, TodoQuery
from .serializers import TodoCreateSerializer, TodoUpdateSerializer
from .viewstate import CATEGORIES, ViewState

logger = logging.getLogger(__name__)

FILTER_LABELS = [
    (Completion.ALL.value, "All"),
    (Completion.ACTIVE.value, "Active"),
    (Completion.COMPLETED.value, "Completed"),
]

SORT_LABELS = [
    (SortKey.CREATED_AT.value, "Created"),
    (SortKey.PRIORITY.value, "Priority"),
    (SortKey.DUE_DATE.value, "Due date"),
]


def _state_from_next(request) -> ViewState:
    """State carried by a form post in its `next` field (a query string)."""
    return ViewState.from_query(QueryDict(request.POST.get("next", "")))


def _form_payload(post) -> dict:
    """Form fields as a JSON-like payload: blank inputs count as not sent."""
    fields = ("title", "description", "priority", "category", "dueDate")
    return {name: post[name] for name in fields if post.get(name, "") != ""}


def _render_index(request, state: ViewState, form=None, form_errors=None, status=200):
    query = TodoQuery.from_params(state.api_params())
    context = {
        "state": state,
        "state_query": state.to_query(),
        "todos": services.list_todos(query),
        "stats": services.compute_stats(),
        "filter_links": [
            (label, state.with_changes(filter=value).url(), value == state.filter)
            for value, label in FILTER_LABELS
        ],
        "sort_options": SORT_LABELS,
        "categories": CATEGORIES,
        "priorities": Priority.choices,
        "theme_url": state.toggle_theme().url(),
        "add_form_url": state.toggle_add_form().url(),
        "form": form or {"priority": Priority.MEDIUM},
        "form_errors": form_errors or {},
    }
    return render(request, "todos/index.html", context, status=status)


@require_GET
def index(request):
    return _render_index(request, ViewState.from_query(request.GET))


@require_POST
def create(request):
    state = _state_from_next(request)
    payload = _form_payload(request.POST)
    serializer = TodoCreateSerializer(data=payload)
    if not serializer.is_valid():
        logger.debug("Rejected todo form: %s", serializer.errors)
        return _render_index(request, state.with_changes(show_add_form=True),
                             form=payload, form_errors=serializer.errors, status=400)

    services.create_todo(**serializer.validated_data)
    return redirect(state.with_changes(show_add_form=False).url())


@require_POST
def toggle(request, pk):
    """Mark a todo done/undone; the form posts the negation of what it displayed."""
    state = _state_from_next(request)
    serializer = TodoUpdateSerializer(data={"done": request.POST.get("done")})
    if not serializer.is_valid():
        messages.error(request, "Could not update the task.")
        return redirect(state.url())
    try:
        services.update_todo(pk, serializer.validated_data)
    except services.TodoNotFound:
        messages.error(request, "That task no longer exists.")
    return redirect(state.url())


@require_POST
def delete(request, pk):
    state = _state_from_next(request)
    try:
        services.delete_todo(pk)
    except services.TodoNotFound:
        messages.error(request, "That task no longer exists.")
    return redirect(state.url())


@require_POST
def clear_completed(request):
    state = _state_from_next(request)
    cleared = services.clear_completed()
    if cleared:
        messages.success(request, f"Removed {cleared} completed task(s).")
    return redirect(state.url())
