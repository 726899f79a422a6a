"""Browser page view state.

The page keeps no state on the server: filters, sort, theme and whether the
add form is open all live in a frozen `ViewState` that round-trips through
the query string. Every transition returns a new value.
"""

from dataclasses import dataclass, replace
from typing import Dict, Mapping

from django.http import QueryDict

from .models import Priority
from .query import Completion, SortKey

CATEGORIES = ["Work", "Personal", "Urgent", "Shopping", "Health", "Other"]

THEMES = ("light", "dark")


@dataclass(frozen=True)
class ViewState:
    filter: str = Completion.ALL.value
    category: str = "all"
    priority: str = "all"
    search: str = ""
    sort_by: str = SortKey.CREATED_AT.value
    theme: str = "light"
    show_add_form: bool = False

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "ViewState":
        """Read a state from request query parameters; bad values fall back to defaults."""
        default = cls()

        completion = params.get("filter", default.filter)
        if completion not in {c.value for c in Completion}:
            completion = default.filter

        priority = params.get("priority", default.priority)
        if priority != "all" and priority not in Priority.values:
            priority = default.priority

        sort_by = params.get("sortBy", default.sort_by)
        if sort_by not in {k.value for k in SortKey}:
            sort_by = default.sort_by

        theme = params.get("theme", default.theme)
        if theme not in THEMES:
            theme = default.theme

        return cls(
            filter=completion,
            category=params.get("category") or default.category,
            priority=priority,
            search=(params.get("search") or "").strip(),
            sort_by=sort_by,
            theme=theme,
            show_add_form=params.get("add") == "1",
        )

    def to_params(self) -> Dict[str, str]:
        default = ViewState()
        params: Dict[str, str] = {}
        if self.filter != default.filter:
            params["filter"] = self.filter
        if self.category != default.category:
            params["category"] = self.category
        if self.priority != default.priority:
            params["priority"] = self.priority
        if self.search:
            params["search"] = self.search
        if self.sort_by != default.sort_by:
            params["sortBy"] = self.sort_by
        if self.theme != default.theme:
            params["theme"] = self.theme
        if self.show_add_form:
            params["add"] = "1"
        return params

    def to_query(self) -> str:
        query = QueryDict(mutable=True)
        query.update(self.to_params())
        return query.urlencode()

    def url(self, base: str = "/") -> str:
        query = self.to_query()
        return f"{base}?{query}" if query else base

    def api_params(self) -> Dict[str, str]:
        """Parameters for the todo list query, as the list endpoint expects them."""
        params: Dict[str, str] = {}
        if self.filter != Completion.ALL.value:
            params["filter"] = self.filter
        if self.category != "all":
            params["category"] = self.category
        if self.priority != "all":
            params["priority"] = self.priority
        if self.search:
            params["search"] = self.search
        params["sortBy"] = self.sort_by
        return params

    def with_changes(self, **changes) -> "ViewState":
        return replace(self, **changes)

    def toggle_theme(self) -> "ViewState":
        return replace(self, theme="light" if self.theme == "dark" else "dark")

    def toggle_add_form(self) -> "ViewState":
        return replace(self, show_add_form=not self.show_add_form)
