"""Todo list query construction.

Contains:
- the enums describing every supported filter/sort combination,
- `TodoQuery`, the validated form of the list endpoint's query string,
- translation of a `TodoQuery` into ORM filters and ordering.

Query strings are loosely typed; they are parsed once by `TodoQuery.from_params`
and everything downstream works on the frozen value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from django.db.models import Case, F, IntegerField, Q, QuerySet, Value, When
from django.db.models.lookups import Contains

from .db import Casefold
from .models import Priority

ALL = "all"


class Completion(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortKey(str, Enum):
    CREATED_AT = "createdAt"
    PRIORITY = "priority"
    DUE_DATE = "dueDate"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _text_param(value: Any) -> Optional[str]:
    """Return a usable string parameter, or None for absent/blank/`all`/non-string values."""
    if not isinstance(value, str):
        return None
    if value == "" or value == ALL:
        return None
    return value


def _enum_param(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def priority_rank():
    """ORM expression mapping each priority to its rank (LOW=0 .. URGENT=3)."""
    return Case(
        *[When(priority=value, then=Value(Priority.rank(value))) for value in Priority.values],
        output_field=IntegerField(),
    )


@dataclass(frozen=True)
class Sort:
    key: SortKey = SortKey.CREATED_AT
    order: SortOrder = SortOrder.DESC

    @classmethod
    def parse(cls, sort_by: Any, order: Any) -> "Sort":
        """Build a sort from raw `sortBy`/`order` values.

        Unknown or absent `sortBy` (and `createdAt` itself) always means newest
        first; `order` only applies to priority and due date sorts, where any
        value other than `asc` means descending.
        """
        key = _enum_param(SortKey, sort_by, SortKey.CREATED_AT)
        if key is SortKey.CREATED_AT:
            return cls()
        return cls(key, SortOrder.ASC if order == SortOrder.ASC.value else SortOrder.DESC)

    def ordering(self) -> List[Any]:
        if self.key is SortKey.CREATED_AT:
            return [F("created_at").desc(), "id"]

        if self.key is SortKey.PRIORITY:
            primary = F("priority_rank")
        else:
            primary = F("due_date")

        if self.order is SortOrder.ASC:
            primary = primary.asc(nulls_last=True)
        else:
            primary = primary.desc(nulls_last=True)
        # ties keep insertion order
        return [primary, F("created_at").asc(), "id"]


@dataclass(frozen=True)
class TodoQuery:
    completion: Completion = Completion.ALL
    category: Optional[str] = None
    priority: Optional[str] = None
    search: Optional[str] = None
    sort: Sort = field(default_factory=Sort)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "TodoQuery":
        """Parse the list endpoint's query parameters.

        Accepts `filter`, `category`, `priority`, `search`, `sortBy` and `order`.
        Nothing here rejects input: unrecognized values fall back to the
        unconstrained default.
        """
        return cls(
            completion=_enum_param(Completion, params.get("filter"), Completion.ALL),
            category=_text_param(params.get("category")),
            priority=_text_param(params.get("priority")),
            search=_text_param(params.get("search")),
            sort=Sort.parse(params.get("sortBy"), params.get("order")),
        )

    def to_params(self) -> Dict[str, str]:
        """Inverse of `from_params`, omitting every default."""
        params: Dict[str, str] = {}
        if self.completion is not Completion.ALL:
            params["filter"] = self.completion.value
        if self.category:
            params["category"] = self.category
        if self.priority:
            params["priority"] = self.priority
        if self.search:
            params["search"] = self.search
        if self.sort != Sort():
            params["sortBy"] = self.sort.key.value
            params["order"] = self.sort.order.value
        return params

    def where(self) -> Q:
        q = Q()
        if self.completion is Completion.ACTIVE:
            q &= Q(done=False)
        elif self.completion is Completion.COMPLETED:
            q &= Q(done=True)

        if self.category is not None:
            q &= Q(category=self.category)
        if self.priority is not None:
            q &= Q(priority=self.priority)
        if self.search is not None:
            needle = self.search.casefold()
            q &= Q(Contains(Casefold("title"), needle)) | Q(Contains(Casefold("description"), needle))
        return q

    def ordering(self) -> List[Any]:
        return self.sort.ordering()

    def apply(self, queryset: QuerySet) -> QuerySet:
        queryset = queryset.filter(self.where())
        if self.sort.key is SortKey.PRIORITY:
            queryset = queryset.annotate(priority_rank=priority_rank())
        return queryset.order_by(*self.ordering())
