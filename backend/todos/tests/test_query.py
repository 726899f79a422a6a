from datetime import timedelta

from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from todos.models import Priority, Todo
from todos.query import Completion, Sort, SortKey, SortOrder, TodoQuery

from .factories import make_todo


class TodoQueryParsingTests(SimpleTestCase):
    def test_empty_params_mean_everything_newest_first(self):
        query = TodoQuery.from_params({})
        self.assertEqual(query, TodoQuery())
        self.assertEqual(query.sort, Sort(SortKey.CREATED_AT, SortOrder.DESC))

    def test_all_values_are_no_constraint(self):
        query = TodoQuery.from_params({"filter": "all", "category": "all", "priority": "all"})
        self.assertIs(query.completion, Completion.ALL)
        self.assertIsNone(query.category)
        self.assertIsNone(query.priority)

    def test_unrecognized_filter_falls_back_to_all(self):
        self.assertIs(TodoQuery.from_params({"filter": "archived"}).completion, Completion.ALL)

    def test_non_string_search_is_ignored(self):
        self.assertIsNone(TodoQuery.from_params({"search": ["a", "b"]}).search)
        self.assertIsNone(TodoQuery.from_params({"search": ""}).search)

    def test_order_defaults_to_desc_for_priority_and_due_date(self):
        self.assertEqual(Sort.parse("priority", None), Sort(SortKey.PRIORITY, SortOrder.DESC))
        self.assertEqual(Sort.parse("dueDate", "sideways"), Sort(SortKey.DUE_DATE, SortOrder.DESC))
        self.assertEqual(Sort.parse("dueDate", "asc"), Sort(SortKey.DUE_DATE, SortOrder.ASC))

    def test_created_at_ignores_order(self):
        self.assertEqual(Sort.parse("createdAt", "asc"), Sort())
        self.assertEqual(Sort.parse("title", "asc"), Sort())

    def test_to_params_round_trips(self):
        params = {"filter": "active", "category": "Work", "priority": "HIGH",
                  "search": "milk", "sortBy": "priority", "order": "asc"}
        query = TodoQuery.from_params(params)
        self.assertEqual(query.to_params(), params)
        self.assertEqual(TodoQuery().to_params(), {})


class TodoQueryFilterTests(TestCase):
    def setUp(self):
        self.milk = make_todo("Buy milk", category="Shopping", priority=Priority.LOW, created_offset=-50)
        self.report = make_todo("Write report", description="Quarterly MILK numbers",
                                category="Work", priority=Priority.HIGH, done=True, created_offset=-40)
        self.gym = make_todo("Gym", category="Health", created_offset=-30)

    def _ids(self, params):
        return [t.pk for t in TodoQuery.from_params(params).apply(Todo.objects.all())]

    def test_active_and_completed_partition_everything(self):
        everything = set(self._ids({}))
        active = set(self._ids({"filter": "active"}))
        completed = set(self._ids({"filter": "completed"}))
        self.assertEqual(active, {self.milk.pk, self.gym.pk})
        self.assertEqual(completed, {self.report.pk})
        self.assertFalse(active & completed)
        self.assertEqual(active | completed, everything)

    def test_category_and_priority_are_exact_matches(self):
        self.assertEqual(self._ids({"category": "Work"}), [self.report.pk])
        self.assertEqual(self._ids({"category": "work"}), [])
        self.assertEqual(self._ids({"priority": "MEDIUM"}), [self.gym.pk])
        self.assertEqual(self._ids({"priority": "SOMEDAY"}), [])

    def test_search_matches_title_or_description_case_insensitively(self):
        """'milk' hits one title and another task's description, nothing else."""
        self.assertEqual(set(self._ids({"search": "milk"})), {self.milk.pk, self.report.pk})
        self.assertEqual(self._ids({"search": "GYM"}), [self.gym.pk])

    def test_filters_combine_with_and(self):
        self.assertEqual(self._ids({"search": "milk", "filter": "active"}), [self.milk.pk])
        self.assertEqual(self._ids({"search": "milk", "category": "Health"}), [])

    def test_default_order_is_newest_first(self):
        self.assertEqual(self._ids({}), [self.gym.pk, self.report.pk, self.milk.pk])
        self.assertEqual(self._ids({"order": "asc"}), [self.gym.pk, self.report.pk, self.milk.pk])


class TodoQuerySortTests(TestCase):
    def _titles(self, params):
        return [t.title for t in TodoQuery.from_params(params).apply(Todo.objects.all())]

    def test_priority_sort_uses_rank_not_alphabet(self):
        make_todo("medium", priority=Priority.MEDIUM, created_offset=-40)
        make_todo("urgent", priority=Priority.URGENT, created_offset=-30)
        make_todo("low", priority=Priority.LOW, created_offset=-20)
        make_todo("high", priority=Priority.HIGH, created_offset=-10)

        self.assertEqual(self._titles({"sortBy": "priority"}), ["urgent", "high", "medium", "low"])
        self.assertEqual(self._titles({"sortBy": "priority", "order": "asc"}),
                         ["low", "medium", "high", "urgent"])

    def test_priority_ties_keep_insertion_order(self):
        make_todo("first", priority=Priority.HIGH, created_offset=-30)
        make_todo("second", priority=Priority.HIGH, created_offset=-20)
        make_todo("third", priority=Priority.HIGH, created_offset=-10)
        self.assertEqual(self._titles({"sortBy": "priority", "order": "desc"}),
                         ["first", "second", "third"])

    def test_due_date_sort_puts_undated_last(self):
        now = timezone.now()
        make_todo("undated", created_offset=-30)
        make_todo("soon", due_date=now + timedelta(days=1), created_offset=-20)
        make_todo("later", due_date=now + timedelta(days=5), created_offset=-10)

        self.assertEqual(self._titles({"sortBy": "dueDate"}), ["later", "soon", "undated"])
        self.assertEqual(self._titles({"sortBy": "dueDate", "order": "asc"}),
                         ["soon", "later", "undated"])


class AccentedSearchTests(TestCase):
    def setUp(self):
        self.school = make_todo("École maternelle", created_offset=-20)
        self.meeting = make_todo("Réunion", description="ÉQUIPE produit", created_offset=-10)
        make_todo("Courses", description="pain, lait")

    def _titles(self, search):
        return [t.title for t in TodoQuery.from_params({"search": search}).apply(Todo.objects.all())]

    def test_lowercase_needle_matches_uppercase_accents(self):
        self.assertEqual(self._titles("école"), ["École maternelle"])
        self.assertEqual(self._titles("équipe"), ["Réunion"])

    def test_uppercase_needle_matches_lowercase_accents(self):
        self.assertEqual(self._titles("RÉUNION"), ["Réunion"])
        self.assertEqual(self._titles("MATERNELLE"), ["École maternelle"])

    def test_like_wildcards_in_needle_are_literal(self):
        self.assertEqual(self._titles("%"), [])
        self.assertEqual(self._titles("_"), [])
