from types import SimpleNamespace

from django.test import SimpleTestCase

from todos.exceptions import GENERIC_FAILURE, failure_message
from todos.views import TodoDetailView, TodoListView, TodoStatsView


class FailureMessageTests(SimpleTestCase):
    def test_each_route_method_has_its_own_message(self):
        cases = [
            (TodoListView, "GET", "Failed to fetch todos"),
            (TodoListView, "POST", "Failed to create todo"),
            (TodoListView, "DELETE", "Failed to clear completed todos"),
            (TodoStatsView, "GET", "Failed to fetch stats"),
            (TodoDetailView, "PATCH", "Failed to update todo"),
            (TodoDetailView, "DELETE", "Failed to delete todo"),
        ]
        for view_cls, method, expected in cases:
            with self.subTest(view=view_cls.__name__, method=method):
                self.assertEqual(failure_message(view_cls(), SimpleNamespace(method=method)), expected)

    def test_unlisted_method_or_view_falls_back(self):
        self.assertEqual(failure_message(TodoStatsView(), SimpleNamespace(method="PUT")), GENERIC_FAILURE)
        self.assertEqual(failure_message(None, None), GENERIC_FAILURE)
