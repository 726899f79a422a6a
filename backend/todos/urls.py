from django.urls import path, re_path

from . import pages, views

# API routes answer with or without a trailing slash
api_urlpatterns = [
    re_path(r"^todos/?$", views.TodoListView.as_view(), name="todo-list"),
    re_path(r"^todos/stats/?$", views.TodoStatsView.as_view(), name="todo-stats"),
    re_path(r"^todos/(?P<pk>[^/]+)/?$", views.TodoDetailView.as_view(), name="todo-detail"),
]

page_urlpatterns = [
    path("", pages.index, name="index"),
    path("todos/create", pages.create, name="page-create"),
    path("todos/clear", pages.clear_completed, name="page-clear"),
    path("todos/<str:pk>/toggle", pages.toggle, name="page-toggle"),
    path("todos/<str:pk>/delete", pages.delete, name="page-delete"),
]
