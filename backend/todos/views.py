# views.py
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from .query import TodoQuery
from .serializers import TodoCreateSerializer, TodoSerializer, TodoUpdateSerializer
from . import services


class TodoListView(APIView):
    """
    GET    /api/todos  -> filtered, sorted list (filter, category, priority, search, sortBy, order)
    POST   /api/todos  -> create a todo, 201 with the stored record
    DELETE /api/todos  -> delete every completed todo, 204
    """

    failure_messages = {
        "get": "Failed to fetch todos",
        "post": "Failed to create todo",
        "delete": "Failed to clear completed todos",
    }

    def get(self, request):
        query = TodoQuery.from_params(request.query_params)
        todos = services.list_todos(query)
        return Response(TodoSerializer(todos, many=True).data, status=status.HTTP_200_OK)

    def post(self, request):
        serializer = TodoCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        todo = services.create_todo(**serializer.validated_data)
        return Response(TodoSerializer(todo).data, status=status.HTTP_201_CREATED)

    def delete(self, request):
        services.clear_completed()
        return Response(status=status.HTTP_204_NO_CONTENT)


class TodoStatsView(APIView):
    """
    GET /api/todos/stats
    Returns total/completed/active/overdue counts plus a per-priority breakdown.
    """

    failure_messages = {"get": "Failed to fetch stats"}

    def get(self, request):
        return Response(services.compute_stats(), status=status.HTTP_200_OK)


class TodoDetailView(APIView):
    """
    PATCH  /api/todos/<id>  -> partial update, only the keys sent are changed
    DELETE /api/todos/<id>  -> delete one todo, 204
    Unknown ids answer 404.
    """

    failure_messages = {
        "patch": "Failed to update todo",
        "delete": "Failed to delete todo",
    }

    def patch(self, request, pk):
        serializer = TodoUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        todo = services.update_todo(pk, serializer.validated_data)
        return Response(TodoSerializer(todo).data, status=status.HTTP_200_OK)

    def delete(self, request, pk):
        services.delete_todo(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class HealthView(APIView):
    """GET /health, liveness probe."""

    def get(self, request):
        return Response({"status": "ok", "timestamp": timezone.now().isoformat()})
