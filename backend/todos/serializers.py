from collections.abc import Mapping
from datetime import date, datetime, time

from rest_framework import serializers

from .models import Priority, Todo

TITLE_REQUIRED = "Title is required"


class TitleField(serializers.CharField):
    """CharField that only accepts real, non-blank strings."""

    default_error_messages = {
        "required": TITLE_REQUIRED,
        "null": TITLE_REQUIRED,
        "blank": TITLE_REQUIRED,
        "invalid": TITLE_REQUIRED,
    }

    def __init__(self, **kwargs):
        kwargs.setdefault("max_length", Todo._meta.get_field("title").max_length)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        # CharField would happily coerce numbers and booleans
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)


class DueDateField(serializers.DateTimeField):
    """ISO-8601 datetime that also accepts a bare `YYYY-MM-DD` date.

    Bare dates mean midnight in the current time zone; an empty string is
    read the same as null.
    """

    def run_validation(self, data=serializers.empty):
        if data == "":
            data = None
        return super().run_validation(data)

    def to_internal_value(self, value):
        if isinstance(value, str) and len(value) == 10:
            try:
                value = datetime.combine(date.fromisoformat(value), time.min)
            except ValueError:
                self.fail("invalid", format="YYYY-MM-DD or ISO-8601 datetime")
        return super().to_internal_value(value)


class TodoSerializer(serializers.ModelSerializer):
    dueDate = serializers.DateTimeField(source="due_date", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Todo
        fields = ["id", "title", "description", "done", "priority", "category",
                  "dueDate", "createdAt", "updatedAt"]
        read_only_fields = ["id", "title", "description", "done", "priority", "category"]


class TodoCreateSerializer(serializers.Serializer):
    title = TitleField()
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False,
                                       allow_blank=True, allow_null=True)
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True,
                                     max_length=100)
    dueDate = DueDateField(source="due_date", required=False, allow_null=True)

    def run_validation(self, data=serializers.empty):
        # a body that is not a JSON object carries no usable title
        if not isinstance(data, Mapping):
            raise serializers.ValidationError({"title": [TITLE_REQUIRED]})
        return super().run_validation(data)


class TodoUpdateSerializer(serializers.Serializer):
    """Partial update payload; `validated_data` only holds the keys that were sent."""

    title = TitleField(required=False)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    done = serializers.BooleanField(required=False)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    category = serializers.CharField(required=False, allow_blank=True, allow_null=True,
                                     max_length=100)
    dueDate = DueDateField(source="due_date", required=False, allow_null=True)
