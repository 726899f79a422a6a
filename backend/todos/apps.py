from django.apps import AppConfig
from django.db.backends.signals import connection_created


class TodosConfig(AppConfig):
    name = "todos"

    def ready(self):
        from .db import register_sqlite_functions

        connection_created.connect(register_sqlite_functions,
                                   dispatch_uid="todos.register_sqlite_functions")
