"""Database helpers for case-insensitive text search.

SQLite's LIKE and LOWER() only fold ASCII letters, so a Python-backed
`casefold` SQL function is registered on every SQLite connection and
`Casefold` compiles to it there. Other backends use LOWER().
"""

from django.db.models import Func, TextField


def _casefold(value):
    return value.casefold() if value is not None else None


def register_sqlite_functions(sender, connection, **kwargs):
    """`connection_created` receiver adding `casefold(text)` to SQLite connections."""
    if connection.vendor != "sqlite":
        return
    connection.connection.create_function("casefold", 1, _casefold, deterministic=True)


class Casefold(Func):
    function = "LOWER"
    arity = 1
    output_field = TextField()

    def as_sqlite(self, compiler, connection, **extra_context):
        return super().as_sql(compiler, connection, function="casefold", **extra_context)
