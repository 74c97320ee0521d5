"""SQLite dialect compiler."""
from __future__ import annotations

from planlint.compile.base import SQLCompiler


class SQLiteCompiler(SQLCompiler):
    """Compiles QueryPlan to SQLite-flavoured SQL.

    Parameter style: ``:name`` – compatible with Python's built-in
    ``sqlite3`` named-parameter execution (``cursor.execute(sql, dict)``).

    SQLite has no boolean literals before 3.23; booleans render as 1 / 0.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def param_placeholder(self, name: str) -> str:
        return f":{name}"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'

    def quote_literal(self, value: object) -> str:
        if isinstance(value, bool):
            return "1" if value else "0"
        return super().quote_literal(value)
