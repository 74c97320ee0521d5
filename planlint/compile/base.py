"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern is used:
- ``SQLCompiler`` defines the dialect hooks the renderer relies on
  (identifier quoting, placeholders, literal formatting, aggregate calls).
- ``AnsiCompiler``, ``PostgresCompiler``, ``SQLiteCompiler`` and
  ``MySQLCompiler`` override the dialect-specific steps.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from planlint.schema.expressions import AggregateFn


@dataclass
class CompiledSQL:
    """The output of a parameterized compilation.

    Attributes:
        sql: The compiled SQL string with named placeholders.
        params: Values for the placeholders, keyed by placeholder name.
        dialect: The target dialect name.
    """

    sql: str
    params: dict[str, Any]
    dialect: str


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers."""

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder string for a named parameter.

        Args:
            name: Parameter name (e.g. ``'param_0'``).

        Returns:
            Dialect-specific placeholder string.
        """

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table, alias, or column name).

        Returns:
            Quoted identifier.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name."""

    def quote_literal(self, value: Any) -> str:
        """Render a scalar as an inline SQL literal."""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float)):
            return repr(value)
        escaped = str(value).replace("'", "''")
        return f"'{escaped}'"

    def aggregate_call(self, fn: AggregateFn, arg_sql: str) -> str:
        """Render an aggregate function call around an already-built argument."""
        if fn is AggregateFn.COUNT_DISTINCT:
            return f"COUNT(DISTINCT {arg_sql})"
        return f"{fn.value}({arg_sql})"
