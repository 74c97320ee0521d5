"""Clause-level SQL builders.

Each class handles exactly one SQL clause and delegates expression
rendering to the shared :class:`ExpressionBuilder`.

Classes
-------
SelectClauseBuilder   - ``SELECT <items>``
FromClauseBuilder     - ``FROM <tables>``
JoinClauseBuilder     - ``<kind> JOIN … ON …``
OrderByClauseBuilder  - ``ORDER BY …``
"""
from __future__ import annotations

from planlint.compile.base import SQLCompiler
from planlint.compile.expression_builder import ExpressionBuilder
from planlint.errors import CompilationError
from planlint.schema.query_plan import JoinClause, OrderBySpec, QueryPlan, TableRef


def _table_sql(compiler: SQLCompiler, table: TableRef) -> str:
    quote = compiler.quote_identifier
    if table.alias and table.alias != table.name:
        return f"{quote(table.name)} AS {quote(table.alias)}"
    return quote(table.name)


class SelectClauseBuilder:
    """Builds the ``SELECT …`` clause: columns, computed items, aggregates."""

    def __init__(self, compiler: SQLCompiler, expr: ExpressionBuilder) -> None:
        self._compiler = compiler
        self._expr = expr

    def build(self, plan: QueryPlan) -> str:
        items: list[str] = []
        for col in plan.columns:
            items.append(self._aliased(self._expr.column(col.column), col.alias))
        for computed in plan.computed:
            items.append(self._aliased(self._expr.computed(computed), computed.alias))
        for agg in plan.aggregates:
            items.append(self._aliased(self._expr.aggregate(agg), agg.alias))
        if not items:
            return "SELECT *"
        return f"SELECT {', '.join(items)}"

    def _aliased(self, sql: str, alias: str | None) -> str:
        if alias:
            return f"{sql} AS {self._compiler.quote_identifier(alias)}"
        return sql


class FromClauseBuilder:
    """Builds the ``FROM …`` fragment (comma-separated for several sources)."""

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    def build(self, plan: QueryPlan) -> str:
        if not plan.tables:
            raise CompilationError("Plan has no FROM table.", clause="FROM")
        sources = [_table_sql(self._compiler, t) for t in plan.tables]
        return f"FROM {', '.join(sources)}"


class JoinClauseBuilder:
    """Builds a single ``<kind> JOIN … ON …`` fragment.

    The JOIN keyword and ON clause are always emitted, so a join can never be
    rendered as a bare table list.
    """

    def __init__(self, compiler: SQLCompiler, expr: ExpressionBuilder) -> None:
        self._compiler = compiler
        self._expr = expr

    def build(self, join: JoinClause) -> str:
        table_sql = _table_sql(self._compiler, join.right)
        on_sql = f"{self._expr.column(join.left_key)} = {self._expr.column(join.right_key)}"
        return f"{join.kind.value} JOIN {table_sql} ON {on_sql}"


class OrderByClauseBuilder:
    """Builds the ``ORDER BY …`` clause."""

    def __init__(self, expr: ExpressionBuilder) -> None:
        self._expr = expr

    def build(self, items: tuple[OrderBySpec, ...]) -> str:
        parts = [f"{self._expr.order_operand(o.column)} {o.direction.value}" for o in items]
        return f"ORDER BY {', '.join(parts)}"
