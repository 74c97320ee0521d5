"""Column, literal, aggregate and predicate SQL builders.

``ExpressionBuilder`` receives the dialect compiler and a
:class:`RuntimeContext`.  The runtime decides whether literal values are
inlined (``render``) or bound as named parameters (``compile``).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from planlint.compile.base import SQLCompiler
from planlint.schema.column_reference import ColumnReference
from planlint.schema.expressions import NULL_OPS
from planlint.schema.query_plan import AggregateSpec, ComputedColumn, Predicate, QueryPlan


@dataclass
class RuntimeContext:
    """Per-run literal handling.

    Attributes:
        inline: When true, literals are rendered inline; otherwise each
            literal is stored in ``params`` under a unique placeholder name.
        params: Accumulated parameter values (parameterized mode only).
    """

    inline: bool = True
    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    def add_value(self, value: Any, compiler: SQLCompiler) -> str:
        """Return the SQL for a literal (inline text or a placeholder)."""
        if self.inline:
            return compiler.quote_literal(value)
        name = f"param_{self._counter}"
        self._counter += 1
        self.params[name] = value
        return compiler.param_placeholder(name)


class ExpressionBuilder:
    """Builds the SQL fragments shared by every clause builder.

    Args:
        compiler: Dialect-specific compiler.
        runtime: Literal handling for this run.
        plan: The plan being rendered (for alias resolution in HAVING and
            ORDER BY).
    """

    def __init__(self, compiler: SQLCompiler, runtime: RuntimeContext, plan: QueryPlan) -> None:
        self._compiler = compiler
        self._runtime = runtime
        self._plan = plan

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def column(self, ref: str) -> str:
        quote = self._compiler.quote_identifier
        parsed = ColumnReference.parse(ref)
        column_sql = "*" if parsed.is_star else quote(parsed.column)
        if parsed.table is None:
            return column_sql
        return f"{quote(parsed.table)}.{column_sql}"

    def literal(self, value: Any) -> str:
        return self._runtime.add_value(value, self._compiler)

    # ------------------------------------------------------------------
    # Composite expressions
    # ------------------------------------------------------------------

    def aggregate(self, agg: AggregateSpec) -> str:
        return self._compiler.aggregate_call(agg.fn, self.column(agg.column))

    def computed(self, expr: ComputedColumn) -> str:
        if isinstance(expr.right, str):
            right_sql = self.column(expr.right)
        else:
            right_sql = self.literal(expr.right)
        return f"{self.column(expr.left)} {expr.op.value} {right_sql}"

    def predicate(self, pred: Predicate, having: bool = False) -> str:
        """Render ``pred``; HAVING operands are resolved to aggregate calls."""
        target = self._having_operand(pred) if having else self.column(pred.column)
        if pred.op in NULL_OPS:
            return f"{target} {pred.op.value}"
        return f"{target} {pred.op.value} {self.literal(pred.value)}"

    def order_operand(self, column: str) -> str:
        if column in self._plan.output_aliases():
            return self._compiler.quote_identifier(column)
        return self.column(column)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _having_operand(self, pred: Predicate) -> str:
        if pred.fn is not None:
            return self._compiler.aggregate_call(pred.fn, self.column(pred.column))
        for agg in self._plan.aggregates:
            if agg.alias == pred.column:
                return self.aggregate(agg)
        for col in self._plan.columns:
            if col.alias == pred.column:
                return self.column(col.column)
        if self._plan.is_grouped(pred.column):
            return self.column(pred.column)
        covering = self._plan.aggregates_over(pred.column)
        if len(covering) == 1:
            return self.aggregate(covering[0])
        return self.column(pred.column)
