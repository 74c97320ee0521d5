"""Core QueryPlan → SQL rendering logic.

``QueryRenderer`` is the top-level orchestrator.  It wires together the
clause-level sub-builders and drives the rendering algorithm.  All
dialect-specific behaviour is delegated to the injected ``SQLCompiler``.

Sub-builder hierarchy
---------------------
QueryRenderer
  ├── ExpressionBuilder     (expression_builder.py)
  ├── SelectClauseBuilder   (clause_builders.py)
  ├── FromClauseBuilder     (clause_builders.py)
  ├── JoinClauseBuilder     (clause_builders.py)
  └── OrderByClauseBuilder  (clause_builders.py)

Clause order is fixed: SELECT, FROM, joins in append order, WHERE (ANDed),
GROUP BY, HAVING (ANDed), ORDER BY - one clause per line.  The output is a
pure function of the plan and the dialect.
"""

from __future__ import annotations

import logging

from planlint.compile.base import CompiledSQL, SQLCompiler
from planlint.compile.clause_builders import (
    FromClauseBuilder,
    JoinClauseBuilder,
    OrderByClauseBuilder,
    SelectClauseBuilder,
)
from planlint.compile.expression_builder import ExpressionBuilder, RuntimeContext
from planlint.schema.query_plan import QueryPlan

logger = logging.getLogger(__name__)


class QueryRenderer:
    """Serialises a validated QueryPlan to SQL text.

    The renderer does not validate; callers should only pass plans whose
    ``ValidationResult.ok`` is true (see :func:`planlint.render`).

    Args:
        compiler: Dialect-specific compiler instance.
    """

    def __init__(self, compiler: SQLCompiler) -> None:
        self._compiler = compiler

    @property
    def dialect(self) -> str:
        return self._compiler.dialect_name

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, plan: QueryPlan) -> str:
        """Render ``plan`` with literals inlined."""
        return self._build(plan, RuntimeContext(inline=True))

    def compile(self, plan: QueryPlan) -> CompiledSQL:
        """Render ``plan`` with literals bound as named parameters.

        Returns:
            :class:`~planlint.compile.base.CompiledSQL` with ``sql`` string
            and literal ``params``.
        """
        runtime = RuntimeContext(inline=False)
        sql = self._build(plan, runtime)
        return CompiledSQL(sql=sql, params=runtime.params, dialect=self.dialect)

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _build(self, plan: QueryPlan, runtime: RuntimeContext) -> str:
        expr = ExpressionBuilder(self._compiler, runtime, plan)
        parts: list[str] = []

        parts.append(SelectClauseBuilder(self._compiler, expr).build(plan))
        parts.append(FromClauseBuilder(self._compiler).build(plan))

        join_builder = JoinClauseBuilder(self._compiler, expr)
        for join in plan.joins:
            parts.append(join_builder.build(join))

        if plan.where:
            preds = " AND ".join(expr.predicate(p) for p in plan.where)
            parts.append(f"WHERE {preds}")

        if plan.group_by:
            parts.append(f"GROUP BY {', '.join(expr.column(c) for c in plan.group_by)}")

        if plan.having:
            preds = " AND ".join(expr.predicate(p, having=True) for p in plan.having)
            parts.append(f"HAVING {preds}")

        if plan.order_by:
            parts.append(OrderByClauseBuilder(expr).build(plan.order_by))

        sql = "\n".join(parts)
        logger.debug("Rendered %s SQL (%d clause lines)", self.dialect, len(parts))
        return sql
