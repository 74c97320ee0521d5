"""Pydantic models for the planlint QueryPlan.

A ``QueryPlan`` is the frozen, structured representation of one relational
query prior to text rendering.  Plans are assembled by
:class:`~planlint.build.builder.QueryPlanBuilder`; every record here is
immutable (``frozen=True``) and every sequence is a tuple, so a finished plan
can be validated and rendered from any number of threads.

Column references are ``"alias.column"`` strings (see
:class:`~planlint.schema.column_reference.ColumnReference`).
"""
from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, model_validator

from planlint.schema.column_reference import ColumnReference
from planlint.schema.expressions import (
    COMPARISON_OPS,
    NULL_OPS,
    AggregateFn,
    ArithmeticOp,
    JoinKind,
    PredicateOp,
    SortDirection,
)

_FROZEN = ConfigDict(frozen=True, extra="forbid")

#: Literal values allowed in predicates.
Scalar = Union[str, int, float, bool]


class TableRef(BaseModel):
    """A table bound to an alias within one plan.

    Attributes:
        name: Table name.
        alias: Alias used by column references; defaults to ``name``.
    """

    model_config = _FROZEN

    name: str
    alias: str | None = None

    @property
    def ref(self) -> str:
        """The effective alias (``alias`` or, when absent, ``name``)."""
        return self.alias or self.name


class JoinClause(BaseModel):
    """A single ``<kind> JOIN right ON left_key = right_key`` entry.

    Attributes:
        kind: ``INNER`` or ``LEFT``.
        left: The already-registered table the join hangs off.
        right: The table introduced by this join.
        left_key: ``alias.column`` on the left side.
        right_key: ``alias.column`` on the right side.
    """

    model_config = _FROZEN

    kind: JoinKind = JoinKind.INNER
    left: TableRef
    right: TableRef
    left_key: str
    right_key: str


class Predicate(BaseModel):
    """``column op [value]`` condition used in WHERE and HAVING.

    Attributes:
        column: Column reference or output alias.
        op: Comparison or null-check operator.
        value: Literal operand; required for comparisons, forbidden for
            ``IS NULL`` / ``IS NOT NULL``.
        fn: Optional aggregate applied to ``column`` (HAVING only), e.g.
            ``SUM(wo.ActualCost) > 300``.
    """

    model_config = _FROZEN

    column: str
    op: PredicateOp
    value: Scalar | None = None
    fn: AggregateFn | None = None

    @model_validator(mode="after")
    def _check_value(self) -> Predicate:
        if self.op in NULL_OPS and self.value is not None:
            raise ValueError(f"Operator '{self.op.value}' takes no value.")
        if self.op in COMPARISON_OPS and self.value is None:
            raise ValueError(f"Operator '{self.op.value}' requires a value.")
        return self


class AggregateSpec(BaseModel):
    """An aggregate select item such as ``SUM(wo.ActualCost) AS total``."""

    model_config = _FROZEN

    fn: AggregateFn
    column: str
    alias: str | None = None

    @model_validator(mode="after")
    def _check_star(self) -> AggregateSpec:
        if ColumnReference.parse(self.column).is_star and self.fn is not AggregateFn.COUNT:
            raise ValueError(f"'*' is only valid inside COUNT, not {self.fn.value}.")
        return self


class SelectColumn(BaseModel):
    """A plain (non-aggregated) select item."""

    model_config = _FROZEN

    column: str
    alias: str | None = None


class ComputedColumn(BaseModel):
    """Arithmetic select item: ``left op right``.

    ``right`` is a column reference when given as a string, otherwise a
    numeric literal.
    """

    model_config = _FROZEN

    left: str
    op: ArithmeticOp
    right: Union[str, int, float]
    alias: str | None = None

    def columns(self) -> list[str]:
        """Column references used by this expression."""
        cols = [self.left]
        if isinstance(self.right, str):
            cols.append(self.right)
        return cols


class OrderBySpec(BaseModel):
    """A single ORDER BY item."""

    model_config = _FROZEN

    column: str
    direction: SortDirection = SortDirection.ASC


class QueryPlan(BaseModel):
    """Immutable, ordered description of one query.

    Attributes:
        tables: FROM sources in registration order.
        joins: Join clauses in append order.
        columns: Plain select columns.
        computed: Arithmetic select expressions.
        aggregates: Aggregate select items.
        where: WHERE predicates (ANDed).
        group_by: GROUP BY column references.
        having: HAVING predicates (ANDed).
        order_by: ORDER BY items.
    """

    model_config = _FROZEN

    tables: tuple[TableRef, ...] = ()
    joins: tuple[JoinClause, ...] = ()
    columns: tuple[SelectColumn, ...] = ()
    computed: tuple[ComputedColumn, ...] = ()
    aggregates: tuple[AggregateSpec, ...] = ()
    where: tuple[Predicate, ...] = ()
    group_by: tuple[str, ...] = ()
    having: tuple[Predicate, ...] = ()
    order_by: tuple[OrderBySpec, ...] = ()

    # ------------------------------------------------------------------
    # Domain methods
    # ------------------------------------------------------------------

    def table_refs(self) -> list[TableRef]:
        """Every registered table: FROM sources, then join targets."""
        return [*self.tables, *(join.right for join in self.joins)]

    def aliases(self) -> list[str]:
        """Effective aliases in registration order."""
        return [t.ref for t in self.table_refs()]

    def table_for(self, alias: str) -> TableRef | None:
        """Return the table bound to ``alias``, or ``None``."""
        for table in self.table_refs():
            if table.ref == alias:
                return table
        return None

    def scope_at_join(self, index: int) -> frozenset[str]:
        """Aliases visible to ``joins[index]``: FROM sources plus the right
        sides of every join up to and including ``index``."""
        scope = {t.ref for t in self.tables}
        scope.update(j.right.ref for j in self.joins[: index + 1])
        return frozenset(scope)

    def outer_joined_aliases(self) -> list[str]:
        """Aliases introduced by LEFT joins (their columns may be NULL)."""
        return [j.right.ref for j in self.joins if j.kind is JoinKind.LEFT]

    def aggregated_columns(self) -> frozenset[str]:
        return frozenset(agg.column for agg in self.aggregates)

    def qualify(self, column: str) -> str:
        """Qualify a bare column with the sole alias of a single-table plan."""
        ref = ColumnReference.parse(column)
        aliases = self.aliases()
        if not ref.qualified and len(aliases) == 1:
            return f"{aliases[0]}.{ref.column}"
        return str(ref)

    def is_grouped(self, column: str) -> bool:
        return self.qualify(column) in {self.qualify(c) for c in self.group_by}

    def aggregates_over(self, column: str) -> list[AggregateSpec]:
        """Aggregate select items whose argument is ``column``."""
        target = self.qualify(column)
        return [agg for agg in self.aggregates if self.qualify(agg.column) == target]

    def output_aliases(self) -> frozenset[str]:
        """Aliases given to select items, usable by HAVING / ORDER BY."""
        items = [*self.columns, *self.computed, *self.aggregates]
        return frozenset(item.alias for item in items if item.alias)

    def plain_selected_columns(self) -> list[str]:
        """Non-aggregated column references in the select list."""
        cols = [c.column for c in self.columns]
        for expr in self.computed:
            cols.extend(expr.columns())
        return cols

    @property
    def is_aggregate_query(self) -> bool:
        """True when the plan groups rows or selects an aggregate."""
        return bool(self.group_by or self.aggregates)
