"""Fluent, fail-fast builder for :class:`~planlint.schema.query_plan.QueryPlan`.

``QueryPlanBuilder`` owns a private draft of the plan.  Every append method
checks its arguments *before* touching the draft, so a call that raises
leaves the builder exactly as it was.  ``build()`` freezes the draft into an
immutable plan; the builder refuses further mutation afterwards::

    plan = (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_column("wo.WorkOrderID")
        .add_aggregate("SUM", "wo.ActualCost", "total_cost")
        .set_group_by("wo.WorkOrderID")
        .set_having(Predicate(column="wo.ActualCost", op=">", value=300, fn="SUM"))
        .build()
    )

Join keys are stored verbatim.  Whether they name the right tables is a
structural question answered by :class:`~planlint.validate.validator.PlanValidator`
(``DanglingJoinKey``), so the builder never rejects them.
"""
from __future__ import annotations

import logging
from typing import Any, Union

from planlint.errors import DuplicateAliasError, PlanFinalizedError, UnknownAliasError
from planlint.schema.column_reference import ColumnReference
from planlint.schema.expressions import AggregateFn, ArithmeticOp, JoinKind, PredicateOp
from planlint.schema.query_plan import (
    AggregateSpec,
    ComputedColumn,
    JoinClause,
    OrderBySpec,
    Predicate,
    QueryPlan,
    Scalar,
    SelectColumn,
    TableRef,
)

logger = logging.getLogger(__name__)

#: Accepted shapes for ``set_having`` items.
PredicateLike = Union[Predicate, tuple, dict]

#: Accepted shapes for ``set_order_by`` items.
OrderByLike = Union[OrderBySpec, tuple, str, dict]


class QueryPlanBuilder:
    """Accumulates tables, joins, select items, filters, grouping and ordering.

    All append methods return ``self`` for chaining.

    Raises (from any append method):
        DuplicateAliasError: A table alias is already bound.
        UnknownAliasError: A qualified column or join side names an alias
            that has not been registered.
        PlanFinalizedError: ``build()`` has already been called.
    """

    def __init__(self) -> None:
        self._tables: list[TableRef] = []
        self._joins: list[JoinClause] = []
        self._columns: list[SelectColumn] = []
        self._computed: list[ComputedColumn] = []
        self._aggregates: list[AggregateSpec] = []
        self._where: list[Predicate] = []
        self._group_by: tuple[str, ...] = ()
        self._having: tuple[Predicate, ...] = ()
        self._order_by: tuple[OrderBySpec, ...] = ()
        self._plan: QueryPlan | None = None

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def add_table(self, name: str, alias: str | None = None) -> QueryPlanBuilder:
        """Register a FROM source."""
        self._ensure_open("add_table")
        table = TableRef(name=name, alias=alias)
        self._ensure_alias_free(table)
        self._tables.append(table)
        logger.debug("Registered table %s AS %s", table.name, table.ref)
        return self

    def add_join(
        self,
        kind: JoinKind | str,
        left: str,
        table: str,
        alias: str | None = None,
        *,
        left_key: str,
        right_key: str,
    ) -> QueryPlanBuilder:
        """Join ``table`` onto the already-registered alias ``left``.

        Args:
            kind: ``INNER`` or ``LEFT``.
            left: Alias of a registered table.
            table: Name of the table introduced by the join.
            alias: Alias for the joined table (defaults to ``table``).
            left_key: ``alias.column`` expected on the left side.
            right_key: ``alias.column`` expected on the joined table.
        """
        self._ensure_open("add_join")
        left_ref = self._lookup(left, "JOIN left side")
        right_ref = TableRef(name=table, alias=alias)
        self._ensure_alias_free(right_ref)
        join = JoinClause(
            kind=JoinKind(kind.upper()),
            left=left_ref,
            right=right_ref,
            left_key=left_key,
            right_key=right_key,
        )
        self._joins.append(join)
        logger.debug(
            "Registered %s JOIN %s AS %s ON %s = %s",
            join.kind.value, right_ref.name, right_ref.ref, left_key, right_key,
        )
        return self

    # ------------------------------------------------------------------
    # Select list
    # ------------------------------------------------------------------

    def add_column(self, column: str, alias: str | None = None) -> QueryPlanBuilder:
        self._ensure_open("add_column")
        self._check_column(column, "SELECT")
        self._columns.append(SelectColumn(column=column, alias=alias))
        return self

    def add_computed(
        self,
        left: str,
        op: ArithmeticOp | str,
        right: str | int | float,
        alias: str | None = None,
    ) -> QueryPlanBuilder:
        """Add an arithmetic select item such as ``sod.UnitPrice * 0.9``."""
        self._ensure_open("add_computed")
        expr = ComputedColumn(left=left, op=ArithmeticOp(op), right=right, alias=alias)
        for column in expr.columns():
            self._check_column(column, "SELECT")
        self._computed.append(expr)
        return self

    def add_aggregate(
        self,
        fn: AggregateFn | str,
        column: str,
        alias: str | None = None,
    ) -> QueryPlanBuilder:
        self._ensure_open("add_aggregate")
        self._check_column(column, "aggregate")
        agg = AggregateSpec(fn=AggregateFn(fn.upper()), column=column, alias=alias)
        self._aggregates.append(agg)
        return self

    # ------------------------------------------------------------------
    # Filters, grouping, ordering
    # ------------------------------------------------------------------

    def add_predicate(
        self,
        column: str,
        op: PredicateOp | str,
        value: Scalar | None = None,
    ) -> QueryPlanBuilder:
        """Append a WHERE predicate; predicates are ANDed together."""
        self._ensure_open("add_predicate")
        self._check_column(column, "WHERE")
        self._where.append(Predicate(column=column, op=PredicateOp(op), value=value))
        return self

    def set_group_by(self, *columns: str) -> QueryPlanBuilder:
        """Replace the GROUP BY list."""
        self._ensure_open("set_group_by")
        for column in columns:
            self._check_column(column, "GROUP BY")
        self._group_by = tuple(columns)
        return self

    def set_having(self, *predicates: PredicateLike) -> QueryPlanBuilder:
        """Replace the HAVING list.

        Items may be :class:`Predicate` instances, ``(column, op, value)`` /
        ``(column, op, value, fn)`` tuples, or dicts of ``Predicate`` fields.
        """
        self._ensure_open("set_having")
        having = tuple(_coerce_predicate(p) for p in predicates)
        for pred in having:
            self._check_column(pred.column, "HAVING")
        self._having = having
        return self

    def set_order_by(self, *items: OrderByLike) -> QueryPlanBuilder:
        """Replace the ORDER BY list.

        Items may be :class:`OrderBySpec`, ``(column, direction)`` tuples,
        bare column strings (ascending), or dicts.
        """
        self._ensure_open("set_order_by")
        order_by = tuple(_coerce_order_by(item) for item in items)
        for item in order_by:
            self._check_column(item.column, "ORDER BY")
        self._order_by = order_by
        return self

    # ------------------------------------------------------------------
    # Finalisation
    # ------------------------------------------------------------------

    def build(self) -> QueryPlan:
        """Freeze and return the plan. Repeated calls return the same plan."""
        if self._plan is None:
            self._plan = QueryPlan(
                tables=tuple(self._tables),
                joins=tuple(self._joins),
                columns=tuple(self._columns),
                computed=tuple(self._computed),
                aggregates=tuple(self._aggregates),
                where=tuple(self._where),
                group_by=self._group_by,
                having=self._having,
                order_by=self._order_by,
            )
            logger.debug(
                "Built plan with %d table(s) and %d join(s)",
                len(self._tables), len(self._joins),
            )
        return self._plan

    @property
    def finalized(self) -> bool:
        return self._plan is not None

    @property
    def aliases(self) -> list[str]:
        """Aliases registered so far, in registration order."""
        return [t.ref for t in self._all_tables()]

    # ------------------------------------------------------------------
    # Internal checks
    # ------------------------------------------------------------------

    def _all_tables(self) -> list[TableRef]:
        return [*self._tables, *(j.right for j in self._joins)]

    def _ensure_open(self, operation: str) -> None:
        if self._plan is not None:
            raise PlanFinalizedError(operation)

    def _ensure_alias_free(self, table: TableRef) -> None:
        for existing in self._all_tables():
            if existing.ref == table.ref:
                raise DuplicateAliasError(table.ref, existing.name, table.name)

    def _lookup(self, alias: str, where: str) -> TableRef:
        for table in self._all_tables():
            if table.ref == alias:
                return table
        raise UnknownAliasError(alias, self.aliases, where)

    def _check_column(self, column: str, where: str) -> None:
        # Unqualified names may be output aliases or single-table columns.
        ref = ColumnReference.parse(column)
        if ref.qualified:
            self._lookup(ref.table, where)


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _coerce_predicate(item: Any) -> Predicate:
    if isinstance(item, Predicate):
        return item
    if isinstance(item, dict):
        return Predicate.model_validate(item)
    column, op, *rest = item
    value = rest[0] if rest else None
    fn = rest[1] if len(rest) > 1 else None
    return Predicate(column=column, op=PredicateOp(op), value=value, fn=fn)


def _coerce_order_by(item: Any) -> OrderBySpec:
    if isinstance(item, OrderBySpec):
        return item
    if isinstance(item, str):
        return OrderBySpec(column=item)
    if isinstance(item, dict):
        return OrderBySpec.model_validate(item)
    column, direction = item
    return OrderBySpec(column=column, direction=direction)
