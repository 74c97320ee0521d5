"""Join structure validator.

Checks that every join key names the table on its own side of the join,
and warns when a LEFT JOIN's nullable columns flow into aggregates or
arithmetic without an explicit NULL guard.
"""

from __future__ import annotations

from planlint.schema.column_reference import ColumnReference
from planlint.schema.expressions import NULL_OPS
from planlint.schema.issues import Issue, IssueCode, Severity
from planlint.schema.query_plan import JoinClause, QueryPlan, TableRef


class JoinValidator:
    """Produces ``DanglingJoinKey`` and ``AmbiguousOuterJoin`` issues."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def dangling_join_keys(self, plan: QueryPlan) -> list[Issue]:
        """Report join keys that do not belong to the join's own tables.

        A key is dangling when it is unqualified, when its alias is not yet
        in scope at that join (never registered, or registered by a later
        join), or when it names a registered table other than the side it
        is declared for.
        """
        issues: list[Issue] = []
        for index, join in enumerate(plan.joins):
            scope = plan.scope_at_join(index)
            for side, key, table in (
                ("left_key", join.left_key, join.left),
                ("right_key", join.right_key, join.right),
            ):
                message = self._check_key(key, table, scope, join)
                if message:
                    issues.append(
                        Issue(
                            code=IssueCode.DANGLING_JOIN_KEY,
                            message=message,
                            location=f"joins[{index}].{side}",
                        )
                    )
        return issues

    def ambiguous_outer_joins(self, plan: QueryPlan) -> list[Issue]:
        """Warn about aggregates, HAVING aggregates and arithmetic over unguarded
        LEFT JOIN columns."""
        unguarded = [a for a in plan.outer_joined_aliases() if not _has_null_guard(plan, a)]
        if not unguarded:
            return []

        issues: list[Issue] = []
        for index, agg in enumerate(plan.aggregates):
            ref = ColumnReference.parse(agg.column)
            if ref.is_star or ref.table not in unguarded:
                continue
            issues.append(
                _outer_join_warning(
                    f"{agg.fn.value}({agg.column})", ref.table, f"aggregates[{index}]"
                )
            )
        for index, expr in enumerate(plan.computed):
            for column in expr.columns():
                ref = ColumnReference.parse(column)
                if ref.table in unguarded:
                    issues.append(
                        _outer_join_warning(
                            f"{expr.left} {expr.op.value} {expr.right}",
                            ref.table,
                            f"computed[{index}]",
                        )
                    )
                    break
        for index, pred in enumerate(plan.having):
            if pred.fn is None:
                continue
            ref = ColumnReference.parse(pred.column)
            if ref.is_star or ref.table not in unguarded:
                continue
            issues.append(
                _outer_join_warning(
                    f"{pred.fn.value}({pred.column})", ref.table, f"having[{index}]"
                )
            )
        return issues

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_key(
        key: str,
        table: TableRef,
        scope: frozenset[str],
        join: JoinClause,
    ) -> str | None:
        ref = ColumnReference.parse(key)
        if not ref.qualified:
            return (
                f"Join key '{key}' is not qualified with a table alias; "
                f"expected '{table.ref}.<column>'."
            )
        if ref.table not in scope:
            return (
                f"Join key '{key}' references '{ref.table}', which is not a "
                f"registered table at this join (in scope: {', '.join(sorted(scope))})."
            )
        if ref.table != table.ref:
            return (
                f"Join key '{key}' belongs to '{ref.table}', but this side of the "
                f"{join.kind.value} JOIN of '{join.right.ref}' is '{table.ref}'."
            )
        return None


def _has_null_guard(plan: QueryPlan, alias: str) -> bool:
    for pred in plan.where:
        if pred.op in NULL_OPS and ColumnReference.parse(pred.column).table == alias:
            return True
    return False


def _outer_join_warning(expr: str, alias: str, location: str) -> Issue:
    return Issue(
        code=IssueCode.AMBIGUOUS_OUTER_JOIN,
        severity=Severity.WARNING,
        message=(
            f"'{expr}' reads '{alias}', the nullable side of a LEFT JOIN, with no "
            f"IS NULL / IS NOT NULL predicate on '{alias}'; unmatched rows "
            "contribute NULLs and may skew the result."
        ),
        location=location,
    )
