"""Aggregation validator.

Validates GROUP BY / HAVING pairing rules: every plain selected column of
an aggregate query must be grouped, and HAVING may only reference grouped
or aggregated values.
"""

from __future__ import annotations

from planlint.schema.issues import Issue, IssueCode
from planlint.schema.query_plan import QueryPlan


class AggregateValidator:
    """Produces ``GroupByCompleteness`` and ``HavingWithoutAggregate`` issues."""

    def group_by_completeness(self, plan: QueryPlan) -> list[Issue]:
        if not plan.is_aggregate_query:
            return []
        grouped = {plan.qualify(c) for c in plan.group_by}
        listing = ", ".join(plan.group_by) or "nothing"

        issues: list[Issue] = []
        for index, col in enumerate(plan.columns):
            if plan.qualify(col.column) not in grouped:
                issues.append(_missing_group(col.column, listing, f"columns[{index}]"))
        for index, expr in enumerate(plan.computed):
            for column in expr.columns():
                if plan.qualify(column) not in grouped:
                    issues.append(_missing_group(column, listing, f"computed[{index}]"))
        return issues

    def having_without_aggregate(self, plan: QueryPlan) -> list[Issue]:
        if not plan.having:
            return []
        aggregate_aliases = {a.alias for a in plan.aggregates if a.alias}
        grouped_aliases = {c.alias for c in plan.columns if c.alias and plan.is_grouped(c.column)}

        issues: list[Issue] = []
        for index, pred in enumerate(plan.having):
            if pred.fn is not None:
                continue
            if pred.column in aggregate_aliases or pred.column in grouped_aliases:
                continue
            if plan.is_grouped(pred.column):
                continue
            covering = plan.aggregates_over(pred.column)
            if len(covering) == 1:
                continue
            if covering:
                fns = ", ".join(agg.fn.value for agg in covering)
                message = (
                    f"HAVING references '{pred.column}', which is aggregated more than "
                    f"once ({fns}); set 'fn' or use an aggregate alias."
                )
            else:
                message = (
                    f"HAVING references '{pred.column}', which is neither "
                    "aggregated nor listed in GROUP BY."
                )
            issues.append(
                Issue(
                    code=IssueCode.HAVING_WITHOUT_AGGREGATE,
                    message=message,
                    location=f"having[{index}]",
                )
            )
        return issues


def _missing_group(column: str, listing: str, location: str) -> Issue:
    return Issue(
        code=IssueCode.GROUP_BY_COMPLETENESS,
        message=(
            f"Column '{column}' is selected without an aggregate but is not in "
            f"GROUP BY (grouped: {listing})."
        ),
        location=location,
    )
