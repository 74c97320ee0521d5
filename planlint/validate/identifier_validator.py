"""Identifier validator.

Plans built from raw JSON descriptions can carry identifiers with stray
quoting characters (``'vendor'``, ``"v".VendorID``, ```v```) or embedded
whitespace.  The renderer quotes identifiers itself, so any such character
inside a name is a mistake carried over from hand-written SQL.
"""

from __future__ import annotations

from collections.abc import Iterator

from planlint.schema.column_reference import ColumnReference, is_identifier
from planlint.schema.issues import Issue, IssueCode
from planlint.schema.query_plan import QueryPlan


class IdentifierValidator:
    """Produces ``MalformedIdentifier`` issues."""

    def malformed_identifiers(self, plan: QueryPlan) -> list[Issue]:
        issues: list[Issue] = []
        for location, name in _names(plan):
            if not is_identifier(name):
                issues.append(_malformed(name, location))
        for location, column in _columns(plan):
            for part in ColumnReference.parse(column).malformed_parts():
                issues.append(_malformed(part, location))
        return issues


def _names(plan: QueryPlan) -> Iterator[tuple[str, str]]:
    """Yield ``(location, identifier)`` for table names and aliases."""
    for i, table in enumerate(plan.tables):
        yield f"tables[{i}].name", table.name
        if table.alias is not None:
            yield f"tables[{i}].alias", table.alias
    for i, join in enumerate(plan.joins):
        yield f"joins[{i}].table", join.right.name
        if join.right.alias is not None:
            yield f"joins[{i}].alias", join.right.alias
    for field in ("columns", "computed", "aggregates"):
        for i, item in enumerate(getattr(plan, field)):
            if item.alias is not None:
                yield f"{field}[{i}].alias", item.alias


def _columns(plan: QueryPlan) -> Iterator[tuple[str, str]]:
    """Yield ``(location, column reference)`` for every column in the plan."""
    for i, join in enumerate(plan.joins):
        yield f"joins[{i}].left_key", join.left_key
        yield f"joins[{i}].right_key", join.right_key
    for i, col in enumerate(plan.columns):
        yield f"columns[{i}]", col.column
    for i, expr in enumerate(plan.computed):
        for column in expr.columns():
            yield f"computed[{i}]", column
    for i, agg in enumerate(plan.aggregates):
        yield f"aggregates[{i}]", agg.column
    for i, pred in enumerate(plan.where):
        yield f"where[{i}]", pred.column
    for i, column in enumerate(plan.group_by):
        yield f"group_by[{i}]", column
    for i, pred in enumerate(plan.having):
        yield f"having[{i}]", pred.column
    for i, item in enumerate(plan.order_by):
        yield f"order_by[{i}]", item.column


def _malformed(name: str, location: str) -> Issue:
    return Issue(
        code=IssueCode.MALFORMED_IDENTIFIER,
        message=(
            f"Identifier {name!r} is not a bare name; remove quoting characters "
            "and whitespace (identifiers are quoted when the plan is rendered)."
        ),
        location=location,
    )
