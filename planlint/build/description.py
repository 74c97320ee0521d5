"""JSON plan descriptions.

A plan description is the serialised form of a sequence of builder calls,
used by the CLI and by :func:`planlint.validate_and_render`.  It is parsed
into :class:`PlanDescription` and then *replayed* through a
:class:`~planlint.build.builder.QueryPlanBuilder`, so duplicate or unknown
aliases fail exactly as they would from Python code.

Because descriptions are raw text, identifiers in them can carry stray
quoting characters (``'vendor'``, ```v```); those survive parsing and are
reported by the validator's ``MalformedIdentifier`` rule.
"""
from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from planlint.build.builder import QueryPlanBuilder
from planlint.errors import ParseError
from planlint.schema.expressions import ArithmeticOp, JoinKind, PredicateOp
from planlint.schema.query_plan import (
    AggregateSpec,
    OrderBySpec,
    Predicate,
    QueryPlan,
    Scalar,
    SelectColumn,
)

_FORBID = ConfigDict(extra="forbid")


class TableDescription(BaseModel):
    model_config = _FORBID

    name: str
    alias: str | None = None


class JoinDescription(BaseModel):
    """``{"kind", "left", "table", "alias", "left_key", "right_key"}``."""

    model_config = _FORBID

    kind: JoinKind = JoinKind.INNER
    left: str
    table: str
    alias: str | None = None
    left_key: str
    right_key: str

    @field_validator("kind", mode="before")
    @classmethod
    def _upper_kind(cls, value: object) -> object:
        # Same case rules as QueryPlanBuilder.add_join.
        return value.upper() if isinstance(value, str) else value


class ComputedDescription(BaseModel):
    model_config = _FORBID

    left: str
    op: ArithmeticOp
    right: str | int | float
    alias: str | None = None


class WherePredicate(BaseModel):
    model_config = _FORBID

    column: str
    op: PredicateOp
    value: Scalar | None = None


class PlanDescription(BaseModel):
    """Top-level plan description. All keys are optional."""

    model_config = _FORBID

    tables: list[TableDescription] = Field(default_factory=list)
    joins: list[JoinDescription] = Field(default_factory=list)
    columns: list[SelectColumn] = Field(default_factory=list)
    computed: list[ComputedDescription] = Field(default_factory=list)
    aggregates: list[AggregateSpec] = Field(default_factory=list)
    where: list[WherePredicate] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list)
    having: list[Predicate] = Field(default_factory=list)
    order_by: list[OrderBySpec] = Field(default_factory=list)

    def to_builder(self) -> QueryPlanBuilder:
        """Replay this description through a fresh builder.

        Raises:
            BuilderError: (or subclass) exactly as the equivalent builder
                calls would.
        """
        builder = QueryPlanBuilder()
        for table in self.tables:
            builder.add_table(table.name, table.alias)
        for join in self.joins:
            builder.add_join(
                join.kind,
                join.left,
                join.table,
                join.alias,
                left_key=join.left_key,
                right_key=join.right_key,
            )
        for col in self.columns:
            builder.add_column(col.column, col.alias)
        for expr in self.computed:
            builder.add_computed(expr.left, expr.op, expr.right, expr.alias)
        for agg in self.aggregates:
            builder.add_aggregate(agg.fn, agg.column, agg.alias)
        for pred in self.where:
            builder.add_predicate(pred.column, pred.op, pred.value)
        if self.group_by:
            builder.set_group_by(*self.group_by)
        if self.having:
            builder.set_having(*self.having)
        if self.order_by:
            builder.set_order_by(*self.order_by)
        return builder


def parse_description(raw: str) -> PlanDescription:
    """Parse a JSON plan description.

    Raises:
        ParseError: If ``raw`` is not valid JSON or not a valid description.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON: {exc}", raw=raw) from exc

    try:
        return PlanDescription.model_validate(data)
    except PydanticValidationError as exc:
        raise ParseError(f"Plan description structure is invalid: {exc}", raw=raw) from exc


def plan_from_json(raw: str) -> QueryPlan:
    """Parse ``raw`` and return the built plan.

    Raises:
        ParseError: If the description is malformed, including field values
            the plan models reject (e.g. ``>`` without a value).
        BuilderError: (or subclass) if replaying the description fails.
    """
    description = parse_description(raw)
    try:
        return description.to_builder().build()
    except PydanticValidationError as exc:
        raise ParseError(f"Plan description has invalid values: {exc}", raw=raw) from exc
