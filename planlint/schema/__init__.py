"""planlint schema models: QueryPlan, issues, and configuration."""
from planlint.schema.column_reference import ColumnReference
from planlint.schema.config import LintConfig, LintConfigBuilder
from planlint.schema.expressions import (
    AggregateFn,
    ArithmeticOp,
    JoinKind,
    PredicateOp,
    SortDirection,
)
from planlint.schema.issues import Issue, IssueCode, Severity, ValidationResult
from planlint.schema.query_plan import (
    AggregateSpec,
    ComputedColumn,
    JoinClause,
    OrderBySpec,
    Predicate,
    QueryPlan,
    SelectColumn,
    TableRef,
)

__all__ = [
    "AggregateFn",
    "AggregateSpec",
    "ArithmeticOp",
    "ColumnReference",
    "ComputedColumn",
    "Issue",
    "IssueCode",
    "JoinClause",
    "JoinKind",
    "LintConfig",
    "LintConfigBuilder",
    "OrderBySpec",
    "Predicate",
    "PredicateOp",
    "QueryPlan",
    "SelectColumn",
    "Severity",
    "SortDirection",
    "TableRef",
    "ValidationResult",
]
