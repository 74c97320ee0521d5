"""planlint – structured query plans with static validation.

Build queries as data, catch structural mistakes before they reach SQL.

Public API
----------
``QueryPlanBuilder``
    Fluent builder that assembles a frozen ``QueryPlan``.

``validate``
    Run every lint rule and return a ``ValidationResult``.

``render``
    Validate, then serialise a plan to SQL text for a dialect.

``validate_and_render``
    Parse a JSON plan description, build, validate and render it.

Extensibility
-------------
New dialect compilers can be registered via::

    from planlint.compile.registry import CompilerFactory

    @CompilerFactory.register("duckdb")
    class DuckDBCompiler(SQLCompiler):
        ...
"""

from __future__ import annotations

from planlint.build.builder import QueryPlanBuilder
from planlint.build.description import PlanDescription, parse_description, plan_from_json
from planlint.compile import (
    AnsiCompiler,
    CompiledSQL,
    CompilerFactory,
    MySQLCompiler,
    PostgresCompiler,
    QueryRenderer,
    SQLCompiler,
    SQLiteCompiler,
)
from planlint.errors import (
    BuilderError,
    CompilationError,
    DuplicateAliasError,
    ParseError,
    PlanFinalizedError,
    PlanLintError,
    PlanRejectedError,
    UnknownAliasError,
)
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
from planlint.validate.validator import PlanValidator, validate

__all__ = [
    # Core pipeline
    "render",
    "validate",
    "validate_and_render",
    # Building
    "QueryPlanBuilder",
    "PlanDescription",
    "parse_description",
    "plan_from_json",
    # Plan types
    "QueryPlan",
    "TableRef",
    "JoinClause",
    "Predicate",
    "AggregateSpec",
    "SelectColumn",
    "ComputedColumn",
    "OrderBySpec",
    "JoinKind",
    "PredicateOp",
    "AggregateFn",
    "ArithmeticOp",
    "SortDirection",
    # Validation
    "PlanValidator",
    "ValidationResult",
    "Issue",
    "IssueCode",
    "Severity",
    # Configuration
    "LintConfig",
    "LintConfigBuilder",
    # Rendering
    "QueryRenderer",
    "CompiledSQL",
    "CompilerFactory",
    "SQLCompiler",
    "AnsiCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    # Errors
    "PlanLintError",
    "ParseError",
    "BuilderError",
    "DuplicateAliasError",
    "UnknownAliasError",
    "PlanFinalizedError",
    "PlanRejectedError",
    "CompilationError",
]


def render(
    plan: QueryPlan,
    dialect: str | None = None,
    config: LintConfig | None = None,
) -> str:
    """Validate ``plan`` and render it to SQL text.

    Args:
        plan: A finished plan.
        dialect: Registered compiler target; defaults to ``config.dialect``.
        config: Optional lint configuration; defaults to ``LintConfig()``.

    Returns:
        The rendered SQL string. Warnings do not block rendering.

    Raises:
        PlanRejectedError: If validation reports any error-severity issue.
        CompilationError: If ``dialect`` is not registered.
    """
    config = config or LintConfig()
    result = PlanValidator(config).validate(plan)
    if not result.ok:
        raise PlanRejectedError(result.errors)
    compiler = CompilerFactory.create(dialect or config.dialect)
    return QueryRenderer(compiler).render(plan)


def validate_and_render(plan_json: str, config: LintConfig | None = None) -> str:
    """Parse, build, validate and render a JSON plan description::

        sql = planlint.validate_and_render(
            description,
            config=LintConfig.builder().dialect("postgres").build(),
        )

    Raises:
        ParseError: If ``plan_json`` is not a valid plan description.
        BuilderError: (or subclass) if the description replays badly.
        PlanRejectedError: If validation reports errors.
    """
    return render(plan_from_json(plan_json), config=config)
