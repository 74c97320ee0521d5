"""Plan validation orchestrator.

``PlanValidator`` is the public entry point.  It wires together the
focused sub-validators and drives them in a fixed order.

Sub-validator hierarchy
-----------------------
PlanValidator
  ├── JoinValidator        (join_validator.py)       - DanglingJoinKey, AmbiguousOuterJoin
  ├── AggregateValidator   (aggregate_validator.py)  - GroupByCompleteness, HavingWithoutAggregate
  └── IdentifierValidator  (identifier_validator.py) - MalformedIdentifier

Every rule runs on every plan and all issues are collected; nothing is
raised.  Validation never mutates the plan, so the same frozen plan always
yields an equal :class:`~planlint.schema.issues.ValidationResult`.
"""
from __future__ import annotations

import logging
from typing import Callable

from planlint.schema.config import LintConfig
from planlint.schema.issues import Issue, IssueCode, Severity, ValidationResult
from planlint.schema.query_plan import QueryPlan
from planlint.validate.aggregate_validator import AggregateValidator
from planlint.validate.identifier_validator import IdentifierValidator
from planlint.validate.join_validator import JoinValidator

logger = logging.getLogger(__name__)

Rule = Callable[[QueryPlan], list[Issue]]


class PlanValidator:
    """Validates a QueryPlan's structure.

    Rules, in evaluation (and report) order:
    1. DanglingJoinKey        – join keys must name their own join side.
    2. AmbiguousOuterJoin     – warning for unguarded LEFT JOIN aggregation.
    3. GroupByCompleteness    – plain selected columns must be grouped.
    4. HavingWithoutAggregate – HAVING must use grouped / aggregated values.
    5. MalformedIdentifier    – identifiers must be bare names.

    Args:
        config: Optional lint configuration; defaults to ``LintConfig()``.
    """

    def __init__(self, config: LintConfig | None = None) -> None:
        self._config = config or LintConfig()
        joins = JoinValidator()
        aggregates = AggregateValidator()
        identifiers = IdentifierValidator()
        self._rules: list[tuple[IssueCode, Rule]] = [
            (IssueCode.DANGLING_JOIN_KEY, joins.dangling_join_keys),
            (IssueCode.AMBIGUOUS_OUTER_JOIN, joins.ambiguous_outer_joins),
            (IssueCode.GROUP_BY_COMPLETENESS, aggregates.group_by_completeness),
            (IssueCode.HAVING_WITHOUT_AGGREGATE, aggregates.having_without_aggregate),
            (IssueCode.MALFORMED_IDENTIFIER, identifiers.malformed_identifiers),
        ]

    @property
    def config(self) -> LintConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, plan: QueryPlan) -> ValidationResult:
        """Run every enabled rule against ``plan`` and collect the issues.

        Args:
            plan: A finished plan (see ``QueryPlanBuilder.build``).

        Returns:
            ``ValidationResult`` with ``ok`` false iff any issue is an error.
        """
        issues: list[Issue] = []
        for code, rule in self._rules:
            if not self._config.is_enabled(code):
                continue
            issues.extend(self._apply_severity(rule(plan)))

        result = ValidationResult.from_issues(issues)
        logger.debug(
            "Validated plan: ok=%s, %d error(s), %d warning(s)",
            result.ok, len(result.errors), len(result.warnings),
        )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _apply_severity(self, issues: list[Issue]) -> list[Issue]:
        if not self._config.warnings_as_errors:
            return issues
        return [
            issue.model_copy(update={"severity": Severity.ERROR})
            if issue.severity is Severity.WARNING
            else issue
            for issue in issues
        ]


def validate(plan: QueryPlan, config: LintConfig | None = None) -> ValidationResult:
    """Shorthand for ``PlanValidator(config).validate(plan)``."""
    return PlanValidator(config).validate(plan)
