"""Validation issue records returned by ``PlanValidator``."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class IssueCode(str, Enum):
    """Stable, searchable rule identifiers (in evaluation order)."""

    DANGLING_JOIN_KEY = "DanglingJoinKey"
    AMBIGUOUS_OUTER_JOIN = "AmbiguousOuterJoin"
    GROUP_BY_COMPLETENESS = "GroupByCompleteness"
    HAVING_WITHOUT_AGGREGATE = "HavingWithoutAggregate"
    MALFORMED_IDENTIFIER = "MalformedIdentifier"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Issue(BaseModel):
    """One structural problem found in a plan.

    Attributes:
        code: Rule that produced the issue.
        severity: ``error`` blocks rendering; ``warning`` does not.
        message: Human-readable description.
        location: Path of the offending plan element, e.g. ``joins[1].left_key``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: IssueCode
    severity: Severity = Severity.ERROR
    message: str
    location: str

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.code.value} at {self.location}: {self.message}"


class ValidationResult(BaseModel):
    """Outcome of validating one plan.

    ``ok`` is true when no issue has ``error`` severity; warnings are still
    listed in ``issues``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ok: bool
    issues: tuple[Issue, ...] = ()

    @classmethod
    def from_issues(cls, issues: list[Issue]) -> ValidationResult:
        ok = not any(issue.severity is Severity.ERROR for issue in issues)
        return cls(ok=ok, issues=tuple(issues))

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    def codes(self) -> list[IssueCode]:
        """Issue codes in report order (duplicates kept)."""
        return [i.code for i in self.issues]
