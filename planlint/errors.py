"""Custom exception hierarchy for planlint.

All public errors inherit from PlanLintError so callers can catch the base
class for any planlint-specific failure.  Validation *issues* are not
exceptions: they are collected into a ``ValidationResult``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from planlint.schema.issues import Issue


class PlanLintError(Exception):
    """Base exception for all planlint errors."""

    code: str = "PLANLINT_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response for CLI / API callers."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class ParseError(PlanLintError):
    """Raised when a plan description cannot be parsed.

    Args:
        message: Human-readable description.
        raw: The raw string that failed to parse.
    """

    code = "PARSE_ERROR"

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class BuilderError(PlanLintError):
    """Raised synchronously by a ``QueryPlanBuilder`` append operation.

    The builder is left in the state it had before the failing call.
    """

    code = "BUILDER_ERROR"


class DuplicateAliasError(BuilderError):
    """Raised when a table alias is registered twice in one plan."""

    code = "DUPLICATE_ALIAS"

    def __init__(self, alias: str, existing_table: str, new_table: str) -> None:
        super().__init__(
            f"Alias '{alias}' is already bound to table '{existing_table}'; "
            f"cannot bind it to '{new_table}'.",
            details={
                "alias": alias,
                "existing_table": existing_table,
                "table": new_table,
            },
        )
        self.alias = alias


class UnknownAliasError(BuilderError):
    """Raised when a join or column references an alias not yet added."""

    code = "UNKNOWN_ALIAS"

    def __init__(self, alias: str, known_aliases: list[str], where: str) -> None:
        super().__init__(
            f"Unknown table alias '{alias}' in {where}.",
            details={
                "alias": alias,
                "known_aliases": known_aliases,
                "where": where,
            },
        )
        self.alias = alias


class PlanFinalizedError(BuilderError):
    """Raised when a builder is mutated after ``build()``."""

    code = "PLAN_FINALIZED"

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cannot call '{operation}' after build(); the plan is frozen.",
            details={"operation": operation},
        )


class PlanRejectedError(PlanLintError):
    """Raised when rendering is requested for a plan that failed validation.

    Args:
        issues: The error-severity issues that blocked rendering.
    """

    code = "PLAN_REJECTED"

    def __init__(self, issues: list[Issue]) -> None:
        codes = sorted({issue.code.value for issue in issues})
        super().__init__(
            f"Plan failed validation with {len(issues)} error(s): {', '.join(codes)}.",
            details={"issues": [issue.model_dump(mode="json") for issue in issues]},
        )
        self.issues = issues


class CompilationError(PlanLintError):
    """Raised when SQL rendering fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The plan clause being rendered when the error occurred.
    """

    code = "COMPILATION_ERROR"

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message, details={"clause": clause} if clause else None)
        self.clause = clause
