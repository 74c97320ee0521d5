"""Pydantic model for the lint configuration.

``LintConfig`` controls which validation rules run, whether warnings block
rendering, and the default render dialect.  Create it directly or through
the fluent builder::

    from planlint import LintConfig, IssueCode

    config = (
        LintConfig.builder()
        .disable(IssueCode.AMBIGUOUS_OUTER_JOIN)
        .strict()
        .dialect("postgres")
        .build()
    )
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from planlint.schema.issues import IssueCode


class LintConfig(BaseModel):
    """Validator and renderer settings.

    Attributes:
        disabled_rules: Rules that are skipped entirely.
        warnings_as_errors: Promote warning-severity issues to errors.
        dialect: Default target passed to the compiler factory.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    disabled_rules: frozenset[IssueCode] = Field(default_factory=frozenset)
    warnings_as_errors: bool = False
    dialect: str = "ansi"

    def is_enabled(self, code: IssueCode) -> bool:
        return code not in self.disabled_rules

    @classmethod
    def builder(cls) -> LintConfigBuilder:
        """Return a :class:`LintConfigBuilder` starting from the defaults."""
        return LintConfigBuilder()


class LintConfigBuilder:
    """Fluent builder for :class:`LintConfig`.

    Always obtained via :meth:`LintConfig.builder`.
    """

    def __init__(self) -> None:
        self._disabled: set[IssueCode] = set()
        self._warnings_as_errors = False
        self._dialect = "ansi"

    def disable(self, *codes: IssueCode | str) -> LintConfigBuilder:
        """Skip the given rules. Accepts enum members or their string values."""
        for code in codes:
            self._disabled.add(IssueCode(code))
        return self

    def strict(self, enabled: bool = True) -> LintConfigBuilder:
        """Treat warnings as errors."""
        self._warnings_as_errors = enabled
        return self

    def dialect(self, name: str) -> LintConfigBuilder:
        self._dialect = name
        return self

    def build(self) -> LintConfig:
        return LintConfig(
            disabled_rules=frozenset(self._disabled),
            warnings_as_errors=self._warnings_as_errors,
            dialect=self._dialect,
        )
