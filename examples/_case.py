"""Case dataclass: describes one example scenario."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from planlint import IssueCode


@dataclass
class Case:
    """A single named example scenario.

    Attributes:
        id: Unique identifier, e.g. ``"c01_01"``.
        category: Human-readable category, e.g. ``"joins"``.
        question: The reporting question the plan answers.
        description: JSON-ready plan description (see ``PlanDescription``).
        expect_ok: Whether the plan should pass validation.
        expect_codes: Issue codes the validator should report, in order.
        notes: Free-form explanation of what makes this case interesting.
    """

    id: str
    category: str
    question: str
    description: dict[str, Any]
    expect_ok: bool = True
    expect_codes: list[IssueCode] = field(default_factory=list)
    notes: str = ""
