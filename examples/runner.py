"""planlint examples runner.

Validates (and, when valid, renders) each example Case and checks the
outcome against the case's expectations.

Usage
-----
List all cases::

    python examples/runner.py --list

Run a single case (verbose)::

    python examples/runner.py --case c01_02 -v

Run a category for MySQL::

    python examples/runner.py --case c02 --dialect mysql
"""
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Adjust sys.path so the package is importable when run as a script
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from examples._case import Case
from examples.cases import ALL_CASES

from planlint import LintConfig, PlanLintError, PlanValidator, render
from planlint.build.description import plan_from_json

# ---------------------------------------------------------------------------
# ANSI colours
# ---------------------------------------------------------------------------
_RESET  = "\033[0m"
_GREEN  = "\033[32m"
_RED    = "\033[31m"
_CYAN   = "\033[36m"
_BOLD   = "\033[1m"


@dataclass
class CaseOutcome:
    """What happened when a case was run."""

    case: Case
    ok: bool
    codes: list[str]
    sql: str | None = None
    error: str | None = None

    @property
    def matches(self) -> bool:
        expected = [c.value for c in self.case.expect_codes]
        return self.error is None and self.ok == self.case.expect_ok and self.codes == expected


def run_case(case: Case, dialect: str = "ansi") -> CaseOutcome:
    """Validate one case and render it when it passes."""
    config = LintConfig.builder().dialect(dialect).build()
    try:
        plan = plan_from_json(json.dumps(case.description))
    except PlanLintError as exc:
        return CaseOutcome(case=case, ok=False, codes=[], error=f"{type(exc).__name__}: {exc}")

    result = PlanValidator(config).validate(plan)
    outcome = CaseOutcome(case=case, ok=result.ok, codes=[c.value for c in result.codes()])
    if result.ok:
        outcome.sql = render(plan, config=config)
    return outcome


def _select(prefix: str | None) -> list[Case]:
    if not prefix:
        return ALL_CASES
    return [c for c in ALL_CASES if c.id.startswith(prefix)]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run planlint example cases.")
    parser.add_argument("--list", action="store_true", help="List cases and exit.")
    parser.add_argument("--case", help="Case id or id prefix (e.g. c01).")
    parser.add_argument("--dialect", default="ansi")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    cases = _select(args.case)
    if args.list:
        for case in cases:
            print(f"{case.id}  [{case.category}]  {case.question}")
        return 0

    failures = 0
    for case in cases:
        outcome = run_case(case, args.dialect)
        status = f"{_GREEN}PASS{_RESET}" if outcome.matches else f"{_RED}FAIL{_RESET}"
        failures += not outcome.matches
        print(f"  {_BOLD}{case.id}{_RESET}  {status}  {case.question[:70]}")
        if args.verbose:
            if case.notes:
                print(f"    {case.notes}")
            if outcome.codes:
                print(f"    {_CYAN}[issues]{_RESET} {', '.join(outcome.codes)}")
            if outcome.sql:
                print(f"    {_CYAN}[SQL]{_RESET}\n{outcome.sql}")
            if outcome.error:
                print(f"    {_RED}[ERROR]{_RESET} {outcome.error}")

    print(f"\n{len(cases) - failures}/{len(cases)} cases matched expectations.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
