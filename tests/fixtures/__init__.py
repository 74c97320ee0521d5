"""Test fixtures: JSON plan descriptions over a manufacturing schema."""

from __future__ import annotations

from pathlib import Path

from planlint.build.description import plan_from_json
from planlint.schema.query_plan import QueryPlan

_FIXTURES_DIR = Path(__file__).parent


def load_description(name: str) -> str:
    """Return the raw JSON of ``<name>.json``."""
    return (_FIXTURES_DIR / f"{name}.json").read_text()


def load_plan(name: str) -> QueryPlan:
    """Build the plan described by ``<name>.json``."""
    return plan_from_json(load_description(name))


def fixture_path(name: str) -> Path:
    return _FIXTURES_DIR / f"{name}.json"
