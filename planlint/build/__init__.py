"""planlint build layer: the plan builder and JSON plan descriptions."""
from planlint.build.builder import QueryPlanBuilder
from planlint.build.description import PlanDescription, parse_description, plan_from_json

__all__ = [
    "PlanDescription",
    "QueryPlanBuilder",
    "parse_description",
    "plan_from_json",
]
