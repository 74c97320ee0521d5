"""planlint validation layer."""
from planlint.validate.validator import PlanValidator, validate

__all__ = ["PlanValidator", "validate"]
