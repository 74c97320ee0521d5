"""Operator and function enums used across the plan, validator and renderer.

Each enum's value is exactly the SQL keyword (or symbol) it renders to,
except ``AggregateFn.COUNT_DISTINCT`` which renders as ``COUNT(DISTINCT …)``.
"""

from __future__ import annotations

from enum import Enum


class JoinKind(str, Enum):
    """Supported join types."""

    INNER = "INNER"
    LEFT = "LEFT"


class PredicateOp(str, Enum):
    """Predicate operators for WHERE and HAVING."""

    EQ = "="
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"


class AggregateFn(str, Enum):
    """Aggregate functions available to select items and HAVING."""

    COUNT = "COUNT"
    COUNT_DISTINCT = "COUNT_DISTINCT"
    SUM = "SUM"
    AVG = "AVG"


class ArithmeticOp(str, Enum):
    """Binary arithmetic operators for computed select columns."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# ---------------------------------------------------------------------------
# Operator groups (keep frozenset for O(1) membership tests)
# ---------------------------------------------------------------------------

#: Null-check operators: take no value.
NULL_OPS: frozenset[PredicateOp] = frozenset({PredicateOp.IS_NULL, PredicateOp.IS_NOT_NULL})

#: Binary comparison operators: require a value.
COMPARISON_OPS: frozenset[PredicateOp] = frozenset(PredicateOp) - NULL_OPS
