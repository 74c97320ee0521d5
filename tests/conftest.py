"""Shared pytest fixtures for planlint unit tests."""
from __future__ import annotations

import pytest

from planlint.build.builder import QueryPlanBuilder
from planlint.schema.query_plan import Predicate, QueryPlan
from tests.fixtures import load_plan


@pytest.fixture
def vendor_builder() -> QueryPlanBuilder:
    """vendor v joined to vendorcontact vc (open builder)."""
    return (
        QueryPlanBuilder()
        .add_table("vendor", "v")
        .add_join("INNER", "v", "vendorcontact", "vc",
                  left_key="v.VendorID", right_key="vc.VendorID")
    )


@pytest.fixture(scope="session")
def vendor_plan() -> QueryPlan:
    return load_plan("vendor_contacts")


@pytest.fixture(scope="session")
def expensive_work_orders() -> QueryPlan:
    """Work orders whose summed actual cost exceeds 300."""
    return (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_column("wo.WorkOrderID")
        .add_aggregate("SUM", "wo.ActualCost", "total_cost")
        .set_group_by("wo.WorkOrderID")
        .set_having(Predicate(column="wo.ActualCost", op=">", value=300, fn="SUM"))
        .build()
    )


@pytest.fixture(scope="session")
def special_offer_plan() -> QueryPlan:
    return load_plan("special_offers")
