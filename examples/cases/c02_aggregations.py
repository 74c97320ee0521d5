"""Category 02 - GROUP BY, HAVING and outer-join aggregation."""
from __future__ import annotations

from examples._case import Case
from planlint import IssueCode

CASES: list[Case] = [
    # ------------------------------------------------------------------
    Case(
        id="c02_01",
        category="aggregations",
        question="Which work orders cost more than 300 in total?",
        description={
            "tables": [{"name": "workorder", "alias": "wo"}],
            "columns": [{"column": "wo.WorkOrderID"}],
            "aggregates": [{"fn": "SUM", "column": "wo.ActualCost", "alias": "total_cost"}],
            "group_by": ["wo.WorkOrderID"],
            "having": [{"column": "wo.ActualCost", "op": ">", "value": 300, "fn": "SUM"}],
            "order_by": [{"column": "total_cost", "direction": "DESC"}],
        },
    ),
    # ------------------------------------------------------------------
    Case(
        id="c02_02",
        category="aggregations",
        question="How many work orders ran at each location?",
        notes="LocationName is selected but only LocationID is grouped.",
        description={
            "tables": [{"name": "workorderrouting", "alias": "wr"}],
            "joins": [{"kind": "INNER", "left": "wr", "table": "location", "alias": "l",
                       "left_key": "wr.LocationID", "right_key": "l.LocationID"}],
            "columns": [{"column": "l.LocationID"}, {"column": "l.Name"}],
            "aggregates": [{"fn": "COUNT", "column": "wr.WorkOrderID", "alias": "orders"}],
            "group_by": ["l.LocationID"],
        },
        expect_ok=False,
        expect_codes=[IssueCode.GROUP_BY_COMPLETENESS],
    ),
    # ------------------------------------------------------------------
    Case(
        id="c02_03",
        category="aggregations",
        question="How many special-offer categories apply to each product sold?",
        notes=(
            "LEFT JOIN keeps order lines without an offer; counting offer "
            "categories without a NULL guard is flagged as a warning only."
        ),
        description={
            "tables": [{"name": "salesorderdetail", "alias": "sod"}],
            "joins": [{"kind": "LEFT", "left": "sod", "table": "specialoffer",
                       "alias": "spec_offer", "left_key": "sod.SpecialOfferID",
                       "right_key": "spec_offer.SpecialOfferID"}],
            "columns": [{"column": "sod.ProductID"}],
            "aggregates": [{"fn": "COUNT_DISTINCT", "column": "spec_offer.Category",
                            "alias": "categories"}],
            "group_by": ["sod.ProductID"],
        },
        expect_codes=[IssueCode.AMBIGUOUS_OUTER_JOIN],
    ),
]
