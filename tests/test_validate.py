"""Unit tests for PlanValidator."""
from __future__ import annotations

from planlint.build.builder import QueryPlanBuilder
from planlint.schema.config import LintConfig
from planlint.schema.issues import IssueCode, Severity
from planlint.schema.query_plan import Predicate
from planlint.validate.validator import PlanValidator, validate
from tests.fixtures import load_plan


def _v(config: LintConfig | None = None) -> PlanValidator:
    return PlanValidator(config)


def _location_builder() -> QueryPlanBuilder:
    return (
        QueryPlanBuilder()
        .add_table("workorderrouting", "wr")
        .add_join("INNER", "wr", "location", "l",
                  left_key="wr.LocationID", right_key="l.LocationID")
    )


# ---------------------------------------------------------------------------
# Clean plans
# ---------------------------------------------------------------------------


def test_valid_join_plan(vendor_plan):
    result = _v().validate(vendor_plan)
    assert result.ok
    assert result.issues == ()


def test_valid_having_on_aggregated_cost(expensive_work_orders):
    result = _v().validate(expensive_work_orders)
    assert result.ok
    assert result.issues == ()


def test_validation_is_pure(special_offer_plan):
    before = special_offer_plan.model_dump()
    first = validate(special_offer_plan)
    second = validate(special_offer_plan)
    assert first == second
    assert special_offer_plan.model_dump() == before


# ---------------------------------------------------------------------------
# DanglingJoinKey
# ---------------------------------------------------------------------------


def test_join_on_wrong_table_key():
    result = _v().validate(load_plan("broken_vendor_address"))
    assert not result.ok
    assert result.codes() == [IssueCode.DANGLING_JOIN_KEY]
    issue = result.issues[0]
    assert issue.location == "joins[1].left_key"
    assert "vc" in issue.message and "'v'" in issue.message


def test_join_key_on_unregistered_table():
    plan = (
        QueryPlanBuilder()
        .add_table("vendor", "v")
        .add_join("INNER", "v", "vendorcontact", "vc",
                  left_key="v.VendorID", right_key="vc.VendorID")
        .add_join("INNER", "v", "vendoraddress", "va",
                  left_key="vendoraddress.VendorID", right_key="va.VendorID")
        .build()
    )
    result = _v().validate(plan)
    assert not result.ok
    assert [i.location for i in result.errors] == ["joins[1].left_key"]
    assert "not a registered table" in result.errors[0].message


def test_join_key_forward_reference():
    plan = (
        QueryPlanBuilder()
        .add_table("vendor", "v")
        .add_join("INNER", "v", "vendorcontact", "vc",
                  left_key="v.VendorID", right_key="va.VendorID")
        .add_join("INNER", "v", "vendoraddress", "va",
                  left_key="v.VendorID", right_key="va.VendorID")
        .build()
    )
    result = _v().validate(plan)
    assert [i.location for i in result.issues] == ["joins[0].right_key"]


def test_unqualified_join_key():
    plan = (
        QueryPlanBuilder()
        .add_table("vendor", "v")
        .add_join("INNER", "v", "vendorcontact", "vc",
                  left_key="VendorID", right_key="vc.VendorID")
        .build()
    )
    result = _v().validate(plan)
    assert result.codes() == [IssueCode.DANGLING_JOIN_KEY]


def test_swapped_join_keys_report_both_sides():
    plan = (
        QueryPlanBuilder()
        .add_table("vendor", "v")
        .add_join("INNER", "v", "vendorcontact", "vc",
                  left_key="vc.VendorID", right_key="v.VendorID")
        .build()
    )
    result = _v().validate(plan)
    assert [i.location for i in result.issues] == ["joins[0].left_key", "joins[0].right_key"]


# ---------------------------------------------------------------------------
# AmbiguousOuterJoin
# ---------------------------------------------------------------------------


def test_left_join_aggregate_warns_but_validates(special_offer_plan):
    result = _v().validate(special_offer_plan)
    assert result.ok
    assert result.codes() == [IssueCode.AMBIGUOUS_OUTER_JOIN]
    warning = result.warnings[0]
    assert warning.severity is Severity.WARNING
    assert warning.location == "aggregates[0]"
    assert "spec_offer" in warning.message


def test_null_guard_silences_outer_join_warning():
    plan = (
        QueryPlanBuilder()
        .add_table("salesorderdetail", "sod")
        .add_join("LEFT", "sod", "specialoffer", "spec_offer",
                  left_key="sod.SpecialOfferID", right_key="spec_offer.SpecialOfferID")
        .add_column("sod.ProductID")
        .add_aggregate("SUM", "spec_offer.DiscountPct", "discount")
        .add_predicate("spec_offer.SpecialOfferID", "IS NOT NULL")
        .set_group_by("sod.ProductID")
        .build()
    )
    assert _v().validate(plan).issues == ()


def test_outer_join_arithmetic_warns():
    plan = (
        QueryPlanBuilder()
        .add_table("salesorderdetail", "sod")
        .add_join("LEFT", "sod", "specialoffer", "so",
                  left_key="sod.SpecialOfferID", right_key="so.SpecialOfferID")
        .add_computed("sod.UnitPrice", "*", "so.DiscountPct", "discount_amount")
        .build()
    )
    result = _v().validate(plan)
    assert result.ok
    assert [i.location for i in result.warnings] == ["computed[0]"]


def test_count_star_over_left_join_is_not_flagged():
    plan = (
        QueryPlanBuilder()
        .add_table("salesorderdetail", "sod")
        .add_join("LEFT", "sod", "specialoffer", "so",
                  left_key="sod.SpecialOfferID", right_key="so.SpecialOfferID")
        .add_aggregate("COUNT", "*", "n")
        .build()
    )
    assert _v().validate(plan).issues == ()


def test_inner_join_aggregate_is_not_flagged():
    plan = (
        QueryPlanBuilder()
        .add_table("salesorderdetail", "sod")
        .add_join("INNER", "sod", "specialoffer", "so",
                  left_key="sod.SpecialOfferID", right_key="so.SpecialOfferID")
        .add_aggregate("AVG", "so.DiscountPct")
        .build()
    )
    assert _v().validate(plan).issues == ()


def test_left_join_having_aggregate_warns():
    plan = (
        QueryPlanBuilder()
        .add_table("salesorderdetail", "sod")
        .add_join("LEFT", "sod", "specialoffer", "so",
                  left_key="sod.SpecialOfferID", right_key="so.SpecialOfferID")
        .add_column("sod.ProductID")
        .set_group_by("sod.ProductID")
        .set_having(("so.DiscountPct", ">", 0.1, "SUM"))
        .build()
    )
    result = _v().validate(plan)
    assert result.ok
    assert result.codes() == [IssueCode.AMBIGUOUS_OUTER_JOIN]
    assert result.warnings[0].location == "having[0]"


# ---------------------------------------------------------------------------
# GroupByCompleteness
# ---------------------------------------------------------------------------


def test_ungrouped_location_name_fails():
    plan = (
        _location_builder()
        .add_column("l.LocationID")
        .add_column("l.Name", "LocationName")
        .add_aggregate("COUNT", "wr.WorkOrderID", "work_orders")
        .set_group_by("l.LocationID")
        .build()
    )
    result = _v().validate(plan)
    assert not result.ok
    assert result.codes() == [IssueCode.GROUP_BY_COMPLETENESS]
    assert result.errors[0].location == "columns[1]"
    assert "l.Name" in result.errors[0].message


def test_complete_group_by_passes():
    plan = (
        _location_builder()
        .add_column("l.LocationID")
        .add_column("l.Name")
        .add_aggregate("SUM", "wr.ActualCost")
        .set_group_by("l.LocationID", "l.Name")
        .build()
    )
    assert _v().validate(plan).ok


def test_aggregate_without_group_by_and_plain_column():
    plan = (
        QueryPlanBuilder()
        .add_table("product", "p")
        .add_column("p.Name")
        .add_aggregate("AVG", "p.ListPrice")
        .build()
    )
    result = _v().validate(plan)
    assert result.codes() == [IssueCode.GROUP_BY_COMPLETENESS]


def test_computed_column_must_be_grouped():
    plan = (
        QueryPlanBuilder()
        .add_table("product", "p")
        .add_computed("p.ListPrice", "-", "p.StandardCost", "margin")
        .add_aggregate("COUNT", "p.ProductID")
        .set_group_by("p.ListPrice")
        .build()
    )
    result = _v().validate(plan)
    assert [i.location for i in result.errors] == ["computed[0]"]


def test_single_table_plan_matches_unqualified_group_by():
    plan = (
        QueryPlanBuilder()
        .add_table("product", "p")
        .add_column("p.Color")
        .add_aggregate("COUNT", "p.ProductID")
        .set_group_by("Color")
        .build()
    )
    assert _v().validate(plan).ok


def test_no_aggregation_means_no_group_check(vendor_plan):
    assert IssueCode.GROUP_BY_COMPLETENESS not in _v().validate(vendor_plan).codes()


# ---------------------------------------------------------------------------
# HavingWithoutAggregate
# ---------------------------------------------------------------------------


def test_having_on_plain_column_fails():
    plan = (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_column("wo.WorkOrderID")
        .add_aggregate("SUM", "wo.ActualCost")
        .set_group_by("wo.WorkOrderID")
        .set_having(("wo.ScrappedQty", ">", 0))
        .build()
    )
    result = _v().validate(plan)
    assert result.codes() == [IssueCode.HAVING_WITHOUT_AGGREGATE]
    assert result.errors[0].location == "having[0]"


def test_having_on_aggregate_alias_and_grouped_column():
    plan = (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_column("wo.WorkOrderID", "id")
        .add_aggregate("SUM", "wo.ActualCost", "total_cost")
        .set_group_by("wo.WorkOrderID")
        .set_having(
            ("total_cost", ">", 300),
            ("wo.WorkOrderID", ">", 10),
            ("id", "<", 90000),
        )
        .build()
    )
    assert _v().validate(plan).issues == ()


def test_having_on_aggregated_column_without_fn():
    plan = (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_column("wo.WorkOrderID")
        .add_aggregate("SUM", "wo.ActualCost")
        .set_group_by("wo.WorkOrderID")
        .set_having(Predicate(column="wo.ActualCost", op=">", value=300))
        .build()
    )
    assert _v().validate(plan).ok


def test_having_on_column_with_several_aggregates_fails():
    plan = (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_column("wo.WorkOrderID")
        .add_aggregate("SUM", "wo.ActualCost", "total")
        .add_aggregate("AVG", "wo.ActualCost", "mean")
        .set_group_by("wo.WorkOrderID")
        .set_having(("wo.ActualCost", ">", 300))
        .build()
    )
    result = _v().validate(plan)
    assert result.codes() == [IssueCode.HAVING_WITHOUT_AGGREGATE]
    assert "SUM, AVG" in result.errors[0].message


def test_having_on_grouped_column_that_is_also_aggregated():
    plan = (
        QueryPlanBuilder()
        .add_table("workorder", "wo")
        .add_aggregate("COUNT", "wo.WorkOrderID", "n")
        .add_aggregate("AVG", "wo.WorkOrderID")
        .set_group_by("wo.WorkOrderID")
        .set_having(("wo.WorkOrderID", ">", 10))
        .build()
    )
    assert _v().validate(plan).ok


# ---------------------------------------------------------------------------
# MalformedIdentifier
# ---------------------------------------------------------------------------


def test_quoted_identifiers_are_reported():
    result = _v().validate(load_plan("quoted_identifiers"))
    assert not result.ok
    assert {i.code for i in result.issues} == {IssueCode.MALFORMED_IDENTIFIER}
    assert [i.location for i in result.issues] == ["tables[0].name", "columns[0]"]


def test_identifier_with_space_is_reported():
    plan = QueryPlanBuilder().add_table("work order", "wo").build()
    result = _v().validate(plan)
    assert result.codes() == [IssueCode.MALFORMED_IDENTIFIER]


# ---------------------------------------------------------------------------
# Ordering and configuration
# ---------------------------------------------------------------------------


def test_all_issues_collected_in_rule_order():
    plan = (
        QueryPlanBuilder()
        .add_table("salesorderdetail", "sod")
        .add_join("LEFT", "sod", "specialoffer", "so",
                  left_key="so.SpecialOfferID", right_key="so.SpecialOfferID")
        .add_column("sod.ProductID")
        .add_column("sod.OrderQty")
        .add_aggregate("SUM", "so.DiscountPct")
        .set_group_by("sod.ProductID")
        .set_having(("sod.UnitPrice", ">", 5))
        .build()
    )
    result = _v().validate(plan)
    assert result.codes() == [
        IssueCode.DANGLING_JOIN_KEY,
        IssueCode.AMBIGUOUS_OUTER_JOIN,
        IssueCode.GROUP_BY_COMPLETENESS,
        IssueCode.HAVING_WITHOUT_AGGREGATE,
    ]


def test_disabled_rule_is_skipped(special_offer_plan):
    config = LintConfig.builder().disable("AmbiguousOuterJoin").build()
    assert _v(config).validate(special_offer_plan).issues == ()


def test_strict_mode_promotes_warnings(special_offer_plan):
    config = LintConfig.builder().strict().build()
    result = _v(config).validate(special_offer_plan)
    assert not result.ok
    assert result.errors[0].code is IssueCode.AMBIGUOUS_OUTER_JOIN
