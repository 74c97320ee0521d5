"""Unit tests for JSON plan descriptions and the one-shot pipeline."""
from __future__ import annotations

import json

import pytest

import planlint
from planlint.build.description import parse_description, plan_from_json
from planlint.errors import DuplicateAliasError, ParseError, PlanRejectedError, UnknownAliasError
from planlint.schema.expressions import AggregateFn, JoinKind
from tests.fixtures import load_description


def test_description_replays_through_builder():
    plan = plan_from_json(load_description("special_offers"))
    assert plan.aliases() == ["sod", "spec_offer"]
    assert plan.joins[0].kind is JoinKind.LEFT
    assert plan.aggregates[0].fn is AggregateFn.COUNT_DISTINCT


def test_empty_description_is_empty_plan():
    plan = plan_from_json("{}")
    assert plan.tables == () and plan.joins == ()


def test_invalid_json():
    with pytest.raises(ParseError) as exc_info:
        parse_description("[1, 2")
    assert exc_info.value.raw == "[1, 2"


def test_unknown_key_rejected():
    with pytest.raises(ParseError):
        parse_description(json.dumps({"tables": [], "limit": 10}))


def test_unknown_operator_rejected():
    raw = json.dumps({
        "tables": [{"name": "vendor", "alias": "v"}],
        "where": [{"column": "v.Name", "op": "LIKE", "value": "A%"}],
    })
    with pytest.raises(ParseError):
        plan_from_json(raw)


def test_comparison_without_value_is_parse_error():
    raw = json.dumps({
        "tables": [{"name": "vendor", "alias": "v"}],
        "where": [{"column": "v.CreditRating", "op": ">"}],
    })
    with pytest.raises(ParseError):
        plan_from_json(raw)


def test_builder_errors_propagate():
    raw = json.dumps({
        "tables": [{"name": "vendor", "alias": "v"}],
        "joins": [{"left": "vc", "table": "vendoraddress", "alias": "va",
                   "left_key": "vc.VendorID", "right_key": "va.VendorID"}],
    })
    with pytest.raises(UnknownAliasError):
        plan_from_json(raw)

    raw = json.dumps({"tables": [{"name": "vendor"}, {"name": "vendor"}]})
    with pytest.raises(DuplicateAliasError):
        plan_from_json(raw)


def test_validate_and_render_pipeline():
    config = planlint.LintConfig.builder().dialect("postgres").build()
    sql = planlint.validate_and_render(load_description("vendor_contacts"), config=config)
    assert sql.splitlines()[1] == 'FROM "vendor" AS "v"'


def test_validate_and_render_rejects_broken_join():
    with pytest.raises(PlanRejectedError):
        planlint.validate_and_render(load_description("broken_vendor_address"))


def test_join_kind_is_case_insensitive():
    raw = json.dumps({
        "tables": [{"name": "salesorderdetail", "alias": "sod"}],
        "joins": [{"kind": "left", "left": "sod", "table": "specialoffer", "alias": "so",
                   "left_key": "sod.SpecialOfferID", "right_key": "so.SpecialOfferID"}],
    })
    assert plan_from_json(raw).joins[0].kind is JoinKind.LEFT
