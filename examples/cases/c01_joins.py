"""Category 01 - joins over the vendor tables.

Includes the broken/fixed pair: the broken plan joins ``vendoraddress`` on
``vendorcontact``'s key while declaring ``vendor`` as the left side.
"""
from __future__ import annotations

from examples._case import Case
from planlint import IssueCode

_VENDOR = {"name": "vendor", "alias": "v"}
_CONTACT_JOIN = {
    "kind": "INNER", "left": "v", "table": "vendorcontact", "alias": "vc",
    "left_key": "v.VendorID", "right_key": "vc.VendorID",
}

CASES: list[Case] = [
    # ------------------------------------------------------------------
    Case(
        id="c01_01",
        category="joins",
        question="List active vendors with their contacts and cities.",
        description={
            "tables": [_VENDOR],
            "joins": [
                _CONTACT_JOIN,
                {"kind": "INNER", "left": "v", "table": "vendoraddress", "alias": "va",
                 "left_key": "v.VendorID", "right_key": "va.VendorID"},
            ],
            "columns": [{"column": "v.Name"}, {"column": "vc.ContactName"},
                        {"column": "va.City"}],
            "where": [{"column": "v.ActiveFlag", "op": "=", "value": 1}],
            "order_by": [{"column": "v.Name"}],
        },
    ),
    # ------------------------------------------------------------------
    Case(
        id="c01_02",
        category="joins",
        question="Same report, broken join key.",
        notes="The address join uses vc.VendorID although its left side is v.",
        description={
            "tables": [_VENDOR],
            "joins": [
                _CONTACT_JOIN,
                {"kind": "INNER", "left": "v", "table": "vendoraddress", "alias": "va",
                 "left_key": "vc.VendorID", "right_key": "va.VendorID"},
            ],
            "columns": [{"column": "v.Name"}, {"column": "va.City"}],
        },
        expect_ok=False,
        expect_codes=[IssueCode.DANGLING_JOIN_KEY],
    ),
    # ------------------------------------------------------------------
    Case(
        id="c01_03",
        category="joins",
        question="Same report written with hand-quoted identifiers.",
        notes="Quotes belong to rendering, not to plan identifiers.",
        description={
            "tables": [{"name": "'vendor'", "alias": "v"}],
            "columns": [{"column": "v.`Name`"}],
        },
        expect_ok=False,
        expect_codes=[IssueCode.MALFORMED_IDENTIFIER, IssueCode.MALFORMED_IDENTIFIER],
    ),
]
