"""Tests for the planlint command-line interface."""
from __future__ import annotations

import io
import json

import pytest

from planlint.cli import EXIT_ERROR, EXIT_INVALID, EXIT_OK, main
from tests.fixtures import fixture_path, load_description


def test_validate_ok(capsys):
    code = main(["validate", str(fixture_path("vendor_contacts"))])
    out, err = capsys.readouterr()
    assert code == EXIT_OK
    assert err == ""


def test_validate_reports_issues_on_stderr(capsys):
    code = main(["validate", str(fixture_path("broken_vendor_address"))])
    _, err = capsys.readouterr()
    assert code == EXIT_INVALID
    assert "error: DanglingJoinKey at joins[1].left_key" in err


def test_validate_warning_keeps_exit_zero(capsys):
    code = main(["validate", str(fixture_path("special_offers"))])
    _, err = capsys.readouterr()
    assert code == EXIT_OK
    assert "warning: AmbiguousOuterJoin" in err


def test_validate_strict_and_disable(capsys):
    path = str(fixture_path("special_offers"))
    assert main(["validate", path, "--strict"]) == EXIT_INVALID
    assert main(["validate", path, "--strict", "--disable", "AmbiguousOuterJoin"]) == EXIT_OK


def test_validate_json_output(capsys):
    main(["validate", str(fixture_path("special_offers")), "--json"])
    out, _ = capsys.readouterr()
    payload = json.loads(out)
    assert payload["ok"] is True
    assert payload["issues"][0]["code"] == "AmbiguousOuterJoin"
    assert payload["issues"][0]["severity"] == "warning"


def test_render_prints_sql(capsys):
    code = main(["render", str(fixture_path("expensive_work_orders")), "--dialect", "mysql"])
    out, _ = capsys.readouterr()
    assert code == EXIT_OK
    assert out.startswith("SELECT `wo`.`WorkOrderID`, SUM(`wo`.`ActualCost`) AS `total_cost`")


def test_render_refuses_invalid_plan(capsys):
    code = main(["render", str(fixture_path("quoted_identifiers"))])
    out, err = capsys.readouterr()
    assert code == EXIT_INVALID
    assert out == ""
    assert "MalformedIdentifier" in err


def test_reads_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(load_description("vendor_contacts")))
    assert main(["render", "-"]) == EXIT_OK
    out, _ = capsys.readouterr()
    assert 'FROM "vendor" AS "v"' in out


def test_invalid_json_exits_with_parse_error(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("{not json"))
    assert main(["validate", "-"]) == EXIT_ERROR
    _, err = capsys.readouterr()
    assert json.loads(err)["error"] == "PARSE_ERROR"


def test_duplicate_alias_exits_with_builder_error(monkeypatch, capsys):
    table = {"name": "vendor", "alias": "v"}
    raw = json.dumps({"tables": [table, table]})
    monkeypatch.setattr("sys.stdin", io.StringIO(raw))
    assert main(["validate", "-"]) == EXIT_ERROR
    _, err = capsys.readouterr()
    assert json.loads(err)["error"] == "DUPLICATE_ALIAS"


def test_missing_file(tmp_path, capsys):
    assert main(["validate", str(tmp_path / "nope.json")]) == EXIT_ERROR
    _, err = capsys.readouterr()
    assert "cannot read plan" in err


def test_unknown_rule_is_rejected_by_argparse():
    with pytest.raises(SystemExit):
        main(["validate", "-", "--disable", "NoSuchRule"])


def test_undecodable_file(tmp_path, capsys):
    path = tmp_path / "plan.json"
    path.write_bytes(b'{"tables": [{"name": "v\xff"}]}')
    assert main(["validate", str(path)]) == EXIT_ERROR
    _, err = capsys.readouterr()
    assert "cannot read plan" in err
