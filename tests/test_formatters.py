"""Tests for dragee.asserter.formatters — report serialization and text output."""

from __future__ import annotations

import json

from dragee.asserter.engine import Report, ReportStats
from dragee.asserter.formatters import (
    format_json,
    format_porcelain,
    format_rich,
    report_to_dict,
)
from dragee.asserter.results import RuleError

FAILING = Report(
    passed=False,
    namespace="layering",
    errors=(
        RuleError(message="cycle detected", dragee_name="X", rule_id="layering/abc"),
        RuleError(message="wrong layer", dragee_name="Y", rule_id="layering/def"),
    ),
    stats=ReportStats(rules_count=2, pass_count=3, errors_count=2),
)
PASSING = Report(
    passed=True,
    namespace="ddd",
    errors=(),
    stats=ReportStats(rules_count=1, pass_count=4, errors_count=0),
)


class TestReportToDict:
    def test_wire_names(self) -> None:
        assert report_to_dict(FAILING) == {
            "pass": False,
            "namespace": "layering",
            "errors": [
                {"ruleId": "layering/abc", "message": "cycle detected", "drageeName": "X"},
                {"ruleId": "layering/def", "message": "wrong layer", "drageeName": "Y"},
            ],
            "stats": {"rulesCount": 2, "passCount": 3, "errorsCount": 2},
        }

    def test_json_serializable(self) -> None:
        data = report_to_dict(PASSING)
        assert json.loads(json.dumps(data)) == data


class TestFormatJson:
    def test_list_of_reports(self) -> None:
        data = json.loads(format_json([FAILING, PASSING]))
        assert [d["namespace"] for d in data] == ["layering", "ddd"]
        assert data[1]["pass"] is True

    def test_empty(self) -> None:
        assert json.loads(format_json([])) == []


class TestFormatRich:
    def test_failing_report(self) -> None:
        output = format_rich([FAILING])
        assert "✗ layering" in output
        assert "X: cycle detected [layering/abc]" in output
        assert "2 errors, 3 passed (2 rules)" in output

    def test_passing_report(self) -> None:
        output = format_rich([PASSING])
        assert output.startswith("✓ ddd")
        assert "0 errors, 4 passed (1 rule)" in output

    def test_error_without_rule_id(self) -> None:
        report = Report(
            passed=False,
            namespace="ns",
            errors=(RuleError(message="m", dragee_name="D"),),
            stats=ReportStats(rules_count=1, pass_count=0, errors_count=1),
        )
        assert "  D: m\n" in format_rich([report])
        assert "1 error, 0 passed (1 rule)" in format_rich([report])


class TestFormatPorcelain:
    def test_one_line_per_error(self) -> None:
        assert format_porcelain([FAILING, PASSING]).splitlines() == [
            "layering:layering/abc:X:cycle detected",
            "layering:layering/def:Y:wrong layer",
        ]

    def test_no_errors(self) -> None:
        assert format_porcelain([PASSING]) == ""
