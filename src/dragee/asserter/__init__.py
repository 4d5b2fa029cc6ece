"""Asserter domain: rule results, rule registry, execution engine, formatters."""

from dragee.asserter.engine import (
    Report,
    ReportStats,
    asserter_handler,
    generate_report_for_rule,
    run_rule,
)
from dragee.asserter.formatters import (
    format_json,
    format_porcelain,
    format_rich,
    report_to_dict,
)
from dragee.asserter.registry import (
    Asserter,
    DeclaredRule,
    Rule,
    RuleLoadError,
    RuleSeverity,
    find_rule,
    find_rules,
    load_asserter,
    scan_rule_files,
)
from dragee.asserter.results import (
    FailedRuleResult,
    RuleError,
    RuleResult,
    SuccessfulRuleResult,
    expect_dragee,
    expect_dragees,
    failed,
    multiple_expect_dragees,
    successful,
)

__all__ = [
    "Asserter",
    "DeclaredRule",
    "FailedRuleResult",
    "Report",
    "ReportStats",
    "Rule",
    "RuleError",
    "RuleLoadError",
    "RuleResult",
    "RuleSeverity",
    "SuccessfulRuleResult",
    "asserter_handler",
    "expect_dragee",
    "expect_dragees",
    "failed",
    "find_rule",
    "find_rules",
    "format_json",
    "format_porcelain",
    "format_rich",
    "generate_report_for_rule",
    "load_asserter",
    "multiple_expect_dragees",
    "report_to_dict",
    "run_rule",
    "scan_rule_files",
    "successful",
]
