"""Rule execution and report aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from dragee.asserter.results import FailedRuleResult, SuccessfulRuleResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dragee.asserter.registry import Asserter, Rule
    from dragee.asserter.results import RuleError, RuleResult
    from dragee.model import Dragee

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReportStats:
    """Aggregate counters of a report."""

    rules_count: int = 0
    pass_count: int = 0
    errors_count: int = 0


@dataclass(frozen=True)
class Report:
    """Outcome of running one or all rules of an asserter."""

    passed: bool
    namespace: str
    errors: tuple[RuleError, ...]
    stats: ReportStats


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


def _stamp(result: RuleResult, rule_id: str) -> RuleResult:
    if isinstance(result, FailedRuleResult):
        return replace(result, rule_id=rule_id, error=replace(result.error, rule_id=rule_id))
    return replace(result, rule_id=rule_id)


def run_rule(rule: Rule, dragees: Sequence[Dragee]) -> list[RuleResult]:
    """Run the handler of *rule* and stamp every result with the rule id.

    Handlers get the dragee set as a tuple.  Exceptions raised by a handler
    are not caught.
    """
    results = [_stamp(result, rule.id) for result in rule.handler(tuple(dragees))]
    logger.debug("Rule '%s' (%s) produced %d results", rule.label, rule.id, len(results))
    return results


def _build_report(namespace: str, results: Sequence[RuleResult], rules_count: int) -> Report:
    errors = tuple(r.error for r in results if isinstance(r, FailedRuleResult))
    pass_count = sum(1 for r in results if isinstance(r, SuccessfulRuleResult))
    return Report(
        passed=not errors,
        namespace=namespace,
        errors=errors,
        stats=ReportStats(
            rules_count=rules_count,
            pass_count=pass_count,
            errors_count=len(errors),
        ),
    )


# ---------------------------------------------------------------------------
# Report entry points
# ---------------------------------------------------------------------------


def asserter_handler(asserter: Asserter, dragees: Sequence[Dragee]) -> Report:
    """Test *dragees* against every rule of *asserter*, in order, and build the report."""
    snapshot = tuple(dragees)
    results: list[RuleResult] = []
    for rule in asserter.rules:
        results.extend(run_rule(rule, snapshot))

    report = _build_report(asserter.namespace, results, len(asserter.rules))
    logger.debug(
        "Namespace '%s': %d rules, %d passed, %d errors",
        asserter.namespace,
        report.stats.rules_count,
        report.stats.pass_count,
        report.stats.errors_count,
    )
    return report


def generate_report_for_rule(
    asserter: Asserter, dragees: Sequence[Dragee], rule_name: str
) -> Report:
    """Test *dragees* against the single rule of *asserter* named *rule_name*.

    An unknown rule gives a passing report with all counters at zero.
    Otherwise ``stats.rules_count`` is the size of the whole asserter, while
    the other fields only reflect the one rule that ran.
    """
    rule = asserter.rule(rule_name)
    if rule is None:
        logger.debug("Rule '%s' not found in namespace '%s'", rule_name, asserter.namespace)
        return Report(passed=True, namespace=asserter.namespace, errors=(), stats=ReportStats())

    return _build_report(asserter.namespace, run_rule(rule, dragees), len(asserter.rules))
