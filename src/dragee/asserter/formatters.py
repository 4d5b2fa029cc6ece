"""Report formatters: wire dicts, JSON, human-readable text, and porcelain lines."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from dragee.asserter.engine import Report


def report_to_dict(report: Report) -> dict[str, object]:
    """Convert a Report to its serialized shape (JSON-compatible, camelCase keys)."""
    return {
        "pass": report.passed,
        "namespace": report.namespace,
        "errors": [
            {
                "ruleId": error.rule_id,
                "message": error.message,
                "drageeName": error.dragee_name,
            }
            for error in report.errors
        ],
        "stats": {
            "rulesCount": report.stats.rules_count,
            "passCount": report.stats.pass_count,
            "errorsCount": report.stats.errors_count,
        },
    }


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_json(reports: Sequence[Report]) -> str:
    return json.dumps([report_to_dict(r) for r in reports], indent=2)


def format_rich(reports: Sequence[Report]) -> str:
    """Format reports as human-readable text.

    Example output::

        ✗ layering
          X: cycle detected [layering/3f1c0a9e5b7d2c41]

          1 error, 0 passed (1 rule)

        ✓ ddd
          0 errors, 4 passed (2 rules)
    """
    lines: list[str] = []

    for report in reports:
        marker = "✓" if report.passed else "✗"
        lines.append(f"{marker} {report.namespace}")
        for error in report.errors:
            suffix = f" [{error.rule_id}]" if error.rule_id else ""
            lines.append(f"  {error.dragee_name}: {error.message}{suffix}")
        if report.errors:
            lines.append("")
        stats = report.stats
        lines.append(
            f"  {_plural(stats.errors_count, 'error')}, {stats.pass_count} passed "
            f"({_plural(stats.rules_count, 'rule')})"
        )
        lines.append("")

    return "\n".join(lines).rstrip("\n")


def format_porcelain(reports: Sequence[Report]) -> str:
    """Format errors as ``namespace:rule_id:dragee_name:message``, one per line.

    Returns an empty string when no report has errors.
    """
    lines: list[str] = []
    for report in reports:
        for error in report.errors:
            rule_id = error.rule_id if error.rule_id is not None else ""
            lines.append(f"{report.namespace}:{rule_id}:{error.dragee_name}:{error.message}")
    return "\n".join(lines)
