"""Rule results: the success/failure sum type and helpers for rule authors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from dragee.model import Dragee


@dataclass(frozen=True)
class RuleError:
    """A single violation raised for the root dragee under test."""

    message: str
    dragee_name: str
    rule_id: str | None = None


@dataclass(frozen=True)
class SuccessfulRuleResult:
    """A passing evaluation."""

    rule_id: str | None = None
    passed: Literal[True] = field(default=True, init=False)


@dataclass(frozen=True)
class FailedRuleResult:
    """A failing evaluation carrying its :class:`RuleError`."""

    error: RuleError
    rule_id: str | None = None
    passed: Literal[False] = field(default=False, init=False)


RuleResult = SuccessfulRuleResult | FailedRuleResult


def successful() -> SuccessfulRuleResult:
    return SuccessfulRuleResult()


def failed(dragee: Dragee, message: str) -> FailedRuleResult:
    return FailedRuleResult(error=RuleError(message=message, dragee_name=dragee.name))


# ---------------------------------------------------------------------------
# Assertion helpers
# ---------------------------------------------------------------------------


def expect_dragee(
    root: Dragee,
    dragee: Dragee,
    error_msg: str,
    eval_fn: Callable[[Dragee], bool],
) -> RuleResult:
    """Evaluate *dragee* with *eval_fn*; a failure is reported against *root*."""
    return successful() if eval_fn(dragee) else failed(root, error_msg)


def expect_dragees(
    root: Dragee,
    dependencies: Sequence[Dragee],
    error_msg: str,
    eval_fn: Callable[[Sequence[Dragee]], bool],
) -> RuleResult:
    """Evaluate all *dependencies* at once; a failure is reported against *root*."""
    return successful() if eval_fn(dependencies) else failed(root, error_msg)


def multiple_expect_dragees(
    root: Dragee,
    dragees: Sequence[Dragee],
    error_msg: str,
    eval_fn: Callable[[Dragee], bool],
) -> list[RuleResult]:
    """Evaluate each of *dragees* separately, producing one result per dragee."""
    return [successful() if eval_fn(d) else failed(root, error_msg) for d in dragees]
