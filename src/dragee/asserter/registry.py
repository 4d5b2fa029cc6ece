"""Rule registry: discover ``*.rule.py`` files, validate them, and assign rule ids."""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from dragee.model import generate_id

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from dragee.asserter.results import RuleResult
    from dragee.model import Dragee

    RuleHandler = Callable[[Sequence[Dragee]], list[RuleResult]]

logger = logging.getLogger(__name__)

RULE_FILE_SUFFIX = ".rule.py"
RULE_ATTRIBUTE = "rule"

_MODULE_NAME_RE = re.compile(r"[^0-9A-Za-z_]")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RuleLoadError(ValueError):
    """Raised when a rule source holds a malformed rule definition."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


class RuleSeverity(str, Enum):
    """Rule severity."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"


@dataclass(frozen=True)
class DeclaredRule:
    """A rule as written by its author, before it gets an id."""

    label: str
    severity: RuleSeverity
    handler: RuleHandler


@dataclass(frozen=True)
class Rule:
    """A declared rule enriched with its generated id."""

    id: str
    label: str
    severity: RuleSeverity
    handler: RuleHandler
    origin: str = ""  # rule file name, empty for rules built in memory


@dataclass(frozen=True)
class Asserter:
    """Namespace-scoped bundle of identified rules."""

    namespace: str
    rules: tuple[Rule, ...]

    def rule(self, name: str) -> Rule | None:
        """Return the first rule whose file name starts with *name* or whose label is *name*."""
        segment = f"/{name}"
        for candidate in self.rules:
            if candidate.label == name:
                return candidate
            if candidate.origin and segment in f"/{candidate.origin}":
                return candidate
        return None


# ---------------------------------------------------------------------------
# Conversion and validation
# ---------------------------------------------------------------------------


def declared_rule_to_rule(namespace: str, rule: DeclaredRule, *, origin: str = "") -> Rule:
    return Rule(
        id=generate_id(namespace, rule.label),
        label=rule.label,
        severity=rule.severity,
        handler=rule.handler,
        origin=origin,
    )


def _validate_declared_rule(candidate: object, context: str) -> DeclaredRule:
    """Check that *candidate* exposes ``label``, ``severity`` and ``handler``.

    Any object with those attributes is accepted; severities given as plain
    strings are coerced to :class:`RuleSeverity`.
    """
    label: object = getattr(candidate, "label", None)
    severity_raw: object = getattr(candidate, "severity", None)
    handler: object = getattr(candidate, "handler", None)

    if not isinstance(label, str) or not label.strip():
        msg = f"{context}: rule is missing a non-empty 'label'"
        raise RuleLoadError(msg)

    try:
        severity = RuleSeverity(severity_raw)
    except ValueError as exc:
        msg = (
            f"{context}: rule '{label}' has invalid severity {severity_raw!r}, "
            f"must be one of {sorted(s.value for s in RuleSeverity)}"
        )
        raise RuleLoadError(msg) from exc

    if not callable(handler):
        msg = f"{context}: rule '{label}' has a non-callable 'handler'"
        raise RuleLoadError(msg)

    return DeclaredRule(label=label, severity=severity, handler=handler)


# ---------------------------------------------------------------------------
# Rule file loading
# ---------------------------------------------------------------------------


def scan_rule_files(directory: Path) -> list[Path]:
    """Return the rule files of *directory*, sorted by file name.

    Only the top level of *directory* is scanned.
    """
    if not directory.is_dir():
        msg = f"Rule directory not found: {directory}"
        raise RuleLoadError(msg)
    return sorted(
        (p for p in directory.glob(f"*{RULE_FILE_SUFFIX}") if p.is_file()),
        key=lambda p: p.name,
    )


def _module_name(namespace: str, path: Path) -> str:
    """Return a ``sys.modules`` key unique to (*namespace*, resolved *path*)."""
    stem = path.name[: -len(RULE_FILE_SUFFIX)]
    readable = "_".join(_MODULE_NAME_RE.sub("_", part) for part in (namespace, stem))
    digest = hashlib.sha256(f"{namespace}\x00{path.resolve()}".encode()).hexdigest()[:12]
    return f"_dragee_rule_{readable}_{digest}"


def _load_declared_rule(namespace: str, path: Path) -> DeclaredRule:
    """Import the rule file at *path* and return its validated ``rule`` object.

    Errors raised while executing the file propagate unchanged.
    """
    module_name = _module_name(namespace, path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        msg = f"Cannot import rule file: {path}"
        raise RuleLoadError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise

    if not hasattr(module, RULE_ATTRIBUTE):
        msg = f"{path.name}: no module-level '{RULE_ATTRIBUTE}' defined"
        raise RuleLoadError(msg)

    declared = _validate_declared_rule(getattr(module, RULE_ATTRIBUTE), path.name)
    logger.debug("Loaded rule '%s' (%s) from %s", declared.label, declared.severity.value, path)
    return declared


def find_rules(namespace: str, directory: Path) -> list[Rule]:
    """Load every rule of *directory* and give each an id scoped by *namespace*.

    Rules come back in file-name order.  Two rules sharing a label would
    share an id, so that is rejected.
    """
    rules: list[Rule] = []
    seen_labels: set[str] = set()

    for path in scan_rule_files(directory):
        declared = _load_declared_rule(namespace, path)
        if declared.label in seen_labels:
            msg = f"{path.name}: duplicate rule label '{declared.label}' in namespace '{namespace}'"
            raise RuleLoadError(msg)
        seen_labels.add(declared.label)
        rules.append(declared_rule_to_rule(namespace, declared, origin=path.name))

    logger.debug("Found %d rules for namespace '%s' in %s", len(rules), namespace, directory)
    return rules


def find_rule(namespace: str, directory: Path, rule_name: str) -> Rule | None:
    """Load the first rule file of *directory* matching *rule_name*.

    A file matches when its path relative to *directory* contains
    ``/<rule_name>``.  Returns ``None`` when nothing matches.
    """
    segment = f"/{rule_name}"
    for path in scan_rule_files(directory):
        if segment in f"/{path.relative_to(directory).as_posix()}":
            declared = _load_declared_rule(namespace, path)
            return declared_rule_to_rule(namespace, declared, origin=path.name)

    logger.debug("No rule matching '%s' in %s", rule_name, directory)
    return None


def load_asserter(namespace: str, directory: Path) -> Asserter:
    """Run one discovery pass over *directory* and bundle the rules."""
    return Asserter(namespace=namespace, rules=tuple(find_rules(namespace, directory)))
