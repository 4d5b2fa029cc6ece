"""Entity model: dragees, dependency resolution, and rule identifiers."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# Length of the hex digest kept in generated rule ids.
_ID_DIGEST_LENGTH = 16


@dataclass(frozen=True)
class Dragee:
    """A named entity under architectural test.

    ``depends_on`` maps dependency names to free-form metadata (typically the
    list of fields or members through which the dependency is used).  It is
    frozen into a read-only mapping on construction.
    """

    name: str
    depends_on: Mapping[str, object] | None = field(default=None, hash=False)
    kind_of: str | None = None

    def __post_init__(self) -> None:
        if self.depends_on is not None:
            object.__setattr__(self, "depends_on", MappingProxyType(dict(self.depends_on)))


@dataclass(frozen=True)
class DependencyResolution:
    """A root dragee together with its resolved direct dependencies."""

    root: Dragee
    dependencies: list[Dragee]


def direct_dependencies(root: Dragee, all_dragees: Sequence[Dragee]) -> DependencyResolution:
    """Find the direct dependencies of *root* among *all_dragees*.

    Dependencies come back in the key order of ``root.depends_on``.  Names
    that match no dragee are dropped; rule handlers decide whether a missing
    dependency is a violation.
    """
    if not root.depends_on:
        return DependencyResolution(root=root, dependencies=[])

    by_name: dict[str, Dragee] = {}
    for dragee in all_dragees:
        by_name.setdefault(dragee.name, dragee)

    dependencies = [by_name[name] for name in root.depends_on if name in by_name]
    return DependencyResolution(root=root, dependencies=dependencies)


def generate_id(namespace: str, label: str) -> str:
    """Return the stable identifier of the rule *label* in *namespace*.

    The id only depends on its two inputs, so the same rule source yields the
    same ids on every run and every machine.
    """
    digest = hashlib.sha256(f"{namespace}\x00{label}".encode()).hexdigest()
    return f"{namespace}/{digest[:_ID_DIGEST_LENGTH]}"
