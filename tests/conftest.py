"""Shared test fixtures for Dragee."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

import pytest

from dragee.model import Dragee

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture()
def dragees() -> list[Dragee]:
    """A small layered dragee set: X -> Y -> Z, plus an isolated W."""
    return [
        Dragee(name="X", kind_of="ddd/aggregate", depends_on={"Y": ["repo"]}),
        Dragee(name="Y", kind_of="ddd/repository", depends_on={"Z": ["entity"]}),
        Dragee(name="Z", kind_of="ddd/entity"),
        Dragee(name="W", kind_of="ddd/value_object"),
    ]


@pytest.fixture()
def rules_dir(tmp_path: Path) -> Path:
    """Create an empty rule directory."""
    directory = tmp_path / "rules"
    directory.mkdir()
    return directory


@pytest.fixture()
def write_rule() -> Callable[..., Path]:
    """Return a helper writing a ``<name>.rule.py`` file with the given body."""

    def _write(directory: Path, name: str, body: str) -> Path:
        path = directory / f"{name}.rule.py"
        path.write_text(textwrap.dedent(body), encoding="utf-8")
        return path

    return _write
