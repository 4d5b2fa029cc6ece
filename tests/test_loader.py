"""Tests for dragee.loader — reading dragee files."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from dragee.loader import DrageeLoadError, load_dragees
from dragee.model import Dragee

if TYPE_CHECKING:
    from pathlib import Path


class TestLoadDragees:
    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_text(
            json.dumps(
                [
                    {"name": "A", "kind_of": "ddd/aggregate", "depends_on": {"B": ["field"]}},
                    {"name": "B"},
                ]
            )
        )
        assert load_dragees(path) == [
            Dragee(name="A", kind_of="ddd/aggregate", depends_on={"B": ["field"]}),
            Dragee(name="B"),
        ]

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.yml"
        path.write_text(
            "- name: A\n"
            "  depends_on:\n"
            "    B: [repo]\n"
            "    C: [svc]\n"
            "- name: B\n"
        )
        dragees = load_dragees(path)
        assert [d.name for d in dragees] == ["A", "B"]
        assert list(dragees[0].depends_on or {}) == ["B", "C"]

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.yaml"
        path.write_text("")
        assert load_dragees(path) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DrageeLoadError, match="Cannot read"):
            load_dragees(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_text("[{")
        with pytest.raises(DrageeLoadError, match="invalid syntax"):
            load_dragees(path)

    def test_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_text('{"name": "A"}')
        with pytest.raises(DrageeLoadError, match="expected a list"):
            load_dragees(path)

    def test_missing_name(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_text('[{"kind_of": "x"}]')
        with pytest.raises(DrageeLoadError, match="missing required 'name'"):
            load_dragees(path)

    def test_bad_depends_on(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_text('[{"name": "A", "depends_on": ["B"]}]')
        with pytest.raises(DrageeLoadError, match="not a mapping"):
            load_dragees(path)

    def test_duplicate_names(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_text('[{"name": "A"}, {"name": "A"}]')
        with pytest.raises(DrageeLoadError, match="duplicate dragee name"):
            load_dragees(path)

    def test_invalid_utf8_json(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.json"
        path.write_bytes(b'[{"name": "\xff"}]')
        with pytest.raises(DrageeLoadError, match="not valid UTF-8"):
            load_dragees(path)

    def test_invalid_utf8_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "dragees.yml"
        path.write_bytes(b"- name: \xff\n")
        with pytest.raises(DrageeLoadError, match="not valid UTF-8"):
            load_dragees(path)
