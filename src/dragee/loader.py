"""Dragee file loader: read the entity list produced by a scanner (JSON or YAML)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import yaml

from dragee.model import Dragee

if TYPE_CHECKING:
    from pathlib import Path

_YAML_SUFFIXES: frozenset[str] = frozenset({".yml", ".yaml"})


class DrageeLoadError(ValueError):
    """Raised when a dragee file cannot be read or has an invalid shape."""


def _parse_dragee(data: object, idx: int, source: str) -> Dragee:
    if not isinstance(data, dict):
        msg = f"{source}: dragee at index {idx} must be a mapping"
        raise DrageeLoadError(msg)

    name = data.get("name")
    if name is None or not isinstance(name, str) or not name.strip():
        msg = f"{source}: dragee at index {idx} missing required 'name' field"
        raise DrageeLoadError(msg)

    depends_on = data.get("depends_on")
    if depends_on is not None and not isinstance(depends_on, dict):
        msg = f"{source}: dragee '{name}' has a 'depends_on' that is not a mapping"
        raise DrageeLoadError(msg)

    kind_of = data.get("kind_of")
    return Dragee(
        name=name,
        depends_on={str(k): v for k, v in depends_on.items()} if depends_on else None,
        kind_of=str(kind_of) if kind_of is not None else None,
    )


def load_dragees(path: Path) -> list[Dragee]:
    """Read a list of dragees from *path*.

    The format follows the suffix: ``.yml``/``.yaml`` for YAML, JSON otherwise.
    Raises :class:`DrageeLoadError` on unreadable files, syntax errors,
    invalid entries, or duplicate names.
    """
    try:
        with path.open("r", encoding="utf-8") as fh:
            if path.suffix in _YAML_SUFFIXES:
                data = yaml.safe_load(fh)
            else:
                data = json.load(fh)
    except OSError as exc:
        msg = f"Cannot read dragee file {path}: {exc}"
        raise DrageeLoadError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"{path.name}: not valid UTF-8: {exc}"
        raise DrageeLoadError(msg) from exc
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"{path.name}: invalid syntax: {exc}"
        raise DrageeLoadError(msg) from exc

    if data is None:
        return []
    if not isinstance(data, list):
        msg = f"{path.name}: expected a list of dragees"
        raise DrageeLoadError(msg)

    dragees: list[Dragee] = []
    seen_names: set[str] = set()
    for idx, item in enumerate(data):
        dragee = _parse_dragee(item, idx, path.name)
        if dragee.name in seen_names:
            msg = f"{path.name}: duplicate dragee name '{dragee.name}'"
            raise DrageeLoadError(msg)
        seen_names.add(dragee.name)
        dragees.append(dragee)

    return dragees
