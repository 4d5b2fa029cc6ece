"""Project configuration: read ``dragee.yml`` (dragee file and asserter rule directories)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "dragee.yml"


class ConfigError(Exception):
    """Raised when ``dragee.yml`` is unreadable or malformed."""


@dataclass(frozen=True)
class AsserterConfig:
    """One namespace and the directory holding its rule files."""

    namespace: str
    rules_dir: Path


@dataclass(frozen=True)
class DrageeConfig:
    """Resolved project configuration.  Paths are absolute."""

    dragees_path: Path | None = None
    asserters: tuple[AsserterConfig, ...] = field(default_factory=tuple)


def _parse_asserters(raw: object, project_root: Path) -> tuple[AsserterConfig, ...]:
    if not isinstance(raw, list):
        msg = f"{CONFIG_FILE_NAME}: 'asserters' must be a list"
        raise ConfigError(msg)

    asserters: list[AsserterConfig] = []
    seen: set[str] = set()
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            msg = f"{CONFIG_FILE_NAME}: asserter at index {idx} must be a mapping"
            raise ConfigError(msg)

        namespace = entry.get("namespace")
        if not isinstance(namespace, str) or not namespace.strip():
            msg = f"{CONFIG_FILE_NAME}: asserter at index {idx} missing required 'namespace' field"
            raise ConfigError(msg)
        if namespace in seen:
            msg = f"{CONFIG_FILE_NAME}: duplicate namespace '{namespace}'"
            raise ConfigError(msg)
        seen.add(namespace)

        rules = entry.get("rules")
        if not isinstance(rules, str) or not rules.strip():
            msg = f"{CONFIG_FILE_NAME}: asserter '{namespace}' missing required 'rules' directory"
            raise ConfigError(msg)

        asserters.append(AsserterConfig(namespace=namespace, rules_dir=project_root / rules))

    return tuple(asserters)


def load_config(project_root: Path, config_path: Path | None = None) -> DrageeConfig:
    """Load the project configuration.

    When *config_path* is ``None`` the default ``<project_root>/dragee.yml``
    is used; a missing default file yields an empty configuration.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = project_root / CONFIG_FILE_NAME

    if not config_path.is_file():
        if explicit:
            msg = f"Config file not found: {config_path}"
            raise ConfigError(msg)
        logger.debug("No %s in %s, using defaults", CONFIG_FILE_NAME, project_root)
        return DrageeConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        msg = f"Failed to read {config_path}: {exc}"
        raise ConfigError(msg) from exc

    if data is None:
        return DrageeConfig()
    if not isinstance(data, dict):
        msg = f"{CONFIG_FILE_NAME} must be a YAML mapping"
        raise ConfigError(msg)

    dragees_raw = data.get("dragees")
    dragees_path: Path | None = None
    if dragees_raw is not None:
        if not isinstance(dragees_raw, str) or not dragees_raw.strip():
            msg = f"{CONFIG_FILE_NAME}: 'dragees' must be a non-empty path"
            raise ConfigError(msg)
        dragees_path = project_root / dragees_raw

    asserters = _parse_asserters(data.get("asserters", []), project_root)
    return DrageeConfig(dragees_path=dragees_path, asserters=asserters)
