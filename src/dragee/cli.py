"""Dragee CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from dragee import __version__
from dragee.asserter.registry import RuleLoadError, load_asserter
from dragee.config import ConfigError, load_config
from dragee.loader import DrageeLoadError, load_dragees

if TYPE_CHECKING:
    from dragee.asserter.registry import Asserter


@click.group()
@click.version_option(version=__version__, prog_name="dragee")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output (debug logging).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool) -> None:
    """Dragee - architecture-conformance rule engine."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _resolve_asserters(
    project_root: Path,
    config_path: Path | None,
    namespace: str | None,
    rules_dir: Path | None,
) -> list[Asserter]:
    """Build the asserters selected by the command line options.

    ``--rules`` bypasses the configuration and needs ``--namespace``;
    otherwise the configured asserters are used, optionally filtered by
    ``--namespace``.
    """
    if rules_dir is not None:
        if namespace is None:
            msg = "--rules requires --namespace"
            raise ConfigError(msg)
        return [load_asserter(namespace, rules_dir)]

    config = load_config(project_root, config_path)
    selected = [a for a in config.asserters if namespace is None or a.namespace == namespace]
    if not selected:
        if namespace is not None:
            msg = f"Unknown namespace '{namespace}'"
        else:
            msg = "No asserters configured (add 'asserters' to dragee.yml or pass --rules)"
        raise ConfigError(msg)

    return [load_asserter(a.namespace, a.rules_dir) for a in selected]


@main.command()
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to dragee.yml (default: <project>/dragee.yml).",
)
@click.option(
    "--dragees",
    "dragees_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Dragee file (JSON or YAML); overrides the configured one.",
)
@click.option("--namespace", default=None, help="Only run this asserter namespace.")
@click.option(
    "--rules",
    "rules_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Rule directory to run instead of the configured asserters (needs --namespace).",
)
@click.option("--rule", "rule_name", default=None, help="Only run the rule with this name.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if any report fails.",
)
def check(
    *,
    project: Path | None,
    config_path: Path | None,
    dragees_path: Path | None,
    namespace: str | None,
    rules_dir: Path | None,
    rule_name: str | None,
    fmt: str | None,
    strict: bool,
) -> None:
    """Check dragees against the asserter rules and print the reports.

    Exit codes: 0 = all reports pass, or failures without --strict,
    1 = failures with --strict, 2 = configuration or loading error.
    """
    from dragee.asserter.engine import asserter_handler, generate_report_for_rule
    from dragee.asserter.formatters import format_json, format_porcelain, format_rich

    project_root = project or Path.cwd()

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        asserters = _resolve_asserters(project_root, config_path, namespace, rules_dir)
        if dragees_path is None:
            dragees_path = load_config(project_root, config_path).dragees_path
        if dragees_path is None:
            msg = "No dragee file given (pass --dragees or set 'dragees' in dragee.yml)"
            raise ConfigError(msg)
        dragees = load_dragees(dragees_path)
    except (ConfigError, RuleLoadError, DrageeLoadError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if rule_name is not None:
        reports = [generate_report_for_rule(a, dragees, rule_name) for a in asserters]
    else:
        reports = [asserter_handler(a, dragees) for a in asserters]

    formatters = {
        "rich": format_rich,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](reports)
    if output:
        click.echo(output)

    if strict and not all(r.passed for r in reports):
        sys.exit(1)


@main.command()
@click.option(
    "--project",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to dragee.yml (default: <project>/dragee.yml).",
)
@click.option("--namespace", default=None, help="Only list this asserter namespace.")
@click.option(
    "--rules",
    "rules_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Rule directory to list instead of the configured asserters (needs --namespace).",
)
def rules(
    *,
    project: Path | None,
    config_path: Path | None,
    namespace: str | None,
    rules_dir: Path | None,
) -> None:
    """List discovered rules with their ids and severities."""
    project_root = project or Path.cwd()

    try:
        asserters = _resolve_asserters(project_root, config_path, namespace, rules_dir)
    except (ConfigError, RuleLoadError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    for asserter in asserters:
        for rule in asserter.rules:
            click.echo(f"{asserter.namespace}\t{rule.id}\t{rule.severity.value}\t{rule.label}")
