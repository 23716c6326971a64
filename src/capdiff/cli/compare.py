"""``capslock-compare PACKAGE VERSION1 VERSION2``: compare two releases.

Creates a temporary Go module workspace per version, fetches the package
into it, and lets the analyzer's ``-output=compare`` mode report the
differences. The analyzer's exit status is passed on as-is, since a
non-zero status may simply mean differences were found::

    capslock-compare some.package/name/foo v1.1 v1.2
    capslock-compare some.package/name/... v1.1 v1.2

With ``--builtin`` both versions are analyzed to JSON and reconciled by
capdiff instead. The exit codes are then the same as ``capslock-git-diff``.

Exit Codes:
    0 -- Comparison completed (builtin: no differences).
    1 -- Builtin only: capabilities were gained or lost.
    2 -- An error occurred before the comparison ran.
    N -- Any other non-zero status returned by the analyzer's compare mode.
"""

from __future__ import annotations

import logging
import sys

import click

from capdiff.cli.options import (
    EXIT_DIFFERENT,
    EXIT_ERROR,
    EXIT_SAME,
    build_settings,
    common_options,
    configure_logging,
)
from capdiff.cli.output import emit_entries, print_summary
from capdiff.core.acquirer import SnapshotAcquirer
from capdiff.core.reconcile import has_differences
from capdiff.core.versions import compare_versions, reconcile_versions
from capdiff.exceptions import CapDiffError, ComparisonExitError

logger = logging.getLogger(__name__)


@click.command("compare")
@click.argument("package")
@click.argument("version1")
@click.argument("version2")
@common_options
@click.option(
    "--builtin",
    is_flag=True,
    help="Reconcile with capdiff instead of the analyzer's compare mode.",
)
def compare_command(
    package: str,
    version1: str,
    version2: str,
    verbose: bool,
    granularity: str,
    capabilities: str,
    timeout: float | None,
    keep_workspace: bool,
    analyzer: str | None,
    output_format: str,
    summary: bool,
    builtin: bool,
) -> None:
    """Compare the capabilities of two published versions of PACKAGE."""
    if not builtin and (output_format != "text" or summary):
        raise click.UsageError("--format json and --summary require --builtin")

    configure_logging(verbose)
    settings = build_settings(
        verbose=verbose,
        granularity=granularity,
        capabilities=capabilities,
        timeout=timeout,
        keep_workspace=keep_workspace,
        analyzer=analyzer,
    )
    acquirer = SnapshotAcquirer(settings)

    if builtin:
        try:
            entries = reconcile_versions(acquirer, package, version1, version2)
        except CapDiffError as exc:
            logger.error("%s", exc)
            sys.exit(EXIT_ERROR)
        emit_entries(
            entries,
            output_format,
            {"package": package, "baseline": version1, "current": version2},
        )
        if summary:
            print_summary(entries)
        sys.exit(EXIT_DIFFERENT if has_differences(entries) else EXIT_SAME)

    try:
        report = compare_versions(acquirer, package, version1, version2)
    except ComparisonExitError as exc:
        if exc.returncode is not None and exc.returncode > 0:
            click.echo(exc.output, nl=False)
            if exc.stderr:
                click.echo(exc.stderr, err=True)
            sys.exit(exc.returncode)
        logger.error("Error: %s", exc)
        sys.exit(EXIT_ERROR)
    except CapDiffError as exc:
        logger.error("Error: %s", exc)
        sys.exit(EXIT_ERROR)
    click.echo(report, nl=False)
