"""``capslock-git-diff BASELINE CURRENT [SELECTOR]``: compare two revisions.

Analyzes the packages matched by SELECTOR (default ``./...``, i.e. every
package under the current directory) at two revisions of the enclosing git
repository and reports the capabilities gained (``>``) and lost (``<``).
Use ``.`` as a revision to mean the working tree as it is now::

    capslock-git-diff main mybranch somepath/...
    capslock-git-diff main . somepath/...

Set CAPSLOCKTOOLSTMPDIR to choose where temporary clones are created.

Exit Codes:
    0 -- No capability differences.
    1 -- Capabilities were gained or lost.
    2 -- An error occurred.
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
from capdiff.core.reconcile import has_differences, reconcile
from capdiff.exceptions import CapDiffError

logger = logging.getLogger(__name__)

DEFAULT_SELECTOR = "./..."


@click.command("git")
@click.argument("baseline")
@click.argument("current")
@click.argument("selector", required=False, default=DEFAULT_SELECTOR)
@common_options
def git_diff_command(
    baseline: str,
    current: str,
    selector: str,
    verbose: bool,
    granularity: str,
    capabilities: str,
    timeout: float | None,
    keep_workspace: bool,
    analyzer: str | None,
    output_format: str,
    summary: bool,
) -> None:
    """Compare package capabilities at two git revisions.

    BASELINE and CURRENT are git revisions, or ``.`` for the current
    working tree. SELECTOR is the analyzer package pattern.

    Exit code 0 if nothing changed, 1 if capabilities differ, 2 on error.
    """
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

    # One acquisition at a time.
    try:
        baseline_snapshot = acquirer.acquire(baseline, selector)
        current_snapshot = acquirer.acquire(current, selector)
    except CapDiffError as exc:
        logger.error("%s", exc)
        sys.exit(EXIT_ERROR)

    entries = reconcile(baseline_snapshot, current_snapshot)
    emit_entries(
        entries,
        output_format,
        {"baseline": baseline, "current": current, "packages": selector},
    )
    if summary:
        print_summary(entries)
    sys.exit(EXIT_DIFFERENT if has_differences(entries) else EXIT_SAME)
