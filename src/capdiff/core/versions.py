"""Compare two published versions of a package.

Two strategies are offered:

- ``compare_versions`` hands the comparison to the analyzer. The first
  version's capabilities are written to ``capslock.json`` inside its
  workspace. The analyzer then runs in compare mode from the second
  version's workspace against that file. Both workspaces stay alive until
  the comparison finishes.
- ``reconcile_versions`` acquires both snapshots and reconciles them with
  ``capdiff.core.reconcile``.
"""

from __future__ import annotations

from contextlib import ExitStack

from capdiff.core.acquirer import CAPABILITIES_FILE, SnapshotAcquirer
from capdiff.core.reconcile import DiffEntry, reconcile
from capdiff.core.workspace import preserve_cwd


def compare_versions(
    acquirer: SnapshotAcquirer, package: str, version1: str, version2: str
) -> str:
    """Run the analyzer's own comparison of two versions of ``package``.

    Returns:
        The analyzer's report.

    Raises:
        ComparisonExitError: The analyzer's compare mode exited non-zero.
            Its ``returncode`` should be passed on unchanged.
        AcquisitionError: Either workspace could not be prepared.
        AnalysisError: The first analysis failed.
    """
    with preserve_cwd(), ExitStack() as stack:
        first = stack.enter_context(acquirer.version_workspace(package, version1))
        baseline_file = acquirer.analyzer.write_capabilities_file(
            package, first, CAPABILITIES_FILE
        )
        second = stack.enter_context(acquirer.version_workspace(package, version2))
        return acquirer.analyzer.compare(package, second, baseline_file)


def reconcile_versions(
    acquirer: SnapshotAcquirer, package: str, version1: str, version2: str
) -> list[DiffEntry]:
    baseline = acquirer.acquire_version(package, version1)
    current = acquirer.acquire_version(package, version2)
    return reconcile(baseline, current)
