"""Acquire capability snapshots at a git revision or a published version.

Git Revision Algorithm:
    1. ``.`` means the caller's source directory as it is. The analyzer runs
       there directly, with no workspace and no git.
    2. Otherwise create a private workspace (see ``workspace``).
    3. Ask git for the repository's git directory and for the source
       directory's path relative to the top of the working tree.
    4. ``git clone --shared --no-checkout`` the history into the workspace.
       Objects are borrowed from the original repository, not copied.
    5. ``git reset --hard REVISION`` inside the workspace.
    6. Run the analyzer from the same relative directory in the clone, so
       the package selector keeps its meaning.

Package Version Algorithm:
    1. Create a workspace and ``go mod init`` a throwaway module in it.
    2. ``go get PACKAGE@VERSION``.
    3. Run the analyzer on PACKAGE from the workspace.

Each command receives its working directory explicitly. The whole
acquisition runs under ``preserve_cwd`` so the process directory is the same
on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from capdiff.config import Settings
from capdiff.core.analyzer import Analyzer
from capdiff.core.runner import CommandRunner, Runner
from capdiff.core.snapshot import CapabilitySnapshot
from capdiff.core.workspace import preserve_cwd, workspace
from capdiff.exceptions import AcquisitionError, CommandError

logger = logging.getLogger(__name__)

CURRENT_REVISION = "."
"""Revision sentinel meaning the source directory in its current state."""

WORKSPACE_MODULE = "capslockworkspace"
CAPABILITIES_FILE = "capslock.json"


class SnapshotAcquirer:
    """Produce ``CapabilitySnapshot`` objects for revisions and versions.

    Args:
        settings: Analyzer flags, timeout, and workspace options.
        runner: Command runner. Defaults to a ``CommandRunner`` configured
            from ``settings``.
        source_dir: Directory inside the git working tree that revisions
            are resolved from. Defaults to the current directory.
    """

    def __init__(
        self,
        settings: Settings,
        runner: Runner | None = None,
        source_dir: Path | None = None,
    ) -> None:
        self.settings = settings
        self.runner: Runner = runner or CommandRunner(settings.timeout, settings.verbose)
        self.analyzer = Analyzer(settings, self.runner)
        self.source_dir = Path(source_dir) if source_dir is not None else Path.cwd()

    # -- helpers -----------------------------------------------------------

    def _step(self, step: str, args: list[str], cwd: Path) -> str:
        try:
            return self.runner(args, cwd=cwd).stdout
        except CommandError as exc:
            raise AcquisitionError(step, exc) from exc

    def _workspace(self):
        return workspace(self.settings.tmp_base, keep=self.settings.keep_workspace)

    # -- git revisions -----------------------------------------------------

    def checkout(self, revision: str, tmpdir: Path) -> Path:
        """Populate ``tmpdir`` with the source at ``revision``.

        Returns:
            The directory inside ``tmpdir`` matching ``source_dir``.

        Raises:
            AcquisitionError: If any git step fails or the directory does
                not exist at that revision.
        """
        out = self._step(
            "locating git directory", ["git", "rev-parse", "--git-dir"], self.source_dir
        )
        git_dir = Path(out.rstrip("\n"))
        if not git_dir.is_absolute():
            git_dir = self.source_dir / git_dir
        logger.debug("git directory: %s", git_dir)

        out = self._step(
            "locating path in repository",
            ["git", "rev-parse", "--show-prefix"],
            self.source_dir,
        )
        prefix = out.rstrip("\n")
        logger.debug("current path in repository: %r", prefix)

        self._step(
            "cloning repository",
            ["git", "clone", "--shared", "--no-checkout", "--", str(git_dir), str(tmpdir)],
            self.source_dir,
        )
        self._step("resetting to revision", ["git", "reset", "--hard", revision], tmpdir)

        path = tmpdir / prefix if prefix else tmpdir
        if not path.is_dir():
            raise AcquisitionError(
                "switching to temporary directory",
                FileNotFoundError(f"no such directory at revision {revision!r}: {path}"),
            )
        logger.debug("analyzing in directory %s", path)
        return path

    def acquire(self, revision: str, selector: str) -> CapabilitySnapshot:
        """Analyze ``selector`` as it was at ``revision``.

        Args:
            revision: Any revision git understands, or ``.`` for the
                current state of ``source_dir``.
            selector: Package pattern passed to the analyzer, e.g. ``./...``.

        Raises:
            AcquisitionError: Workspace, git, or directory failures.
            AnalysisError: Analyzer failure or malformed output.
            ToolTimeoutError: A command exceeded the configured timeout.
        """
        logger.debug("analyzing at revision %r", revision)
        with preserve_cwd():
            if revision == CURRENT_REVISION:
                return self.analyzer.snapshot(selector, self.source_dir)
            with self._workspace() as tmpdir:
                path = self.checkout(revision, tmpdir)
                return self.analyzer.snapshot(selector, path)

    # -- published versions ------------------------------------------------

    def prepare_version_workspace(self, package: str, version: str, path: Path) -> None:
        """Fetch ``package`` at ``version`` into a fresh module at ``path``."""
        pinned = f"{package}@{version}"
        logger.debug("creating workspace for %r in %s", pinned, path)
        self._step(
            f"initializing module for {pinned!r}",
            ["go", "mod", "init", WORKSPACE_MODULE],
            path,
        )
        self._step(f"fetching {pinned!r}", ["go", "get", pinned], path)

    @contextmanager
    def version_workspace(self, package: str, version: str) -> Iterator[Path]:
        """Yield a workspace holding ``package`` at ``version``."""
        with self._workspace() as tmpdir:
            self.prepare_version_workspace(package, version, tmpdir)
            yield tmpdir

    def acquire_version(self, package: str, version: str) -> CapabilitySnapshot:
        """Analyze a published version of ``package``."""
        with preserve_cwd(), self.version_workspace(package, version) as tmpdir:
            return self.analyzer.snapshot(package, tmpdir)
