"""Temporary workspaces and the working-directory guard.

``workspace`` creates one private directory per acquisition and removes it
when the ``with`` block exits, whether or not the block raised. Pass
``keep=True`` to leave it on disk for inspection. Its path is then logged.

``preserve_cwd`` records the process working directory on entry and puts it
back on exit. If restoring fails, a ``RestoreError`` is raised only when the
block itself succeeded. Otherwise the block's own error propagates
unchanged.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from capdiff.exceptions import AcquisitionError, RestoreError

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "capdiff-"


def make_temp_dir(base: Path | None = None) -> Path:
    """Create a fresh directory under ``base`` (or the system temp dir).

    Raises:
        AcquisitionError: If the directory cannot be created.
    """
    try:
        path = Path(tempfile.mkdtemp(prefix=WORKSPACE_PREFIX, dir=base))
    except OSError as exc:
        raise AcquisitionError("creating temporary directory", exc) from exc
    logger.debug("created temporary directory %s", path)
    return path


def cleanup_workspace(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path, ignore_errors=True)
    logger.debug("removed workspace %s", path)


@contextmanager
def workspace(base: Path | None = None, *, keep: bool = False) -> Iterator[Path]:
    """Yield a new private directory and remove it afterwards.

    Args:
        base: Parent directory. None uses the platform default.
        keep: Leave the directory in place when the block exits.
    """
    path = make_temp_dir(base)
    try:
        yield path
    finally:
        if keep:
            logger.warning("keeping workspace %s", path)
        else:
            cleanup_workspace(path)


def _restore_cwd(original: str) -> None:
    try:
        current: str | None = os.getcwd()
    except FileNotFoundError:
        current = None
    if current != original:
        os.chdir(original)
        logger.debug("returned to working directory %s", original)


@contextmanager
def preserve_cwd() -> Iterator[Path]:
    """Guarantee the process working directory is unchanged on exit.

    Yields:
        The working directory at entry.

    Raises:
        AcquisitionError: If the current directory cannot be determined.
        RestoreError: If it cannot be restored and the block did not raise.
    """
    try:
        original = os.getcwd()
    except OSError as exc:
        raise AcquisitionError("determining working directory", exc) from exc

    failed = False
    try:
        yield Path(original)
    except BaseException:
        failed = True
        raise
    finally:
        try:
            _restore_cwd(original)
        except OSError as exc:
            if not failed:
                raise RestoreError(exc) from exc
            logger.warning("returning to working directory %s: %s", original, exc)
