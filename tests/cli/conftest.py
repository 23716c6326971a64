"""Shared fixtures for CLI tests.

The commands build their own ``SnapshotAcquirer``. These fixtures swap in a
fake that returns canned snapshots per revision and remembers the settings
it was built with, so the commands can be exercised without git or an
analyzer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner

from capdiff.config import Settings
from capdiff.core.snapshot import CapabilitySnapshot


class FakeAcquirer:
    """Returns ``snapshots[revision]`` or raises it if it is an exception."""

    instances: list[FakeAcquirer] = []

    def __init__(self, settings: Settings, snapshots: dict[str, Any]) -> None:
        self.settings = settings
        self.snapshots = snapshots
        self.calls: list[tuple[str, str]] = []
        FakeAcquirer.instances.append(self)

    def acquire(self, revision: str, selector: str) -> CapabilitySnapshot:
        self.calls.append((revision, selector))
        result = self.snapshots[revision]
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def fake_acquirer(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., type[FakeAcquirer]]:
    """Patch the git command's acquirer to serve the given snapshots.

    Returns a function taking a ``{revision: snapshot}`` dict and returning
    the fake class, whose ``instances`` list records every acquirer the
    command built.
    """
    FakeAcquirer.instances = []

    def install(snapshots: dict[str, Any]) -> type[FakeAcquirer]:
        def factory(settings: Settings) -> FakeAcquirer:
            return FakeAcquirer(settings, snapshots)

        monkeypatch.setattr("capdiff.cli.git_diff.SnapshotAcquirer", factory)
        return FakeAcquirer

    return install
