"""Tests for comparing two published versions of a package."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from capdiff.config import Settings
from capdiff.core.acquirer import CAPABILITIES_FILE, SnapshotAcquirer
from capdiff.core.reconcile import Side
from capdiff.core.snapshot import Capability
from capdiff.core.versions import compare_versions, reconcile_versions
from capdiff.exceptions import AcquisitionError, ComparisonExitError
from tests.helpers import FakeRunner

PACKAGE = "example.com/lib"


class _Analyzer:
    """Scripted capslock: JSON mode by version, compare mode by status."""

    def __init__(self, json_by_dir: Callable[[Path], str], compare: tuple[int, str]) -> None:
        self.json_by_dir = json_by_dir
        self.compare = compare
        self.baseline_seen: str | None = None

    def __call__(self, argv: tuple[str, ...], cwd: Path) -> tuple[int, str]:
        if "-output=compare" in argv:
            baseline = Path(argv[-1])
            assert baseline.is_file()
            self.baseline_seen = baseline.read_text()
            return self.compare
        return 0, self.json_by_dir(cwd)


class TestCompareVersions:

    def test_call_order_and_directories(
        self, settings: Settings, capslock_json: Callable[..., str]
    ) -> None:
        doc = capslock_json(("CAPABILITY_FILES", PACKAGE))
        script = _Analyzer(lambda cwd: doc, (0, "no new capabilities\n"))
        runner = FakeRunner({("capslock",): script})

        out = compare_versions(SnapshotAcquirer(settings, runner), PACKAGE, "v1.0.0", "v1.1.0")
        assert out == "no new capabilities\n"

        commands = runner.commands
        assert [c[:2] for c in commands] == [
            ("go", "mod"), ("go", "get"), ("capslock", "-packages=example.com/lib"),
            ("go", "mod"), ("go", "get"), ("capslock", "-packages=example.com/lib"),
        ]
        assert commands[1][2] == f"{PACKAGE}@v1.0.0"
        assert commands[4][2] == f"{PACKAGE}@v1.1.0"
        assert "-output=json" in commands[2]
        assert "-output=compare" in commands[5]

        first, second = runner.calls[0][1], runner.calls[3][1]
        assert first != second
        assert runner.calls[2][1] == first
        assert runner.calls[5][1] == second
        assert commands[5][-1] == str((first / CAPABILITIES_FILE).resolve())
        assert script.baseline_seen == doc

    def test_workspaces_removed(
        self, settings: Settings, capslock_json: Callable[..., str]
    ) -> None:
        script = _Analyzer(lambda cwd: capslock_json(), (0, ""))
        runner = FakeRunner({("capslock",): script})
        compare_versions(SnapshotAcquirer(settings, runner), PACKAGE, "v1", "v2")
        assert settings.tmp_base is not None
        assert list(settings.tmp_base.iterdir()) == []

    def test_nonzero_compare_status_is_carried(
        self, settings: Settings, capslock_json: Callable[..., str]
    ) -> None:
        script = _Analyzer(lambda cwd: capslock_json(), (1, "Added 1 new capability\n"))
        runner = FakeRunner({("capslock",): script})
        with pytest.raises(ComparisonExitError) as info:
            compare_versions(SnapshotAcquirer(settings, runner), PACKAGE, "v1", "v2")
        assert info.value.returncode == 1
        assert info.value.output == "Added 1 new capability\n"
        assert list(settings.tmp_base.iterdir()) == []

    def test_second_fetch_failure(
        self, settings: Settings, capslock_json: Callable[..., str]
    ) -> None:
        runner = FakeRunner({
            ("go", "get", f"{PACKAGE}@v2"): (1, ""),
            ("capslock",): (0, capslock_json()),
        })
        with pytest.raises(AcquisitionError) as info:
            compare_versions(SnapshotAcquirer(settings, runner), PACKAGE, "v1", "v2")
        assert "v2" in info.value.step
        assert not any("-output=compare" in c for c in runner.commands)


class TestReconcileVersions:

    def test_gained_and_lost(
        self, settings: Settings, capslock_json: Callable[..., str]
    ) -> None:
        versions: list[str] = []

        def record_version(argv: tuple[str, ...], cwd: Path) -> tuple[int, str]:
            versions.append(argv[2].rsplit("@", 1)[1])
            return 0, ""

        def by_version(argv: tuple[str, ...], cwd: Path) -> tuple[int, str]:
            if versions[-1] == "v1":
                return 0, capslock_json(("CAPABILITY_FILES", PACKAGE))
            return 0, capslock_json(("CAPABILITY_NETWORK", PACKAGE))

        runner = FakeRunner({("go", "get"): record_version, ("capslock",): by_version})
        entries = reconcile_versions(SnapshotAcquirer(settings, runner), PACKAGE, "v1", "v2")
        assert [(e.side, e.capability) for e in entries] == [
            (Side.LOST, Capability.FILES),
            (Side.GAINED, Capability.NETWORK),
        ]
