"""Shared fixtures for capdiff tests."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from capdiff.config import Settings
from capdiff.core.snapshot import (
    Capability,
    CapabilityRecord,
    CapabilitySnapshot,
    Function,
    Site,
)
from tests.helpers import FakeRunner


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with workspaces created under a per-test directory."""
    base = tmp_path / "workspaces"
    base.mkdir()
    return Settings(tmp_base=base)


def _info(
    capability: str,
    package_dir: str,
    path: Sequence[tuple[Any, ...]] = (),
) -> dict[str, Any]:
    frames = []
    for frame in path:
        if len(frame) == 1:
            frames.append({"name": frame[0]})
        else:
            filename, line, column, name = frame
            frames.append({
                "name": name,
                "site": {"filename": filename, "line": str(line), "column": str(column)},
            })
    return {
        "packageName": package_dir.rsplit("/", 1)[-1],
        "capability": capability,
        "path": frames,
        "packageDir": package_dir,
        "capabilityType": "CAPABILITY_TYPE_TRANSITIVE",
    }


@pytest.fixture
def capslock_json() -> Callable[..., str]:
    """Build analyzer JSON output.

    Each argument is ``(capability, package_dir)`` or
    ``(capability, package_dir, path)``. Path frames are
    ``(filename, line, column, name)`` or ``(name,)``.
    """

    def build(*infos: tuple[Any, ...]) -> str:
        return json.dumps({"capabilityInfo": [_info(*i) for i in infos]})

    return build


@pytest.fixture
def make_record() -> Callable[..., CapabilityRecord]:
    """Create a CapabilityRecord with an optional one-frame call path."""

    def build(
        capability: Capability,
        package_dir: str,
        *names: str,
    ) -> CapabilityRecord:
        path = tuple(
            Function(name=n, site=Site(f"{package_dir}/x.go", i + 1, 2))
            for i, n in enumerate(names)
        )
        return CapabilityRecord(capability=capability, package_dir=package_dir, path=path)

    return build


@pytest.fixture
def make_snapshot(make_record: Callable[..., CapabilityRecord]) -> Callable[..., CapabilitySnapshot]:
    """Create a snapshot from ``(capability, package_dir)`` pairs."""

    def build(*keys: tuple[Capability, str]) -> CapabilitySnapshot:
        return CapabilitySnapshot.from_records(
            make_record(cap, pkg, f"{pkg}.F") for cap, pkg in keys
        )

    return build
