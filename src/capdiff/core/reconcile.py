"""Reconcile two capability snapshots into gained and lost entries.

Algorithm:
    1. Collect every key in the baseline, then every key of the current
       snapshot that the baseline lacks.
    2. Sort the keys by capability enum value, then by package directory.
       Dict iteration order follows insertion order, which depends on the
       analyzer's output order, so this sort alone fixes the report order.
    3. A key only in ``current`` is GAINED and carries the current call
       path. A key only in ``baseline`` is LOST and carries the baseline
       call path. A key in both is not reported, even when the two call
       paths differ.

``reconcile`` is total: it never raises, and two empty snapshots give an
empty result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from capdiff.core.snapshot import (
    Capability,
    CapabilityKey,
    CapabilitySnapshot,
    Function,
)


class Side(Enum):
    """Which snapshot an entry exists in. The value is the report marker."""

    GAINED = ">"
    LOST = "<"

    @property
    def marker(self) -> str:
        return self.value


@dataclass(frozen=True)
class DiffEntry:
    """One capability that appeared or disappeared between snapshots."""

    side: Side
    key: CapabilityKey
    path: tuple[Function, ...]

    @property
    def capability(self) -> Capability:
        return self.key.capability

    @property
    def package_dir(self) -> str:
        return self.key.package_dir


def _combined_keys(
    baseline: CapabilitySnapshot, current: CapabilitySnapshot
) -> list[CapabilityKey]:
    keys = list(baseline)
    keys.extend(k for k in current if k not in baseline)
    keys.sort()
    return keys


def reconcile(
    baseline: CapabilitySnapshot, current: CapabilitySnapshot
) -> list[DiffEntry]:
    """Return the ordered gained/lost entries between two snapshots.

    Args:
        baseline: The older snapshot.
        current: The newer snapshot.

    Returns:
        Entries in (capability, package directory) order. Empty when both
        snapshots hold the same keys.
    """
    entries: list[DiffEntry] = []
    for key in _combined_keys(baseline, current):
        old = baseline.get(key)
        new = current.get(key)
        if old is None and new is not None:
            entries.append(DiffEntry(Side.GAINED, key, new.path))
        elif old is not None and new is None:
            entries.append(DiffEntry(Side.LOST, key, old.path))
    return entries


def has_differences(entries: list[DiffEntry]) -> bool:
    return len(entries) > 0
