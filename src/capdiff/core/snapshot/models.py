"""Capability records and the keyed snapshot collection.

A snapshot is everything one analyzer run reported for one source tree. The
records are keyed by (capability, package directory). Reconciliation only
cares about whether a key is present, so the call path carried by a record
is there to justify the finding in a report. It never takes part in
comparisons.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from capdiff.core.snapshot.capabilities import Capability


# ---------------------------------------------------------------------------
# Call-path frames
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Site:
    """A source location inside a call path."""

    filename: str
    line: int = 0
    column: int = 0

    def location(self) -> str:
        """Return ``file:line:column``."""
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Function:
    """One frame of a call path.

    Attributes:
        name: Display name of the function, e.g. ``net/http.Get``.
        site: Where the call happens. None for frames the analyzer could
            not place, such as the terminal standard-library function.
        package: Import path of the package defining the function.
    """

    name: str
    site: Site | None = None
    package: str = ""


# ---------------------------------------------------------------------------
# CapabilityKey / CapabilityRecord
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class CapabilityKey:
    """Identity of a finding across snapshots.

    Ordering is by capability enum value, then by package directory. The
    report order is defined by this ordering.
    """

    capability: Capability
    package_dir: str


@dataclass(frozen=True)
class CapabilityRecord:
    """A single finding produced by the analyzer.

    Attributes:
        capability: The capability attributed to the package.
        package_dir: Directory (or module path) of the package. Together
            with ``capability`` this forms the record's key.
        package_name: The package's declared name.
        capability_type: Direct or transitive, as the analyzer reports it.
        path: The call path justifying the finding, outermost frame first.
        dep_path: The analyzer's compact one-line rendering of the path.
    """

    capability: Capability
    package_dir: str
    package_name: str = ""
    capability_type: str = ""
    path: tuple[Function, ...] = field(default_factory=tuple)
    dep_path: str = ""

    @property
    def key(self) -> CapabilityKey:
        return CapabilityKey(self.capability, self.package_dir)


# ---------------------------------------------------------------------------
# CapabilitySnapshot
# ---------------------------------------------------------------------------


class CapabilitySnapshot:
    """All records from one analyzer run, keyed by ``CapabilityKey``.

    Adding a record whose key is already present replaces the earlier one.
    The analyzer is not expected to repeat a key, but the collection does
    not reject it.

    Examples:
        >>> snap = CapabilitySnapshot.from_records([
        ...     CapabilityRecord(Capability.NETWORK, "example.com/a"),
        ... ])
        >>> CapabilityKey(Capability.NETWORK, "example.com/a") in snap
        True
    """

    def __init__(self) -> None:
        self._records: dict[CapabilityKey, CapabilityRecord] = {}

    @classmethod
    def from_records(cls, records: Iterable[CapabilityRecord]) -> CapabilitySnapshot:
        snap = cls()
        for record in records:
            snap.add(record)
        return snap

    def add(self, record: CapabilityRecord) -> None:
        """Insert a record, overwriting any record with the same key."""
        self._records[record.key] = record

    def get(self, key: CapabilityKey) -> CapabilityRecord | None:
        return self._records.get(key)

    def keys(self) -> list[CapabilityKey]:
        """Return the keys in insertion order."""
        return list(self._records)

    def records(self) -> list[CapabilityRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CapabilityKey]:
        return iter(self._records)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, CapabilityKey) and item in self._records

    def __repr__(self) -> str:
        return f"CapabilitySnapshot({len(self._records)} records)"
