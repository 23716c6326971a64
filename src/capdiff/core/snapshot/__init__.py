"""Capability snapshot data model.

Submodules
----------
- ``capabilities``: the ``Capability`` IntEnum mirrored from the analyzer.
- ``models``: ``Site``, ``Function``, ``CapabilityKey``, ``CapabilityRecord``,
  and the ``CapabilitySnapshot`` collection.
- ``parsing``: ``parse_snapshot`` for the analyzer's JSON output.

All public names are re-exported here::

    from capdiff.core.snapshot import CapabilitySnapshot, parse_snapshot
"""

from capdiff.core.snapshot.capabilities import Capability
from capdiff.core.snapshot.models import (
    CapabilityKey,
    CapabilityRecord,
    CapabilitySnapshot,
    Function,
    Site,
)
from capdiff.core.snapshot.parsing import parse_capability_info, parse_snapshot

__all__ = [
    "Capability",
    "CapabilityKey",
    "CapabilityRecord",
    "CapabilitySnapshot",
    "Function",
    "Site",
    "parse_capability_info",
    "parse_snapshot",
]
