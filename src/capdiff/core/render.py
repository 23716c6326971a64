"""Plain-text and JSON rendering of reconciliation entries.

Text Format::

    > Package ./pkg/b has capability CAPABILITY_FILES:
    > pkg/b/b.go:10:2  example.com/pkg/b.Load
    >                  os.ReadFile

Each call-path frame is a marker, an optional ``file:line:column``
location, and the function name. Marker plus location form the first
column. That column is padded to the widest cell in the entry plus two
spaces, and is never narrower than ten characters, so the names line up.
These are the column rules of Go's ``text/tabwriter`` with minwidth 10 and
padding 2. Entries are separated by one blank line.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from capdiff.core.reconcile import DiffEntry, Side
from capdiff.core.snapshot import Function

MIN_WIDTH = 10
PADDING = 2


def header_line(entry: DiffEntry) -> str:
    return (
        f"{entry.side.marker} Package {entry.package_dir} "
        f"has capability {entry.capability.wire_name}:"
    )


def render_call_path(side: Side, path: Sequence[Function]) -> list[str]:
    """Return one aligned line per frame (without newlines)."""
    prefix = f"{side.marker} "
    cells = []
    for fn in path:
        cell = prefix + fn.site.location() if fn.site is not None else prefix
        cells.append((cell, fn.name))
    if not cells:
        return []
    width = max(MIN_WIDTH, max(len(cell) + PADDING for cell, _ in cells))
    return [cell.ljust(width) + name for cell, name in cells]


def render_entry(entry: DiffEntry) -> str:
    """Render one entry as a header line followed by its call path."""
    lines = [header_line(entry), *render_call_path(entry.side, entry.path)]
    return "\n".join(lines) + "\n"


def render_report(entries: Sequence[DiffEntry]) -> str:
    """Render all entries, separated by blank lines. Empty input gives ``""``."""
    return "\n".join(render_entry(e) for e in entries)


def _frame_to_json(fn: Function) -> dict[str, Any]:
    frame: dict[str, Any] = {"name": fn.name}
    if fn.package:
        frame["package"] = fn.package
    if fn.site is not None:
        frame["site"] = {
            "filename": fn.site.filename,
            "line": fn.site.line,
            "column": fn.site.column,
        }
    return frame


def entries_to_json(entries: Sequence[DiffEntry]) -> list[dict[str, Any]]:
    """Convert entries to JSON-serializable dicts, in report order."""
    return [
        {
            "change": "gained" if e.side is Side.GAINED else "lost",
            "package": e.package_dir,
            "capability": e.capability.wire_name,
            "path": [_frame_to_json(fn) for fn in e.path],
        }
        for e in entries
    ]
