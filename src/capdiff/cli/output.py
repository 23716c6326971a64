"""Output helpers for the capdiff CLI.

The report itself is plain text (or JSON) on stdout so it can be piped and
diffed. The optional summary table is drawn with Rich on stderr.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from capdiff.core.reconcile import DiffEntry, Side, has_differences
from capdiff.core.render import entries_to_json, render_report
from capdiff.core.snapshot import Capability

console = Console(stderr=True)


def emit_entries(
    entries: Sequence[DiffEntry],
    output_format: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Write the reconciliation result to stdout.

    Args:
        entries: Ordered entries from ``reconcile``.
        output_format: ``text`` or ``json``.
        context: Extra top-level fields for JSON output, such as the
            compared revisions.
    """
    if output_format == "json":
        payload = dict(context or {})
        payload["different"] = has_differences(list(entries))
        payload["entries"] = entries_to_json(entries)
        click.echo(json.dumps(payload, indent=2))
        return
    report = render_report(entries)
    if report:
        click.echo(report, nl=False)


def summary_counts(entries: Sequence[DiffEntry]) -> dict[Capability, tuple[int, int]]:
    """Count (gained, lost) entries per capability, in capability order."""
    counts: dict[Capability, list[int]] = {}
    for entry in entries:
        pair = counts.setdefault(entry.capability, [0, 0])
        pair[0 if entry.side is Side.GAINED else 1] += 1
    return {cap: (g, lost) for cap, (g, lost) in sorted(counts.items())}


def print_summary(entries: Sequence[DiffEntry], out: Console | None = None) -> None:
    """Print a table of gained and lost capabilities."""
    out = out or console
    counts = summary_counts(entries)
    if not counts:
        out.print("[dim]No capability changes.[/dim]")
        return

    table = Table(title="Capability Changes", show_header=True, header_style="bold")
    table.add_column("Capability", style="bold")
    table.add_column("Gained", justify="right")
    table.add_column("Lost", justify="right")
    for cap, (gained, lost) in counts.items():
        table.add_row(
            cap.wire_name,
            Text(str(gained), style="red" if gained else "dim"),
            Text(str(lost), style="green" if lost else "dim"),
        )
    out.print(table)
