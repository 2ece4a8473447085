"""Rich and JSON rendering of API diff reports.

The report sinks here receive entries from the diff engine one at a time
and render them immediately; nothing is buffered.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from apidiff_core.models.diff import ReportOutcome

if TYPE_CHECKING:
    from apidiff_core.models.bytecode import ApiModel
    from apidiff_core.models.diff import DiffSummary


# ---------------------------------------------------------------------------
# Outcome colour mapping
# ---------------------------------------------------------------------------

OUTCOME_COLOURS: dict[ReportOutcome, str] = {
    ReportOutcome.ADDED: "green",
    ReportOutcome.REMOVED: "red",
    ReportOutcome.CHANGED: "cyan",
}


def _coloured_outcome(outcome: ReportOutcome) -> str:
    """Return a Rich markup string with the outcome colour-coded."""
    colour = OUTCOME_COLOURS.get(outcome, "white")
    return f"[{colour}]{outcome.label}[/{colour}]"


# ---------------------------------------------------------------------------
# Report sinks
# ---------------------------------------------------------------------------


class ConsoleReportSink:
    """Print each entry as a coloured header followed by one item per line.

    Example output::

        Removed classes in package com.example:
                Widget

    """

    def __init__(self, console: Console) -> None:
        self._console = console

    def report(self, level_label: str, outcome: ReportOutcome, items: Sequence[str]) -> None:
        colour = OUTCOME_COLOURS.get(outcome, "white")
        self._console.print(f"[{colour}]{outcome.label} {escape(level_label)}:[/{colour}]", soft_wrap=True)
        for item in items:
            # Descriptors contain '[' which Rich would read as markup.
            self._console.print(f"\t{item}", markup=False, highlight=False, soft_wrap=True)
        self._console.print()


class JsonReportSink:
    """Write each entry as one JSON object per line."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def report(self, level_label: str, outcome: ReportOutcome, items: Sequence[str]) -> None:
        record = {"level": level_label, "outcome": outcome.value, "items": list(items)}
        self._stream.write(json.dumps(record, sort_keys=True) + "\n")


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def display_diff_summary(
    console: Console,
    summary: DiffSummary,
    left: ApiModel,
    right: ApiModel,
) -> None:
    """Render per-outcome counts for a finished comparison.

    Parameters
    ----------
    console:
        Rich console to write to (typically stderr).
    summary:
        Counters returned by the diff engine.
    left, right:
        The base and target models, for the header line.
    """
    console.print(
        f"[bold]Base:[/bold]   {escape(left.source)} ({left.type_count} types)\n"
        f"[bold]Target:[/bold] {escape(right.source)} ({right.type_count} types)"
    )

    if not summary.has_differences:
        console.print("[green]No differences found.[/green]")
        return

    table = Table(
        title="API Differences",
        show_lines=False,
        pad_edge=True,
        expand=False,
    )
    table.add_column("Outcome")
    table.add_column("Items", justify="right")

    table.add_row(_coloured_outcome(ReportOutcome.REMOVED), str(summary.removed))
    table.add_row(_coloured_outcome(ReportOutcome.ADDED), str(summary.added))
    table.add_row(_coloured_outcome(ReportOutcome.CHANGED), str(summary.changed))

    console.print(table)
    console.print(
        f"[dim]{summary.packages_compared} packages, {summary.types_compared} types, "
        f"{summary.methods_compared} methods compared[/dim]"
    )
