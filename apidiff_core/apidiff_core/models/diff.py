"""Diff models produced while comparing two API models.

:class:`ReportEntry` is the unit handed to a report sink.
:class:`ReconciliationResult` is the per-level output of the set
reconciler, and :class:`DiffSummary` is the only thing the engine keeps
once a comparison finishes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ReportOutcome(str, Enum):
    """Classification of a reported difference."""

    ADDED = "ADDED"
    REMOVED = "REMOVED"
    CHANGED = "CHANGED"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ReportEntry(BaseModel):
    """One (level, outcome, items) tuple destined for presentation."""

    level_label: str = Field(
        ...,
        description="Human-readable level, e.g. 'classes in package com.a'.",
    )
    outcome: ReportOutcome
    items: list[str] = Field(
        default_factory=list,
        description="Identity keys of the items that were added, removed or changed.",
    )


@dataclass(frozen=True)
class ReconciliationResult(Generic[T]):
    """Three-way partition of two keyed collections.

    ``removed_keys`` and ``added_keys`` are sorted.  ``common_pairs`` holds
    the first left and first right item for every shared key, in key order.
    """

    removed_keys: list[str] = field(default_factory=list)
    added_keys: list[str] = field(default_factory=list)
    common_pairs: list[tuple[T, T]] = field(default_factory=list)

    @property
    def is_identical(self) -> bool:
        return not self.removed_keys and not self.added_keys


class DiffSummary(BaseModel):
    """Counters accumulated over one comparison run."""

    packages_compared: int = 0
    types_compared: int = 0
    methods_compared: int = 0
    entries: int = Field(default=0, description="Number of report entries emitted.")
    added: int = Field(default=0, description="Items reported as added, all levels.")
    removed: int = Field(default=0, description="Items reported as removed, all levels.")
    changed: int = Field(default=0, description="Methods reported as changed.")

    @property
    def has_differences(self) -> bool:
        return self.entries > 0

    def record(self, outcome: ReportOutcome, count: int) -> None:
        self.entries += 1
        if outcome is ReportOutcome.ADDED:
            self.added += count
        elif outcome is ReportOutcome.REMOVED:
            self.removed += count
        else:
            self.changed += count
