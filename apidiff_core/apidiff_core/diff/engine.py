"""Hierarchical diff of two API models.

Packages are reconciled by name, types within each common package by
simple name, and methods within each common type by ``name :: descriptor``.
Every difference is handed to a :class:`ReportSink` as soon as it is found;
the engine itself only keeps a :class:`DiffSummary` of counters.

Filtering rules applied during traversal:

* methods whose name contains ``$`` are compiler scaffolding and are
  dropped from both sides before reconciliation;
* enum types never get body-change detection, since their generated
  accessors differ between otherwise identical builds;
* body-change detection can be switched off for the whole run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from apidiff_core.diff.body import find_changed_methods
from apidiff_core.diff.identity import method_key, package_key, type_key
from apidiff_core.diff.reconcile import emit_reconciliation, reconcile
from apidiff_core.models.bytecode import ApiModel, ClassInfo, MethodInfo, PackageInfo
from apidiff_core.models.diff import DiffSummary, ReportEntry, ReportOutcome

logger = logging.getLogger(__name__)

SYNTHETIC_MARKER = "$"


def is_synthetic(method: MethodInfo) -> bool:
    return SYNTHETIC_MARKER in method.name


# ---------------------------------------------------------------------------
# Report sinks
# ---------------------------------------------------------------------------


@runtime_checkable
class ReportSink(Protocol):
    """Receives every difference the engine finds.

    The sink owns all presentation and is never consulted for decisions.
    """

    def report(self, level_label: str, outcome: ReportOutcome, items: Sequence[str]) -> None: ...


class CollectingSink:
    """Sink that keeps every entry in memory, in emission order."""

    def __init__(self) -> None:
        self.entries: list[ReportEntry] = []

    def report(self, level_label: str, outcome: ReportOutcome, items: Sequence[str]) -> None:
        self.entries.append(ReportEntry(level_label=level_label, outcome=outcome, items=list(items)))

    def by_outcome(self, outcome: ReportOutcome) -> list[ReportEntry]:
        return [entry for entry in self.entries if entry.outcome is outcome]


class _CountingSink:
    """Forwards to the real sink and tallies what went through."""

    def __init__(self, sink: ReportSink, summary: DiffSummary) -> None:
        self._sink = sink
        self._summary = summary

    def report(self, level_label: str, outcome: ReportOutcome, items: Sequence[str]) -> None:
        self._sink.report(level_label, outcome, items)
        self._summary.record(outcome, len(items))


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ApiDiffer:
    """Drives the package -> type -> method traversal.

    Parameters
    ----------
    sink:
        Destination for report entries.
    detect_changes:
        When ``False`` no method-body comparison is done and no Changed
        entries are produced.
    """

    def __init__(self, sink: ReportSink, *, detect_changes: bool = True) -> None:
        self._sink = sink
        self._detect_changes = detect_changes

    def compare(self, left: ApiModel, right: ApiModel) -> DiffSummary:
        summary = DiffSummary()
        sink = _CountingSink(self._sink, summary)

        packages = reconcile(left.packages, right.packages, package_key)
        emit_reconciliation(packages, "packages", sink)

        for left_package, right_package in packages.common_pairs:
            summary.packages_compared += 1
            self._compare_package(left_package, right_package, sink, summary)

        logger.debug(
            "Compared %d packages, %d types, %d methods; %d entries emitted",
            summary.packages_compared,
            summary.types_compared,
            summary.methods_compared,
            summary.entries,
        )
        return summary

    def _compare_package(
        self,
        left: PackageInfo,
        right: PackageInfo,
        sink: ReportSink,
        summary: DiffSummary,
    ) -> None:
        types = reconcile(left.types, right.types, type_key)
        emit_reconciliation(types, f"classes in package {left.name}", sink)

        for left_type, right_type in types.common_pairs:
            summary.types_compared += 1
            self._compare_type(left_type, right_type, sink, summary)

    def _compare_type(
        self,
        left: ClassInfo,
        right: ClassInfo,
        sink: ReportSink,
        summary: DiffSummary,
    ) -> None:
        methods = reconcile(
            [m for m in left.methods if not is_synthetic(m)],
            [m for m in right.methods if not is_synthetic(m)],
            method_key,
        )
        emit_reconciliation(methods, f"methods in class {left.qualified_name}", sink)
        summary.methods_compared += len(methods.common_pairs)

        if left.is_enum:
            logger.debug("Skipping body comparison for enum %s", left.qualified_name)
            return

        if not self._detect_changes:
            return

        changed = find_changed_methods(methods.common_pairs)
        if changed:
            sink.report(f"methods in type {left.qualified_name}", ReportOutcome.CHANGED, changed)


def compare_api_models(
    left: ApiModel,
    right: ApiModel,
    sink: ReportSink,
    *,
    detect_changes: bool = True,
) -> DiffSummary:
    """Compare *left* (base) against *right* (target), reporting into *sink*."""
    return ApiDiffer(sink, detect_changes=detect_changes).compare(left, right)
