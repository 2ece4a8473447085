"""Domain models for the API diff engine."""

from apidiff_core.models.bytecode import ApiModel, ClassInfo, MethodInfo, PackageInfo
from apidiff_core.models.diff import (
    DiffSummary,
    ReconciliationResult,
    ReportEntry,
    ReportOutcome,
)

__all__ = [
    "ApiModel",
    "ClassInfo",
    "DiffSummary",
    "MethodInfo",
    "PackageInfo",
    "ReconciliationResult",
    "ReportEntry",
    "ReportOutcome",
]
