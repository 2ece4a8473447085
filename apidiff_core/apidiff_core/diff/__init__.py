"""Hierarchical diff engine for compiled Java API surfaces."""

from apidiff_core.diff.body import (
    LAMBDA_PREFIX,
    METHOD_BODY_BLACKLIST,
    find_changed_methods,
    has_body_changed,
    is_body_check_excluded,
)
from apidiff_core.diff.engine import (
    SYNTHETIC_MARKER,
    ApiDiffer,
    CollectingSink,
    ReportSink,
    compare_api_models,
    is_synthetic,
)
from apidiff_core.diff.identity import METHOD_KEY_SEPARATOR, method_key, package_key, type_key
from apidiff_core.diff.reconcile import emit_reconciliation, reconcile

__all__ = [
    "LAMBDA_PREFIX",
    "METHOD_BODY_BLACKLIST",
    "METHOD_KEY_SEPARATOR",
    "SYNTHETIC_MARKER",
    "ApiDiffer",
    "CollectingSink",
    "ReportSink",
    "compare_api_models",
    "emit_reconciliation",
    "find_changed_methods",
    "has_body_changed",
    "is_body_check_excluded",
    "is_synthetic",
    "method_key",
    "package_key",
    "reconcile",
    "type_key",
]
