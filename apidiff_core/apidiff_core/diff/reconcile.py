"""Generic set reconciliation shared by every level of the API diff.

Two collections of the same level (packages, types or methods) are
partitioned into removed, added and common items by an identity key.
Neither collection needs to be sorted, deduplicated, or of matching size.

When a collection holds more than one item with the same key, only the
first occurrence takes part in the comparison; the rest are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

from apidiff_core.models.diff import ReconciliationResult, ReportOutcome

if TYPE_CHECKING:
    from apidiff_core.diff.engine import ReportSink

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _index_first(items: Iterable[T], key: Callable[[T], str]) -> dict[str, T]:
    index: dict[str, T] = {}
    for item in items:
        k = key(item)
        if k in index:
            logger.debug("Ignoring duplicate item for key %r", k)
            continue
        index[k] = item
    return index


def reconcile(
    left: Iterable[T],
    right: Iterable[T],
    key: Callable[[T], str],
) -> ReconciliationResult[T]:
    """Partition *left* and *right* by *key*.

    Parameters
    ----------
    left:
        Items from the base (old) model.
    right:
        Items from the target (new) model.
    key:
        Identity extractor applied to every item.

    Returns
    -------
    ReconciliationResult
        Removed and added keys sorted lexicographically, and the
        ``(left, right)`` pairs for every common key in key order.
    """
    left_index = _index_first(left, key)
    right_index = _index_first(right, key)

    left_keys = left_index.keys()
    right_keys = right_index.keys()

    return ReconciliationResult(
        removed_keys=sorted(left_keys - right_keys),
        added_keys=sorted(right_keys - left_keys),
        common_pairs=[(left_index[k], right_index[k]) for k in sorted(left_keys & right_keys)],
    )


def emit_reconciliation(
    result: ReconciliationResult[T],
    level_label: str,
    sink: ReportSink,
) -> list[tuple[ReportOutcome, int]]:
    """Hand the Removed and Added entries of *result* to *sink*.

    Empty partitions produce no entry.  Returns ``(outcome, item_count)``
    for each entry emitted, in emission order.
    """
    emitted: list[tuple[ReportOutcome, int]] = []
    if result.removed_keys:
        sink.report(level_label, ReportOutcome.REMOVED, list(result.removed_keys))
        emitted.append((ReportOutcome.REMOVED, len(result.removed_keys)))
    if result.added_keys:
        sink.report(level_label, ReportOutcome.ADDED, list(result.added_keys))
        emitted.append((ReportOutcome.ADDED, len(result.added_keys)))
    return emitted
