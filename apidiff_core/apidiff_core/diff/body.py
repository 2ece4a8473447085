"""Leaf-level comparison of compiled method bodies.

Two methods with the same identity are considered changed when their raw
instruction bytes differ.  No instruction-level normalisation is done, so
a recompilation that reorders the constant pool will show up as a change.
"""

from __future__ import annotations

from collections.abc import Iterable

from apidiff_core.diff.identity import method_key
from apidiff_core.models.bytecode import MethodInfo

# Bodies of these methods vary for reasons unrelated to API behaviour.
METHOD_BODY_BLACKLIST: frozenset[str] = frozenset(
    {
        "<clinit>",
        "hashCode",
        "toString",
        "valueOf",
        "<init>",
    }
)

LAMBDA_PREFIX = "lambda$"


def is_body_check_excluded(name: str) -> bool:
    return name in METHOD_BODY_BLACKLIST or name.startswith(LAMBDA_PREFIX)


def has_body_changed(left: MethodInfo, right: MethodInfo) -> bool:
    """Return ``True`` when the two bodies are observably different.

    Abstract and native methods have no body; two of them are equal.  A
    body on one side only counts as a change.
    """
    if left.code is None and right.code is None:
        return False
    if left.code is None or right.code is None:
        return True
    return left.code != right.code


def find_changed_methods(pairs: Iterable[tuple[MethodInfo, MethodInfo]]) -> list[str]:
    """Return the ``name :: descriptor`` of every changed, non-excluded pair."""
    changed: list[str] = []
    for left, right in pairs:
        if is_body_check_excluded(left.name):
            continue
        if has_body_changed(left, right):
            changed.append(method_key(left))
    return changed
