from __future__ import annotations
from typing import Any, Collection, Iterable, List, Mapping, Sequence, Tuple

def not_empty(value: Iterable[Any], name: str = "value") -> None:
    if value is None:
        raise AssertionError(f"{name} is None")
    try:
        if len(value) == 0:  # type: ignore[arg-type]
            raise AssertionError(f"{name} is empty")
    except TypeError:
        if not any(True for _ in value):
            raise AssertionError(f"{name} produced no items")

def missing_keys(obj: Mapping[str, Any], keys: Sequence[str]) -> List[str]:
    return [k for k in keys if obj.get(k) in (None, "")]

def partition_known(requested: Sequence[str], known: Collection[str]) -> Tuple[List[str], List[str]]:
    """Split requested names into (present, absent), keeping the supplied order.

    Matching is exact and case-sensitive.
    """
    present = [t for t in requested if t in known]
    absent = [t for t in requested if t not in known]
    return present, absent
