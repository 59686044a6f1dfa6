"""
DSA utilities
=============

Small, explicit algorithm primitives used by the engine.

Included:
- Merge Sort (stable in both directions, O(n log n))
- Top-k selection on a stable ordering
"""

from __future__ import annotations
from typing import List, Callable, Sequence, TypeVar

T = TypeVar("T")


def merge_sort(arr: Sequence[T], key: Callable[[T], object] = lambda x: x, reverse: bool = False) -> List[T]:
    """Stable merge sort.

    Equal keys keep their input order, also when `reverse=True`.
    """
    if len(arr) <= 1:
        return list(arr)
    mid = len(arr) // 2
    left = merge_sort(arr[:mid], key=key, reverse=reverse)
    right = merge_sort(arr[mid:], key=key, reverse=reverse)
    return _merge(left, right, key=key, reverse=reverse)


def _merge(left: List[T], right: List[T], key: Callable[[T], object], reverse: bool) -> List[T]:
    out: List[T] = []
    # i and j are pointers into each sorted list
    i = j = 0
    while i < len(left) and j < len(right):
        a, b = key(left[i]), key(right[j])
        # ties go to the left half, which came first in the input
        take_left = (a >= b) if reverse else (a <= b)
        if take_left:
            out.append(left[i]); i += 1
        else:
            out.append(right[j]); j += 1
    out.extend(left[i:])
    out.extend(right[j:])
    return out


def top_k(arr: Sequence[T], k: int, key: Callable[[T], object]) -> List[T]:
    """First k items of `arr` ordered by descending key (ties in input order)."""
    if k <= 0:
        return []
    return merge_sort(arr, key=key, reverse=True)[:k]
