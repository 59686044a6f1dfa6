"""
Indices (precomputed lookup tables)
===================================

Built once over the cleaned record set, so every view reads the same lookups.

Example:
- `by_category[Category.STRONG]` gives the positions of all Strong records.
- `at_or_above(idx, 6.0)` gives positions of records with magnitude >= 6.0.

Positions are indices into the cleaned record tuple and are always returned
in ascending order, i.e. in file order. The lookups are read-only.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple
from bisect import bisect_left
from .models import Category, Quake


@dataclass(frozen=True)
class Indices:
    """Container of precomputed indices for the views."""
    by_category: Mapping[Category, Tuple[int, ...]]
    # (magnitude, position) pairs sorted by magnitude
    mags_sorted: Tuple[Tuple[float, int], ...]


def build_indices(quakes: Sequence[Quake]) -> Indices:
    """Build indices from the cleaned record set."""
    by_category: Dict[Category, List[int]] = {}
    for pos, q in enumerate(quakes):
        by_category.setdefault(q.category, []).append(pos)

    mags_sorted = tuple(sorted((q.magnitude, pos) for pos, q in enumerate(quakes)))
    return Indices(
        by_category=MappingProxyType({c: tuple(ids) for c, ids in by_category.items()}),
        mags_sorted=mags_sorted,
    )


def at_or_above(idx: Indices, floor: float) -> List[int]:
    """Return sorted positions of records with magnitude >= floor.

    Binary search finds where the floor falls in `mags_sorted`; everything
    to its right qualifies.
    """
    lo = bisect_left(idx.mags_sorted, (floor, -1))
    out = [pos for _, pos in idx.mags_sorted[lo:]]
    out.sort()
    return out


def count_at_or_above(idx: Indices, floor: float) -> int:
    return len(idx.mags_sorted) - bisect_left(idx.mags_sorted, (floor, -1))
