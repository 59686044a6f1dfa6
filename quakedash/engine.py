"""
Core engine (Earthquake Record Processor)
=========================================

The whole pipeline is one straight line:

1) Load dataset -> list of RawQuake rows (loader.py)
2) Clean -> tuple of Quake records (rows missing lat/lon/magnitude dropped)
3) Build indices -> category groups + magnitude lookup
4) Compute the views from that single immutable record set:
   - summary statistics
   - spatial sample (for the map)
   - top-N ranked records
   - per-category aggregates
5) Hand the views to the report / exports

None of the views depends on another; each is a pure read of the same
`QuakeEngine`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import csv
import json
import logging
import math
import numbers
import random
from .errors import EmptyDatasetError
from .models import Category, Quake, RawQuake
from .indices import Indices, build_indices, at_or_above, count_at_or_above
from .dsa import merge_sort, top_k

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewConfig:
    """Knobs for the derived views."""
    # Spatial sample (map)
    sample_floor: float = 4.0
    sample_size: int = 800
    sample_seed: int = 42

    # Ranked table
    top_floor: float = 6.0
    top_n: int = 20

    # "Strong or worse" value box
    strong_threshold: float = 6.0


# ---------------- View types ----------------
@dataclass(frozen=True)
class Summary:
    """Scalar statistics. None means the statistic has no data."""
    total_count: int
    max_magnitude: Optional[float]
    strong_count: int
    avg_depth: Optional[float]


@dataclass(frozen=True)
class CategoryStats:
    """Aggregate row for one magnitude category."""
    category: Category
    count: int
    mean_magnitude: float
    max_magnitude: float
    mean_depth: Optional[float]
    max_depth: Optional[float]

    def as_dict(self) -> dict:
        return {
            "category": self.category.value,
            "count": self.count,
            "mean_magnitude": self.mean_magnitude,
            "max_magnitude": self.max_magnitude,
            "mean_depth": self.mean_depth,
            "max_depth": self.max_depth,
        }


@dataclass(frozen=True)
class DashboardViews:
    """Everything the presentation layer needs, computed once."""
    summary: Summary
    spatial_sample: Tuple[Quake, ...]
    top_ranked: Tuple[Quake, ...]
    category_stats: Tuple[CategoryStats, ...]
    category_counts: Mapping[Category, int]
    config: ViewConfig

    def as_dict(self) -> dict:
        return {
            "summary": {
                "total_count": self.summary.total_count,
                "max_magnitude": self.summary.max_magnitude,
                "strong_count": self.summary.strong_count,
                "avg_depth": self.summary.avg_depth,
            },
            "spatial_sample": [q.as_dict() for q in self.spatial_sample],
            "top_ranked": [q.as_dict() for q in self.top_ranked],
            "category_stats": [c.as_dict() for c in self.category_stats],
            "category_counts": {c.value: n for c, n in self.category_counts.items()},
            "config": {
                "sample_floor": self.config.sample_floor,
                "sample_size": self.config.sample_size,
                "sample_seed": self.config.sample_seed,
                "top_floor": self.config.top_floor,
                "top_n": self.config.top_n,
                "strong_threshold": self.config.strong_threshold,
            },
        }


# ---------------- Cleaning ----------------
def _present(v) -> bool:
    return isinstance(v, numbers.Real) and not isinstance(v, bool) and math.isfinite(v)


def clean_records(records: Iterable[Union[RawQuake, Quake]]) -> Tuple[Quake, ...]:
    """Keep records with latitude, longitude and magnitude; drop the rest.

    Dropped rows are expected noise, not an error. Input order is preserved.
    `Quake` items are checked like raw rows, so cleaning an already-clean set
    returns an equal set.
    """
    out: List[Quake] = []
    dropped = 0
    for r in records:
        if not (_present(r.latitude) and _present(r.longitude) and _present(r.magnitude)):
            dropped += 1
            continue
        out.append(Quake(
            row_id=r.row_id,
            latitude=float(r.latitude),
            longitude=float(r.longitude),
            magnitude=float(r.magnitude),
            focal_depth=float(r.focal_depth) if _present(r.focal_depth) else None,
        ))
    if dropped:
        log.debug("Dropped %d rows missing latitude, longitude or magnitude", dropped)
    return tuple(out)


# ---------------- Scalar statistics ----------------
def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _depths(quakes: Iterable[Quake]) -> List[float]:
    return [q.focal_depth for q in quakes if q.focal_depth is not None]


def max_magnitude(quakes: Sequence[Quake]) -> float:
    """Largest magnitude, rounded to 1 decimal."""
    if not quakes:
        raise EmptyDatasetError("max magnitude needs at least one record")
    return round(max(q.magnitude for q in quakes), 1)


def average_depth(quakes: Sequence[Quake]) -> float:
    """Mean focal depth over records that have one, rounded to 1 decimal."""
    depths = _depths(quakes)
    if not depths:
        raise EmptyDatasetError("average depth needs at least one record with a focal depth")
    return round(_mean(depths), 1)


# ---------------- Engine ----------------
@dataclass(frozen=True)
class QuakeEngine:
    """The cleaned record set plus its indices.

    Build it once per run with `from_records` and pass it to whoever needs
    a view. Nothing here mutates the records.
    """
    quakes: Tuple[Quake, ...]
    config: ViewConfig = field(default_factory=ViewConfig)
    dataset_path: Optional[str] = None
    idx: Indices = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "quakes", clean_records(self.quakes))
        object.__setattr__(self, "idx", build_indices(self.quakes))

    @classmethod
    def from_records(cls, records: Iterable[Union[RawQuake, Quake]],
                     config: Optional[ViewConfig] = None,
                     dataset_path: Optional[str] = None) -> "QuakeEngine":
        return cls(quakes=tuple(records), config=config or ViewConfig(), dataset_path=dataset_path)

    def _quakes_from_positions(self, positions: Sequence[int]) -> List[Quake]:
        return [self.quakes[p] for p in positions]

    # ---------------- Summary ----------------
    @property
    def total_count(self) -> int:
        return len(self.quakes)

    def strong_count(self) -> int:
        return count_at_or_above(self.idx, self.config.strong_threshold)

    def summary(self) -> Summary:
        """Scalar statistics; a statistic without data is reported as None."""
        try:
            max_mag: Optional[float] = max_magnitude(self.quakes)
        except EmptyDatasetError:
            max_mag = None
        try:
            avg_depth: Optional[float] = average_depth(self.quakes)
        except EmptyDatasetError:
            avg_depth = None
        return Summary(
            total_count=self.total_count,
            max_magnitude=max_mag,
            strong_count=self.strong_count(),
            avg_depth=avg_depth,
        )

    # ---------------- Spatial sample ----------------
    def spatial_sample(self, floor: Optional[float] = None, size: Optional[int] = None,
                       seed: Optional[int] = None) -> Tuple[Quake, ...]:
        """Seeded uniform sample (without replacement) of records >= floor.

        Same records + same seed -> same sample, in the same order.
        """
        floor = self.config.sample_floor if floor is None else floor
        size = self.config.sample_size if size is None else size
        seed = self.config.sample_seed if seed is None else seed

        candidates = self._quakes_from_positions(at_or_above(self.idx, floor))
        k = min(max(size, 0), len(candidates))
        if k == 0:
            return ()
        rng = random.Random(seed)
        return tuple(rng.sample(candidates, k))

    # ---------------- Ranked table ----------------
    def top_ranked(self, floor: Optional[float] = None, n: Optional[int] = None) -> Tuple[Quake, ...]:
        """Records >= floor, strongest first, at most n of them.

        Equal magnitudes keep file order (stable merge sort).
        """
        floor = self.config.top_floor if floor is None else floor
        n = self.config.top_n if n is None else n
        candidates = self._quakes_from_positions(at_or_above(self.idx, floor))
        return tuple(top_k(candidates, n, key=lambda q: q.magnitude))

    # ---------------- Category views ----------------
    def category_counts(self) -> Mapping[Category, int]:
        """Count per category, every category listed (zeros included)."""
        return MappingProxyType({c: len(self.idx.by_category.get(c, ())) for c in Category})

    def category_stats(self) -> Tuple[CategoryStats, ...]:
        """Per-category aggregates, highest mean magnitude first.

        Categories with no records are left out.
        """
        rows: List[Tuple[float, CategoryStats]] = []
        for cat in Category:
            positions = self.idx.by_category.get(cat)
            if not positions:
                continue
            members = self._quakes_from_positions(positions)
            mags = [q.magnitude for q in members]
            depths = _depths(members)
            mean_mag = _mean(mags)
            rows.append((mean_mag, CategoryStats(
                category=cat,
                count=len(members),
                mean_magnitude=round(mean_mag, 2),
                max_magnitude=round(max(mags), 2),
                mean_depth=round(_mean(depths), 1) if depths else None,
                max_depth=round(max(depths), 1) if depths else None,
            )))
        ordered = merge_sort(rows, key=lambda r: r[0], reverse=True)
        return tuple(stats for _, stats in ordered)

    # ---------------- All at once ----------------
    def build(self) -> DashboardViews:
        """Compute every view once for the presentation layer."""
        return DashboardViews(
            summary=self.summary(),
            spatial_sample=self.spatial_sample(),
            top_ranked=self.top_ranked(),
            category_stats=self.category_stats(),
            category_counts=self.category_counts(),
            config=self.config,
        )


# ---------------- Exports ----------------
RECORD_COLUMNS = ["row_id", "latitude", "longitude", "magnitude", "focal_depth", "category"]


def export_records_csv(quakes: Sequence[Quake], path: str) -> None:
    """Write records (e.g. the ranked table) to CSV."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=RECORD_COLUMNS)
        w.writeheader()
        for q in quakes:
            w.writerow(q.as_dict())


def export_views_json(views: DashboardViews, path: str) -> None:
    """Write all views to one JSON file.

    JSON keeps field names and nulls, so a separate renderer can pick it up.
    """
    with open(path, "w", encoding="utf-8") as f:
        json.dump(views.as_dict(), f, ensure_ascii=False, indent=2)
