"""
Data model (RawQuake / Quake / Category)
========================================

Each CSV row becomes a `RawQuake`: every numeric field is optional because
the file may have blanks or junk in any cell.

Cleaning turns the usable rows into `Quake` objects, where latitude,
longitude and magnitude are guaranteed. Both are immutable (`frozen=True`):
views select and reorder records, they never edit them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Magnitude category, declared from weakest to strongest."""
    MINOR = "Minor"
    MODERATE = "Moderate"
    STRONG = "Strong"
    MAJOR = "Major"


def categorize(magnitude: float) -> Category:
    """Map a magnitude onto its category.

    The thresholds partition the real line:
    [-inf, 5.0) Minor, [5.0, 6.0) Moderate, [6.0, 7.0) Strong, [7.0, inf) Major.
    """
    if magnitude < 5.0:
        return Category.MINOR
    if magnitude < 6.0:
        return Category.MODERATE
    if magnitude < 7.0:
        return Category.STRONG
    return Category.MAJOR


@dataclass(frozen=True)
class RawQuake:
    """One input row, before cleaning."""
    # 0-based position of the row in the input file
    row_id: int
    latitude: Optional[float]
    longitude: Optional[float]
    magnitude: Optional[float]
    focal_depth: Optional[float]


@dataclass(frozen=True)
class Quake:
    """One cleaned earthquake observation."""
    row_id: int
    latitude: float
    longitude: float
    magnitude: float
    # km; may be missing even after cleaning
    focal_depth: Optional[float]

    @property
    def category(self) -> Category:
        return categorize(self.magnitude)

    def as_dict(self) -> dict:
        return {
            "row_id": self.row_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "magnitude": self.magnitude,
            "focal_depth": self.focal_depth,
            "category": self.category.value,
        }
