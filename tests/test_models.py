"""Tests for the magnitude categorizer and record types."""

import pytest

from quakedash.models import Category, Quake, categorize


@pytest.mark.parametrize("magnitude, expected", [
    (-1.0, Category.MINOR),
    (0.0, Category.MINOR),
    (4.99, Category.MINOR),
    (5.0, Category.MODERATE),
    (5.99, Category.MODERATE),
    (6.0, Category.STRONG),
    (6.999, Category.STRONG),
    (7.0, Category.MAJOR),
    (9.5, Category.MAJOR),
    (1e9, Category.MAJOR),
])
def test_categorize_boundaries(magnitude, expected):
    assert categorize(magnitude) is expected


def test_categorize_is_total_over_a_sweep():
    """Every magnitude gets exactly one category; categories never go down as magnitude grows."""
    order = list(Category)
    prev = 0
    for i in range(-200, 1200):
        cat = categorize(i / 100)
        assert cat in order
        assert order.index(cat) >= prev
        prev = order.index(cat)


def test_category_values_are_labels():
    assert [c.value for c in Category] == ["Minor", "Moderate", "Strong", "Major"]


def test_quake_category_and_dict():
    q = Quake(row_id=3, latitude=1.0, longitude=2.0, magnitude=6.0, focal_depth=None)
    assert q.category is Category.STRONG
    assert q.as_dict() == {
        "row_id": 3,
        "latitude": 1.0,
        "longitude": 2.0,
        "magnitude": 6.0,
        "focal_depth": None,
        "category": "Strong",
    }


def test_quake_is_immutable():
    q = Quake(row_id=0, latitude=1.0, longitude=2.0, magnitude=4.0, focal_depth=1.0)
    with pytest.raises(AttributeError):
        q.magnitude = 8.0
