"""Tests for the sorting helpers."""

from quakedash.dsa import merge_sort, top_k


def test_merge_sort_ascending_and_descending():
    data = [5, 3, 9, 1, 7]
    assert merge_sort(data) == [1, 3, 5, 7, 9]
    assert merge_sort(data, reverse=True) == [9, 7, 5, 3, 1]
    # input untouched
    assert data == [5, 3, 9, 1, 7]


def test_merge_sort_is_stable_in_both_directions():
    items = [("a", 2), ("b", 1), ("c", 2), ("d", 1), ("e", 2)]
    key = lambda x: x[1]
    assert [x[0] for x in merge_sort(items, key=key)] == ["b", "d", "a", "c", "e"]
    assert [x[0] for x in merge_sort(items, key=key, reverse=True)] == ["a", "c", "e", "b", "d"]


def test_top_k():
    items = [("a", 6.1), ("b", 7.0), ("c", 6.1), ("d", 8.2)]
    out = top_k(items, 3, key=lambda x: x[1])
    assert [x[0] for x in out] == ["d", "b", "a"]
    assert top_k(items, 0, key=lambda x: x[1]) == []
    assert len(top_k(items, 10, key=lambda x: x[1])) == 4
