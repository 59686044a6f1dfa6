"""Tests for CSV loading."""

import logging

import pytest

from quakedash.errors import SchemaError
from quakedash.loader import load_quakes_csv


def test_load_converts_cells(sample_csv):
    rows = load_quakes_csv(sample_csv)
    assert len(rows) == 6
    assert [r.row_id for r in rows] == [0, 1, 2, 3, 4, 5]

    first = rows[0]
    assert (first.latitude, first.longitude, first.magnitude, first.focal_depth) == (10.0, 20.0, 4.2, 10.0)

    # blank depth
    assert rows[2].focal_depth is None
    # blank latitude and magnitude
    assert rows[4].latitude is None
    assert rows[4].magnitude is None
    # non-numeric latitude
    assert rows[5].latitude is None
    assert rows[5].magnitude == 6.1


def test_load_ignores_extra_columns_and_matches_aliases(write_csv):
    path = write_csv("Lat,Lon,Magnitude,Depth,notes\n1.5,2.5,5.1,12,hello\n")
    rows = load_quakes_csv(path)
    assert len(rows) == 1
    r = rows[0]
    assert (r.latitude, r.longitude, r.magnitude, r.focal_depth) == (1.5, 2.5, 5.1, 12.0)


def test_load_custom_separator(write_csv):
    path = write_csv("latitude;longitude;richter;focal_depth\n1;2;3.5;4\n", name="semi.csv")
    rows = load_quakes_csv(path, sep=";")
    assert rows[0].magnitude == 3.5


def test_missing_required_column_is_schema_error(write_csv):
    path = write_csv("latitude,longitude,focal_depth\n1,2,3\n")
    with pytest.raises(SchemaError, match="Missing required column"):
        load_quakes_csv(path)


def test_missing_depth_column_is_tolerated(write_csv, caplog):
    path = write_csv("latitude,longitude,richter\n1,2,5.0\n")
    with caplog.at_level(logging.WARNING, logger="quakedash.loader"):
        rows = load_quakes_csv(path)
    assert rows[0].focal_depth is None
    assert "focal depth" in caplog.text


def test_unreadable_file_is_schema_error(tmp_path):
    with pytest.raises(SchemaError):
        load_quakes_csv(str(tmp_path / "does_not_exist.csv"))


def test_empty_file_is_schema_error(write_csv):
    path = write_csv("")
    with pytest.raises(SchemaError):
        load_quakes_csv(path)


def test_header_only_file_loads_no_rows(write_csv):
    path = write_csv("latitude,longitude,richter,focal_depth\n")
    assert load_quakes_csv(path) == []


def test_infinite_values_are_missing(write_csv):
    path = write_csv("latitude,longitude,richter,focal_depth\n1,2,inf,3\n")
    assert load_quakes_csv(path)[0].magnitude is None


def test_ragged_rows_are_schema_error(write_csv):
    path = write_csv("latitude,longitude,richter,focal_depth\n1,2,3,4\n1,2,3,4,5,6\n")
    with pytest.raises(SchemaError, match="Cannot parse"):
        load_quakes_csv(path)
