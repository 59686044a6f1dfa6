"""Test configuration and shared fixtures."""

import pytest

from quakedash.models import RawQuake


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temp file and return its path."""
    def _write(text, name="quakes.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def example_rows():
    """Four usable rows, one per category, plus one missing magnitude and latitude."""
    return [
        RawQuake(row_id=0, latitude=10.0, longitude=20.0, magnitude=4.2, focal_depth=10.0),
        RawQuake(row_id=1, latitude=-5.5, longitude=120.3, magnitude=5.5, focal_depth=35.0),
        RawQuake(row_id=2, latitude=38.1, longitude=142.4, magnitude=6.8, focal_depth=None),
        RawQuake(row_id=3, latitude=-33.0, longitude=-72.0, magnitude=7.9, focal_depth=600.0),
        RawQuake(row_id=4, latitude=None, longitude=15.0, magnitude=None, focal_depth=5.0),
    ]


SAMPLE_CSV = """id,place,latitude,longitude,richter,focal_depth
a,Somewhere,10.0,20.0,4.2,10
b,Elsewhere,-5.5,120.3,5.5,35
c,Offshore,38.1,142.4,6.8,
d,Coast,-33.0,-72.0,7.9,600
e,Unknown,,15.0,,5
f,Junk,abc,15.0,6.1,20
"""


@pytest.fixture
def sample_csv(write_csv):
    return write_csv(SAMPLE_CSV)
