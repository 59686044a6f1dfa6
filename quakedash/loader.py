"""
Dataset loader (CSV -> RawQuake list)
=====================================

This module reads the earthquake CSV snapshot and converts each row into a
`RawQuake` object.

Key ideas:
- We try multiple possible column names because exports name things differently
  ("richter" vs "magnitude", "lon" vs "longitude", ...).
- Cells are converted with `_to_float`, so blanks and junk become None instead
  of failing the whole load. Dropping those rows is the cleaner's job.
- A file we cannot read, or one without the required columns, is a
  `SchemaError`: there is no partial-load path.
"""

from __future__ import annotations
from typing import List, Optional
import logging
import math
import re
import pandas as pd
from .errors import SchemaError
from .models import RawQuake

log = logging.getLogger(__name__)

LATITUDE_NAMES = ("latitude", "lat")
LONGITUDE_NAMES = ("longitude", "lon", "long", "lng")
MAGNITUDE_NAMES = ("richter", "magnitude", "mag")
DEPTH_NAMES = ("focal_depth", "depth", "depth_km")


def _to_float(x) -> Optional[float]:
    """Convert a cell to a finite float, returning None if missing/invalid."""
    if pd.isna(x): return None
    try: v = float(x)
    except (TypeError, ValueError): return None
    return v if math.isfinite(v) else None


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _find_col(df: pd.DataFrame, *names: str) -> Optional[str]:
    cols = list(df.columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    return None


def _col(df: pd.DataFrame, *names: str) -> str:
    c = _find_col(df, *names)
    if c is None:
        raise SchemaError(f"Missing required column. Tried={names}. Available={list(df.columns)}")
    return c


def read_table(path: str, sep: str = ",") -> pd.DataFrame:
    """Read the delimited file into a DataFrame, as text-tolerant as possible."""
    try:
        df = pd.read_csv(path, sep=sep)
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaError(f"Cannot read {path}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise SchemaError(f"{path} is empty (no header row)") from e
    except pd.errors.ParserError as e:
        raise SchemaError(f"Cannot parse {path}: {e}") from e
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    return df


def frame_to_raw(df: pd.DataFrame) -> List[RawQuake]:
    """Convert a DataFrame with earthquake columns into RawQuake records."""
    lat_col = _col(df, *LATITUDE_NAMES)
    lon_col = _col(df, *LONGITUDE_NAMES)
    mag_col = _col(df, *MAGNITUDE_NAMES)
    depth_col = _find_col(df, *DEPTH_NAMES)
    if depth_col is None:
        log.warning("No focal depth column found; depth statistics will be empty")

    quakes: List[RawQuake] = []
    for i, (_, row) in enumerate(df.iterrows()):
        quakes.append(RawQuake(
            row_id=i,
            latitude=_to_float(row[lat_col]),
            longitude=_to_float(row[lon_col]),
            magnitude=_to_float(row[mag_col]),
            focal_depth=_to_float(row[depth_col]) if depth_col else None,
        ))
    return quakes


def load_quakes_csv(path: str, sep: str = ",") -> List[RawQuake]:
    """
    Load the earthquake CSV snapshot.
    Extra columns are ignored; rows are returned in file order, uncleaned.
    """
    df = read_table(path, sep=sep)
    quakes = frame_to_raw(df)
    log.info("Loaded %d rows from %s", len(quakes), path)
    return quakes
