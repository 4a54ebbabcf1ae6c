"""Age-band and time-band conventions.

Single source of truth for the categorical bands used to facet and aggregate
the continuous age and minute-of-day variables. Every band is half-open:
the lower edge is inclusive, the upper edge exclusive, and the first
matching band wins.

Minute m (1-based) covers clock time [m-1, m) minutes after midnight, so
minute 360 is the last minute of the 00-06 band and minute 361 the first
minute of 06-12.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

MINUTES_PER_DAY = 1440

# Age bands in years: [0, 10), [10, 20), [20, 35), [35, 50), [50, 65), [65, inf)
AGE_BAND_EDGES = [0, 10, 20, 35, 50, 65, np.inf]
AGE_BAND_LABELS = ["<10", "10-19", "20-34", "35-49", "50-64", "65+"]

# Time bands on 6-hour boundaries, expressed in minutes elapsed since midnight.
TIME_BAND_HOURS = 6
TIME_BAND_EDGES = [0, 360, 720, 1080, 1440]
TIME_BAND_LABELS = ["00-06", "06-12", "12-18", "18-24"]

GENDER_LABELS = ["Male", "Female"]
GENDER_CODES = {1: "Male", 2: "Female"}

AGE_BAND_DTYPE = pd.CategoricalDtype(AGE_BAND_LABELS, ordered=True)
TIME_BAND_DTYPE = pd.CategoricalDtype(TIME_BAND_LABELS, ordered=True)
GENDER_DTYPE = pd.CategoricalDtype(GENDER_LABELS, ordered=True)


def assign_age_band(ages) -> pd.Series:
    """Map ages in years to age-band labels.

    Args:
        ages: Scalar, array-like, or Series of ages. Missing ages map to a
            missing band.

    Returns:
        Ordered categorical Series of AGE_BAND_LABELS, aligned with the input
        index when a Series is given.

    Raises:
        ValueError: If any age is negative.
    """
    s = _as_numeric_series(ages)
    if (s < 0).any():
        bad = s[s < 0].tolist()
        raise ValueError(f"Age must be >= 0, got {bad[:5]}")
    bands = pd.cut(s, bins=AGE_BAND_EDGES, labels=AGE_BAND_LABELS, right=False)
    return bands.astype(AGE_BAND_DTYPE)


def assign_time_band(minutes) -> pd.Series:
    """Map 1-based minute-of-day values to time-band labels.

    Raises:
        ValueError: If any minute is missing or outside [1, 1440].
    """
    s = _as_numeric_series(minutes)
    out_of_range = s.isna() | (s < 1) | (s > MINUTES_PER_DAY)
    if out_of_range.any():
        bad = s[out_of_range].tolist()
        raise ValueError(f"Minute of day must be in [1, {MINUTES_PER_DAY}], got {bad[:5]}")
    elapsed = s - 1
    bands = pd.cut(elapsed, bins=TIME_BAND_EDGES, labels=TIME_BAND_LABELS, right=False)
    return bands.astype(TIME_BAND_DTYPE)


def normalize_gender(values) -> pd.Series:
    """Map NHANES gender codes (1/2) or free-text labels to Male/Female.

    Unrecognized values become missing.
    """
    s = values if isinstance(values, pd.Series) else pd.Series(values)
    s = s.astype(object)

    def _label(v):
        if pd.isna(v):
            return None
        if isinstance(v, (int, float, np.integer, np.floating)):
            return GENDER_CODES.get(int(v))
        text = str(v).strip().lower()
        if text in {"1", "m", "male"}:
            return "Male"
        if text in {"2", "f", "female"}:
            return "Female"
        return None

    return s.map(_label).astype(GENDER_DTYPE)


def _as_numeric_series(values) -> pd.Series:
    if isinstance(values, pd.Series):
        return pd.to_numeric(values, errors="coerce")
    return pd.to_numeric(pd.Series(np.atleast_1d(values)), errors="coerce")
