"""Synthetic NHANES-like cohort for demos and tests.

Generates a participant table in the same shape load_activity_dataset()
returns: SEQN, gender, age, MIMS (1440 values per participant). Activity
follows a smooth diurnal curve whose amplitude declines with age and differs
slightly by gender, plus per-minute gamma noise.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from mimsreport.pipeline.band_conventions import MINUTES_PER_DAY, normalize_gender
from mimsreport.pipeline.loader import ACTIVITY_COL, AGE_COL, GENDER_COL, ID_COL

FIRST_SEQN = 62161  # first SEQN of NHANES 2011-2012


def diurnal_curve(peak: float = 18.0, trough: float = 1.5) -> np.ndarray:
    """Expected MIMS per minute: low overnight, rising after 06:00, peaking mid-afternoon."""
    hours = (np.arange(MINUTES_PER_DAY) + 0.5) / 60.0
    wake = 1.0 / (1.0 + np.exp(-(hours - 7.0) * 1.5))
    sleep = 1.0 / (1.0 + np.exp((hours - 22.5) * 1.5))
    shape = wake * sleep * (0.8 + 0.2 * np.sin((hours - 9.0) / 24.0 * 2 * np.pi))
    return trough + (peak - trough) * shape


def make_synthetic_cohort(n_participants: int = 120, seed: int = 0) -> pd.DataFrame:
    """Build a reproducible synthetic participant table.

    Args:
        n_participants: Number of participants (rows).
        seed: Seed for numpy's default_rng.

    Returns:
        DataFrame with columns SEQN, gender, age, MIMS.
    """
    rng = np.random.default_rng(seed=seed)
    ages = rng.integers(3, 81, size=n_participants)
    genders = rng.integers(1, 3, size=n_participants)
    base = diurnal_curve()

    vectors = []
    for age, gender in zip(ages, genders):
        # activity peaks in childhood and declines with age
        amplitude = 1.3 - 0.008 * age
        if gender == 2:
            amplitude *= 1.05
        expected = np.clip(base * amplitude, 0.1, None)
        shape_k = 4.0
        vectors.append(rng.gamma(shape_k, expected / shape_k))

    return pd.DataFrame({
        ID_COL: np.arange(FIRST_SEQN, FIRST_SEQN + n_participants),
        GENDER_COL: normalize_gender(pd.Series(genders)),
        AGE_COL: ages.astype(float),
        ACTIVITY_COL: pd.Series(vectors, dtype=object),
    })
