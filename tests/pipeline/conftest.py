"""Fixtures for pipeline tests: small participant tables."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from mimsreport.pipeline.band_conventions import MINUTES_PER_DAY, normalize_gender
from mimsreport.pipeline.synthetic import make_synthetic_cohort


def make_participants(rows) -> pd.DataFrame:
    """Build a loader-format table from (SEQN, gender, age, value) tuples.

    value is either a scalar (constant over the day) or a 1440-length array.
    """
    vectors = []
    for _, _, _, value in rows:
        if np.ndim(value) == 0:
            vectors.append(np.full(MINUTES_PER_DAY, float(value)))
        else:
            vectors.append(np.asarray(value, dtype=float))
    return pd.DataFrame({
        "SEQN": [r[0] for r in rows],
        "gender": normalize_gender(pd.Series([r[1] for r in rows])),
        "age": [float(r[2]) for r in rows],
        "MIMS": pd.Series(vectors, dtype=object),
    })


@pytest.fixture
def constant_participants() -> pd.DataFrame:
    """Four participants with constant activity across the day."""
    return make_participants([
        (1, "Male", 8, 20.0),
        (2, "Female", 8, 10.0),
        (3, "Male", 40, 6.0),
        (4, "Female", 70, 4.0),
    ])


@pytest.fixture
def ramp_participant() -> pd.DataFrame:
    """One participant whose value equals the minute number (1..1440)."""
    return make_participants([(10, 1, 30, np.arange(1, MINUTES_PER_DAY + 1))])


@pytest.fixture(scope="session")
def synthetic_cohort() -> pd.DataFrame:
    return make_synthetic_cohort(n_participants=24, seed=7)


@pytest.fixture
def participants_factory():
    """Factory fixture wrapping make_participants()."""
    return make_participants
