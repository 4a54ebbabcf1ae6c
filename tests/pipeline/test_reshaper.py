"""Unit tests for wide-to-long reshaping."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from mimsreport.pipeline.band_conventions import MINUTES_PER_DAY
from mimsreport.pipeline.reshaper import LONG_COLUMNS, to_long_form, validate_long_form


def test_every_participant_has_1440_samples(synthetic_cohort):
    long_df = to_long_form(synthetic_cohort)
    counts = long_df.groupby("SEQN").size()
    assert len(counts) == len(synthetic_cohort)
    assert (counts == MINUTES_PER_DAY).all()
    assert len(long_df) == MINUTES_PER_DAY * len(synthetic_cohort)


def test_long_form_columns_and_order(constant_participants):
    long_df = to_long_form(constant_participants)
    assert list(long_df.columns) == LONG_COLUMNS
    first = long_df[long_df["SEQN"] == 1]
    assert first["minute"].tolist() == list(range(1, MINUTES_PER_DAY + 1))


def test_values_follow_minutes(ramp_participant):
    """The value at minute m is the m-th entry of the participant's vector."""
    long_df = to_long_form(ramp_participant)
    np.testing.assert_array_equal(long_df["MIMS"].to_numpy(), long_df["minute"].to_numpy().astype(float))


def test_demographics_and_bands_joined(constant_participants):
    long_df = to_long_form(constant_participants)
    p4 = long_df[long_df["SEQN"] == 4]
    assert set(p4["gender"].astype(str)) == {"Female"}
    assert set(p4["age"]) == {70.0}
    assert set(p4["age_band"].astype(str)) == {"65+"}
    assert p4["time_band"].astype(str).value_counts().to_dict() == {
        "00-06": 360, "06-12": 360, "12-18": 360, "18-24": 360,
    }


def test_empty_input_gives_empty_long_frame(constant_participants):
    long_df = to_long_form(constant_participants.iloc[0:0])
    assert long_df.empty
    assert list(long_df.columns) == LONG_COLUMNS


def test_validate_rejects_unknown_participant(constant_participants):
    long_df = to_long_form(constant_participants)
    with pytest.raises(ValueError, match="unknown participants"):
        validate_long_form(long_df, [1, 2, 3])


def test_validate_rejects_missing_samples(constant_participants):
    long_df = to_long_form(constant_participants)
    truncated = long_df[~((long_df["SEQN"] == 2) & (long_df["minute"] == 1440))]
    with pytest.raises(ValueError, match="1439 samples"):
        validate_long_form(truncated, constant_participants["SEQN"])


def test_validate_rejects_participant_without_samples(constant_participants):
    long_df = to_long_form(constant_participants)
    with pytest.raises(ValueError, match="0 samples"):
        validate_long_form(long_df, pd.Series([1, 2, 3, 4, 5]))
