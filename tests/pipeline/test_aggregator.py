"""Unit tests for ActivityAggregator smoothing and grouped statistics."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from mimsreport.pipeline.aggregator import ActivityAggregator
from mimsreport.pipeline.reshaper import to_long_form


@pytest.fixture
def constant_agg(constant_participants):
    return ActivityAggregator(to_long_form(constant_participants))


@pytest.fixture
def synthetic_long(synthetic_cohort):
    return to_long_form(synthetic_cohort)


def test_init_missing_column_raises(constant_participants):
    long_df = to_long_form(constant_participants).drop(columns=["time_band"])
    with pytest.raises(ValueError, match="time_band"):
        ActivityAggregator(long_df)


@pytest.mark.parametrize("window", [0, 7, -10])
def test_init_window_must_divide_day(constant_participants, window):
    with pytest.raises(ValueError, match="evenly divide"):
        ActivityAggregator(to_long_form(constant_participants), window_minutes=window)


def test_smooth_gives_144_points_per_participant(synthetic_long):
    agg = ActivityAggregator(synthetic_long)
    sm = agg.smooth()
    counts = sm.groupby("SEQN").size()
    assert agg.n_windows == 144
    assert (counts == 144).all()
    assert sm["window"].min() == 0 and sm["window"].max() == 143


def test_smooth_constant_participant_is_exactly_constant(constant_agg):
    sm = constant_agg.smooth()
    p1 = sm[sm["SEQN"] == 1]
    assert (p1["MIMS"] == 20.0).all()


def test_smooth_is_window_mean(ramp_participant):
    """Window k of a ramp 1..1440 averages minutes 10k+1..10k+10."""
    sm = ActivityAggregator(to_long_form(ramp_participant)).smooth()
    expected = np.arange(144) * 10 + 5.5
    np.testing.assert_allclose(sm["MIMS"].to_numpy(), expected)
    assert sm["minute"].iloc[1] == 11
    assert sm["hour"].iloc[6] == pytest.approx(1.0)


def test_smooth_custom_window(ramp_participant):
    sm = ActivityAggregator(to_long_form(ramp_participant), window_minutes=60).smooth()
    assert len(sm) == 24
    assert sm["MIMS"].iloc[0] == pytest.approx(30.5)


def test_grouped_means_of_constant_participant_are_exact(participants_factory):
    """Any grouping containing only a constant-20 participant has mean exactly 20."""
    agg = ActivityAggregator(to_long_form(participants_factory([(5, "Male", 42, 20.0)])))
    assert (agg.mean_by_time_gender()["mean"] == 20.0).all()
    assert (agg.mean_by_age_band_gender()["mean"] == 20.0).all()
    assert (agg.mean_by_age_time_band()["mean"] == 20.0).all()
    assert (agg.mean_by_age_band_time()["mean"] == 20.0).all()
    q = agg.quantiles_by_minute_gender()
    assert (q[["mean", "lower", "upper"]] == 20.0).all().all()


def test_mean_by_age_band_gender_counts(constant_agg):
    table = constant_agg.mean_by_age_band_gender()
    row = table[(table["age_band"].astype(str) == "<10") & (table["gender"].astype(str) == "Male")]
    assert row["mean"].iloc[0] == 20.0
    assert row["n_participants"].iloc[0] == 1
    assert table["n_participants"].sum() == 4


def test_participant_means_by_time_band(constant_agg):
    pm = constant_agg.participant_means(by=["time_band"])
    assert len(pm) == 4 * 4
    assert set(pm.loc[pm["SEQN"] == 3, "MIMS"]) == {6.0}


def test_quantiles_by_minute_gender(participants_factory):
    rows = [(i, "Female", 30, float(i)) for i in range(1, 101)]
    agg = ActivityAggregator(to_long_form(participants_factory(rows)))
    q = agg.quantiles_by_minute_gender(0.025, 0.975)
    assert len(q) == 1440
    first = q.iloc[0]
    assert first["mean"] == pytest.approx(50.5)
    assert first["lower"] == pytest.approx(np.quantile(np.arange(1, 101), 0.025))
    assert first["upper"] == pytest.approx(np.quantile(np.arange(1, 101), 0.975))


def test_quantiles_invalid_bounds_raise(constant_agg):
    with pytest.raises(ValueError, match="Quantiles"):
        constant_agg.quantiles_by_minute_gender(0.9, 0.1)


def test_gender_difference(participants_factory):
    df = participants_factory([
        (1, "Male", 30, 4.0),
        (2, "Female", 30, 7.0),
        (3, "Male", 50, 5.0),  # no female aged 50 -> dropped
    ])
    diff = ActivityAggregator(to_long_form(df)).gender_difference_by_age_time_band()
    assert set(diff["age"]) == {30.0}
    assert len(diff) == 4
    assert (diff["difference"] == 3.0).all()


def test_means_are_order_independent(synthetic_long):
    """Permuting the long-form rows does not change any grouped mean."""
    shuffled = synthetic_long.sample(frac=1.0, random_state=3).reset_index(drop=True)
    a = ActivityAggregator(synthetic_long)
    b = ActivityAggregator(shuffled)
    for name in [
        "mean_by_time_gender",
        "mean_by_age_band_gender",
        "mean_by_age_time_band",
        "mean_by_age_band_time",
        "gender_difference_by_age_time_band",
    ]:
        pd.testing.assert_frame_equal(getattr(a, name)(), getattr(b, name)(), check_exact=False)
    pd.testing.assert_frame_equal(a.smooth(), b.smooth(), check_exact=False)
