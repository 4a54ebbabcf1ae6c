"""Grouped aggregation of long-form activity samples.

This module provides the ActivityAggregator class for the smoothing and
grouped statistics behind every chart, separating data processing from
figure generation.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from mimsreport.pipeline.band_conventions import MINUTES_PER_DAY, assign_time_band
from mimsreport.pipeline.loader import ACTIVITY_COL, AGE_COL, GENDER_COL, ID_COL
from mimsreport.pipeline.reshaper import AGE_BAND_COL, MINUTE_COL, TIME_BAND_COL
from mimsreport.utils.logging import get_logger

logger = get_logger(__name__)

WINDOW_COL = "window"
HOUR_COL = "hour"
MEAN_COL = "mean"
LOWER_COL = "lower"
UPPER_COL = "upper"
COUNT_COL = "n_participants"
DIFF_COL = "difference"

DEFAULT_WINDOW_MINUTES = 10


class ActivityAggregator:
    """Computes smoothed series and grouped statistics from long-form samples.

    Attributes:
        long_df: Long-form samples from to_long_form().
        window_minutes: Width of the smoothing window in minutes.
    """

    def __init__(self, long_df: pd.DataFrame, *, window_minutes: int = DEFAULT_WINDOW_MINUTES) -> None:
        """Initialize with long-form samples.

        Raises:
            ValueError: If required columns are missing or window_minutes does
                not evenly divide a day.
        """
        required = [ID_COL, MINUTE_COL, ACTIVITY_COL, GENDER_COL, AGE_COL, AGE_BAND_COL, TIME_BAND_COL]
        missing = [c for c in required if c not in long_df.columns]
        if missing:
            raise ValueError(f"long_df must contain required columns {missing}")
        if window_minutes <= 0 or MINUTES_PER_DAY % window_minutes != 0:
            raise ValueError(
                f"window_minutes must evenly divide {MINUTES_PER_DAY}, got {window_minutes}"
            )

        self.long_df = long_df
        self.window_minutes = window_minutes
        self._smoothed: Optional[pd.DataFrame] = None

    @property
    def n_windows(self) -> int:
        """Number of smoothed points per participant (144 for 10-minute windows)."""
        return MINUTES_PER_DAY // self.window_minutes

    def participants(self) -> pd.DataFrame:
        """One row per participant with demographic and age-band columns."""
        cols = [ID_COL, GENDER_COL, AGE_COL, AGE_BAND_COL]
        return (
            self.long_df[cols]
            .drop_duplicates(subset=[ID_COL])
            .sort_values(ID_COL, kind="stable")
            .reset_index(drop=True)
        )

    def smooth(self) -> pd.DataFrame:
        """Average each participant's minutes into fixed windows.

        Returns:
            DataFrame with one row per (SEQN, window): window index, first
            minute of the window, window start in hours, windowed mean MIMS,
            demographics, age band and time band. Cached after the first call.
        """
        if self._smoothed is not None:
            return self._smoothed

        w = self.window_minutes
        windows = (self.long_df[MINUTE_COL].astype(int) - 1) // w
        tmp = pd.DataFrame({
            ID_COL: self.long_df[ID_COL].to_numpy(),
            WINDOW_COL: windows.to_numpy(),
            ACTIVITY_COL: pd.to_numeric(self.long_df[ACTIVITY_COL], errors="coerce").to_numpy(),
        })
        smoothed = (
            tmp.groupby([ID_COL, WINDOW_COL], sort=True)[ACTIVITY_COL]
            .mean()
            .reset_index()
        )
        smoothed[MINUTE_COL] = smoothed[WINDOW_COL] * w + 1
        smoothed[HOUR_COL] = smoothed[WINDOW_COL] * w / 60.0
        smoothed = smoothed.merge(self.participants(), on=ID_COL, how="left", validate="many_to_one")
        smoothed[TIME_BAND_COL] = assign_time_band(smoothed[MINUTE_COL])

        logger.debug(
            f"Smoothed {len(self.long_df)} samples into {len(smoothed)} "
            f"{w}-minute windows"
        )
        self._smoothed = smoothed
        return smoothed

    def mean_by_time_gender(self) -> pd.DataFrame:
        """Mean smoothed MIMS per (window, gender), across participants."""
        sm = self.smooth()
        return (
            sm.groupby([WINDOW_COL, HOUR_COL, GENDER_COL], sort=True, observed=True)[ACTIVITY_COL]
            .mean()
            .rename(MEAN_COL)
            .reset_index()
        )

    def participant_means(self, by: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Average MIMS per participant, optionally within extra groupings.

        Args:
            by: Extra grouping columns from long_df (e.g. ["time_band"]).

        Returns:
            One row per participant (and group), with demographics joined on.
        """
        keys = [ID_COL] + list(by or [])
        means = (
            self.long_df.groupby(keys, sort=True, observed=True)[ACTIVITY_COL]
            .mean()
            .reset_index()
        )
        return means.merge(self.participants(), on=ID_COL, how="left", validate="many_to_one")

    def mean_by_age_band_gender(self) -> pd.DataFrame:
        """Mean of participant daily averages per (age band, gender), with counts."""
        pm = self.participant_means()
        return (
            pm.groupby([AGE_BAND_COL, GENDER_COL], sort=True, observed=True)
            .agg(**{MEAN_COL: (ACTIVITY_COL, "mean"), COUNT_COL: (ID_COL, "nunique")})
            .reset_index()
        )

    def quantiles_by_minute_gender(
        self,
        lower: float = 0.025,
        upper: float = 0.975,
    ) -> pd.DataFrame:
        """Mean and lower/upper quantiles of raw MIMS per (minute, gender).

        Raises:
            ValueError: If the quantiles are not 0 <= lower < upper <= 1.
        """
        if not 0.0 <= lower < upper <= 1.0:
            raise ValueError(f"Quantiles must satisfy 0 <= lower < upper <= 1, got {lower}, {upper}")
        g = self.long_df.groupby([MINUTE_COL, GENDER_COL], sort=True, observed=True)[ACTIVITY_COL]
        out = pd.concat(
            [
                g.mean().rename(MEAN_COL),
                g.quantile(lower).rename(LOWER_COL),
                g.quantile(upper).rename(UPPER_COL),
            ],
            axis=1,
        ).reset_index()
        out[HOUR_COL] = (out[MINUTE_COL] - 1) / 60.0
        return out

    def mean_by_age_time_band(self) -> pd.DataFrame:
        """Mean MIMS per (age in years, time band, gender)."""
        return (
            self.long_df.groupby([AGE_COL, TIME_BAND_COL, GENDER_COL], sort=True, observed=True)[ACTIVITY_COL]
            .mean()
            .rename(MEAN_COL)
            .reset_index()
        )

    def mean_by_age_band_time(self) -> pd.DataFrame:
        """Mean smoothed MIMS per (age band, gender, window) for daily trend lines."""
        sm = self.smooth()
        return (
            sm.groupby([AGE_BAND_COL, GENDER_COL, WINDOW_COL, HOUR_COL], sort=True, observed=True)[ACTIVITY_COL]
            .mean()
            .rename(MEAN_COL)
            .reset_index()
        )

    def gender_difference_by_age_time_band(self) -> pd.DataFrame:
        """Female minus Male mean MIMS per (age, time band).

        Rows where either gender has no participants are dropped.
        """
        table = self.mean_by_age_time_band()
        wide = table.set_index([AGE_COL, TIME_BAND_COL, GENDER_COL])[MEAN_COL].unstack(GENDER_COL)
        wide.columns = [str(c) for c in wide.columns]
        for col in ("Male", "Female"):
            if col not in wide.columns:
                wide[col] = float("nan")
        wide = wide[["Male", "Female"]].dropna()
        wide[DIFF_COL] = wide["Female"] - wide["Male"]
        return wide.reset_index()
