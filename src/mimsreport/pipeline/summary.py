"""Descriptive summary tables for the activity report.

Builds the cohort overview and per-group statistics of participant daily
average MIMS. Does not depend on Plotly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np
import pandas as pd

from mimsreport.pipeline.aggregator import ActivityAggregator
from mimsreport.pipeline.loader import ACTIVITY_COL, AGE_COL, GENDER_COL, ID_COL
from mimsreport.pipeline.reshaper import AGE_BAND_COL

# Stats columns for the per-group table.
STATS_COLUMNS = ["count", "min", "max", "mean", "median", "std", "sem"]


@dataclass
class ActivitySummary:
    """Structured summary of the cohort and its activity levels.

    Attributes:
        params: ReportConfig as dict (config.to_dict()).
        overview: Two-column table (metric, value) describing the cohort.
        by_group: One row per (age band, gender) with STATS_COLUMNS.
    """
    params: dict[str, Any]
    overview: pd.DataFrame
    by_group: pd.DataFrame = field(default_factory=pd.DataFrame)


def cohort_overview(df: pd.DataFrame) -> pd.DataFrame:
    """Describe the participant table: size, age range, gender counts.

    Args:
        df: Participant table (one row per SEQN) with gender and age.
    """
    ages = pd.to_numeric(df[AGE_COL], errors="coerce")
    rows: list[tuple[str, Any]] = [
        ("participants", int(df[ID_COL].nunique())),
        ("age_min", float(ages.min()) if ages.notna().any() else np.nan),
        ("age_max", float(ages.max()) if ages.notna().any() else np.nan),
        ("age_mean", float(ages.mean()) if ages.notna().any() else np.nan),
    ]
    counts = df[GENDER_COL].value_counts(sort=False)
    for gender, n in counts.items():
        rows.append((f"n_{str(gender).lower()}", int(n)))
    return pd.DataFrame(rows, columns=["metric", "value"])


def describe_activity(
    aggregator: ActivityAggregator,
    group_cols: Sequence[str] = (AGE_BAND_COL, GENDER_COL),
) -> pd.DataFrame:
    """Per-group statistics of participant daily-average MIMS.

    Returns:
        DataFrame with the group columns followed by STATS_COLUMNS.
    """
    pm = aggregator.participant_means()
    rows = []
    for key, sub in pm.groupby(list(group_cols), sort=True, observed=True):
        key = key if isinstance(key, tuple) else (key,)
        rows.append(dict(zip(group_cols, key)) | _stats(sub[ACTIVITY_COL]))
    return pd.DataFrame(rows, columns=list(group_cols) + STATS_COLUMNS)


def build_summary(df: pd.DataFrame, aggregator: ActivityAggregator, params: dict[str, Any]) -> ActivitySummary:
    """Bundle the overview and per-group tables."""
    return ActivitySummary(
        params=params,
        overview=cohort_overview(df),
        by_group=describe_activity(aggregator),
    )


def _stats(values: pd.Series) -> dict[str, float]:
    v = pd.to_numeric(values, errors="coerce").dropna().to_numpy()
    n = len(v)
    if n == 0:
        return {"count": 0, **{k: np.nan for k in STATS_COLUMNS[1:]}}
    std = float(np.std(v, ddof=1)) if n > 1 else 0.0
    return {
        "count": n,
        "min": float(np.min(v)),
        "max": float(np.max(v)),
        "mean": float(np.mean(v)),
        "median": float(np.median(v)),
        "std": std,
        "sem": std / np.sqrt(n) if n > 1 else 0.0,
    }
