"""Wide-to-long reshaping of participant activity vectors.

Turns one row per participant (with a 1440-value MIMS vector) into one row
per (participant, minute), joins the demographic fields back on, and derives
the age band and time band for every sample.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from mimsreport.pipeline.band_conventions import (
    MINUTES_PER_DAY,
    assign_age_band,
    assign_time_band,
)
from mimsreport.pipeline.loader import ACTIVITY_COL, AGE_COL, GENDER_COL, ID_COL
from mimsreport.utils.logging import get_logger

logger = get_logger(__name__)

MINUTE_COL = "minute"
AGE_BAND_COL = "age_band"
TIME_BAND_COL = "time_band"

LONG_COLUMNS = [ID_COL, MINUTE_COL, ACTIVITY_COL, GENDER_COL, AGE_COL, AGE_BAND_COL, TIME_BAND_COL]


def to_long_form(df: pd.DataFrame) -> pd.DataFrame:
    """Reshape a participant table into long form.

    Args:
        df: Output of load_activity_dataset(): columns SEQN, gender, age, MIMS.

    Returns:
        DataFrame with LONG_COLUMNS, one row per (SEQN, minute), minute in
        1..1440, sorted by (SEQN, minute).
    """
    if df.empty:
        return _empty_long_frame()

    matrix = np.vstack([np.asarray(v, dtype=float) for v in df[ACTIVITY_COL]])
    if matrix.shape[1] != MINUTES_PER_DAY:
        raise ValueError(f"Expected {MINUTES_PER_DAY} values per participant, got {matrix.shape[1]}")

    wide = pd.DataFrame(
        matrix,
        index=pd.Index(df[ID_COL].to_numpy(), name=ID_COL),
        columns=pd.RangeIndex(1, MINUTES_PER_DAY + 1),
    )
    long_df = wide.reset_index().melt(id_vars=ID_COL, var_name=MINUTE_COL, value_name=ACTIVITY_COL)
    long_df[MINUTE_COL] = long_df[MINUTE_COL].astype(int)

    demographics = df[[ID_COL, GENDER_COL, AGE_COL]]
    long_df = long_df.merge(demographics, on=ID_COL, how="left", validate="many_to_one")
    long_df[AGE_BAND_COL] = assign_age_band(long_df[AGE_COL])
    long_df[TIME_BAND_COL] = assign_time_band(long_df[MINUTE_COL])

    long_df = long_df.sort_values([ID_COL, MINUTE_COL], kind="stable").reset_index(drop=True)
    long_df = long_df[LONG_COLUMNS]

    validate_long_form(long_df, df[ID_COL])
    logger.info(f"Reshaped {len(df)} participants into {len(long_df)} long-form samples")
    return long_df


def validate_long_form(long_df: pd.DataFrame, participants: Iterable) -> None:
    """Check the per-participant sample invariants.

    Every known participant contributes exactly 1440 samples and no sample
    references an unknown participant.

    Raises:
        ValueError: On the first violation found.
    """
    known = set(pd.Series(list(participants)).tolist())
    seen = set(long_df[ID_COL].tolist())

    unknown = seen - known
    if unknown:
        raise ValueError(f"Samples reference unknown participants: {sorted(unknown)[:5]}")

    counts = long_df.groupby(ID_COL, sort=True).size()
    counts = counts.reindex(sorted(known), fill_value=0)
    wrong = counts[counts != MINUTES_PER_DAY]
    if not wrong.empty:
        pid = wrong.index[0]
        raise ValueError(
            f"Participant {pid} has {int(wrong.iloc[0])} samples; expected {MINUTES_PER_DAY}"
        )


def _empty_long_frame() -> pd.DataFrame:
    return pd.DataFrame({c: pd.Series(dtype=float) for c in LONG_COLUMNS})
