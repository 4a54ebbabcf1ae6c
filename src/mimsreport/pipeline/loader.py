"""Dataset loading for the activity report.

Reads a serialized table of per-participant minute-level MIMS values and
restricts it to the four fields the pipeline uses: SEQN, gender, age, MIMS.

Two serializations are supported:

- pandas pickle (.pkl/.pickle): one row per participant, MIMS is a
  list/array column holding 1440 values.
- CSV (.csv/.csv.gz): wide form, one row per participant with columns
  MIMS_1 ... MIMS_1440.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from mimsreport.pipeline.band_conventions import MINUTES_PER_DAY, normalize_gender
from mimsreport.utils.logging import get_logger

logger = get_logger(__name__)

ID_COL = "SEQN"
GENDER_COL = "gender"
AGE_COL = "age"
ACTIVITY_COL = "MIMS"

REQUIRED_COLUMNS = [ID_COL, GENDER_COL, AGE_COL, ACTIVITY_COL]

# NHANES variable names -> report column names
COLUMN_ALIASES = {
    "RIAGENDR": GENDER_COL,
    "RIDAGEYR": AGE_COL,
    "PAXMIMS": ACTIVITY_COL,
    "participant_id": ID_COL,
    "sex": GENDER_COL,
}

WIDE_PREFIX = f"{ACTIVITY_COL}_"

PICKLE_SUFFIXES = {".pkl", ".pickle"}


def get_data_dir() -> Path:
    """Resolve the project data/ directory.

    Package layout: <root>/src/mimsreport/pipeline/loader.py
    Data: <root>/data/
    """
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def list_data_files() -> list[str]:
    """List loadable dataset filenames in data/ (sorted)."""
    data_dir = get_data_dir()
    if not data_dir.exists():
        return []
    return sorted(f.name for f in data_dir.iterdir() if f.is_file() and _is_supported(f))


def load_activity_dataset(path: Union[str, Path]) -> pd.DataFrame:
    """Load a dataset file and normalize it to the four report fields.

    Args:
        path: Path to a .pkl/.pickle or .csv/.csv.gz file.

    Returns:
        DataFrame with columns SEQN, gender, age, MIMS (one row per participant).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is unsupported or the schema is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    if path.suffix.lower() in PICKLE_SUFFIXES:
        df = pd.read_pickle(path)
    elif _is_supported(path):
        df = pd.read_csv(path)
    else:
        raise ValueError(f"Unsupported dataset format: {path.name!r}")

    logger.info(f"Loaded {len(df)} rows x {len(df.columns)} columns from {path}")
    return normalize_activity_frame(df)


def normalize_activity_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Restrict a raw participant table to SEQN, gender, age, MIMS.

    Accepts NHANES aliases (RIAGENDR, RIDAGEYR, PAXMIMS) and wide CSV
    columns MIMS_1..MIMS_1440, which are packed into one array per row.

    Raises:
        ValueError: If a required field is missing, a participant id is
            duplicated, or an activity vector does not hold 1440 values.
    """
    df = df.rename(
        columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns and v not in df.columns}
    )

    if ACTIVITY_COL not in df.columns:
        wide_cols = _wide_activity_columns(df)
        if wide_cols:
            values = df[wide_cols].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
            df = df.drop(columns=wide_cols)
            df[ACTIVITY_COL] = pd.Series(list(values), index=df.index, dtype=object)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Dataset is missing required columns {missing}; columns: {df.columns.tolist()}")

    out = df[REQUIRED_COLUMNS].copy()
    out[ACTIVITY_COL] = pd.Series(
        [_as_vector(v) for v in out[ACTIVITY_COL]], index=out.index, dtype=object
    )

    bad_len = [
        (pid, len(v)) for pid, v in zip(out[ID_COL], out[ACTIVITY_COL]) if len(v) != MINUTES_PER_DAY
    ]
    if bad_len:
        pid, n = bad_len[0]
        raise ValueError(
            f"Participant {pid} has {n} activity values; expected {MINUTES_PER_DAY} "
            f"({len(bad_len)} participant(s) affected)"
        )

    dupes = out[ID_COL][out[ID_COL].duplicated()].unique().tolist()
    if dupes:
        raise ValueError(f"Duplicate participant ids in {ID_COL!r}: {dupes[:5]}")

    out[GENDER_COL] = normalize_gender(out[GENDER_COL])
    out[AGE_COL] = pd.to_numeric(out[AGE_COL], errors="coerce")
    out = out.reset_index(drop=True)

    logger.debug(f"Normalized dataset: {len(out)} participants")
    return out


def _wide_activity_columns(df: pd.DataFrame) -> list[str]:
    """Return MIMS_1..MIMS_n column names in minute order, or [] if absent."""
    cols = [c for c in df.columns if isinstance(c, str) and c.startswith(WIDE_PREFIX)]
    minutes = []
    for c in cols:
        suffix = c[len(WIDE_PREFIX):]
        if suffix.isdigit():
            minutes.append((int(suffix), c))
    return [c for _, c in sorted(minutes)]


def _as_vector(v) -> np.ndarray:
    """Coerce one participant's activity cell to a 1-D float array (None -> empty)."""
    if v is None:
        return np.array([], dtype=float)
    return np.atleast_1d(np.asarray(v, dtype=float)).ravel()


def _is_supported(path: Path) -> bool:
    name = path.name.lower()
    return path.suffix.lower() in PICKLE_SUFFIXES or name.endswith(".csv") or name.endswith(".csv.gz")
