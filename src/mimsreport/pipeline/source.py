"""Input selection for entry points.

Decides which participant table a run uses, from environment variables:

    MIMSREPORT_DATA: dataset path (default: first loadable file in data/)
    MIMSREPORT_SYNTHETIC: 1/0, use a synthetic cohort instead of a file
    MIMSREPORT_SYNTHETIC_N: synthetic cohort size (default 120)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import pandas as pd

from mimsreport.pipeline.loader import get_data_dir, list_data_files, load_activity_dataset
from mimsreport.pipeline.synthetic import make_synthetic_cohort
from mimsreport.utils.env import env_bool, env_int
from mimsreport.utils.logging import get_logger

logger = get_logger(__name__)

DATA_ENV = "MIMSREPORT_DATA"
SYNTHETIC_ENV = "MIMSREPORT_SYNTHETIC"
SYNTHETIC_N_ENV = "MIMSREPORT_SYNTHETIC_N"


def resolve_dataset_path() -> Optional[Path]:
    """Dataset path from MIMSREPORT_DATA, else the first file in data/, else None."""
    raw = os.getenv(DATA_ENV)
    if raw:
        return Path(raw).expanduser()
    files = list_data_files()
    if files:
        return get_data_dir() / files[0]
    return None


def load_report_input() -> pd.DataFrame:
    """Load the participant table selected by the environment.

    Raises:
        FileNotFoundError: If no synthetic cohort is requested and no dataset
            can be found.
    """
    if env_bool(SYNTHETIC_ENV, False):
        n = env_int(SYNTHETIC_N_ENV, 120)
        logger.info(f"Using synthetic cohort of {n} participants")
        return make_synthetic_cohort(n_participants=n)

    path = resolve_dataset_path()
    if path is None:
        raise FileNotFoundError(
            f"No dataset found: set {DATA_ENV} or place a .pkl/.csv file in {get_data_dir()}"
        )
    return load_activity_dataset(path)
