"""Write the activity report as a standalone HTML document.

Run:
    python -m mimsreport

Env vars:
    MIMSREPORT_DATA: dataset path (default: first .pkl/.csv in data/)
    MIMSREPORT_OUT: output HTML path (default mims_report.html)
    MIMSREPORT_SYNTHETIC: 1/0, use a synthetic cohort (default 0)
    MIMSREPORT_LOG_LEVEL: log level (default INFO)
"""

from __future__ import annotations

import os

from mimsreport.pipeline.report import build_report, write_html
from mimsreport.pipeline.source import load_report_input
from mimsreport.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

OUT_ENV = "MIMSREPORT_OUT"
DEFAULT_OUT = "mims_report.html"


def main() -> None:
    """Load the input, build the report, and write it to MIMSREPORT_OUT."""
    configure_logging()
    df = load_report_input()
    report = build_report(df)
    out = write_html(report, os.getenv(OUT_ENV, DEFAULT_OUT))
    logger.info(f"Report written: {out.resolve()}")


if __name__ == "__main__":
    main()
