"""Build the activity report from a synthetic cohort and open it in a browser.

Run:
    python examples/build_report_example.py
"""

from __future__ import annotations

import webbrowser
from pathlib import Path

from mimsreport.pipeline import ReportConfig, build_report, make_synthetic_cohort, write_html
from mimsreport.utils.logging import configure_logging


def main() -> None:
    configure_logging(level="DEBUG")

    df = make_synthetic_cohort(n_participants=300, seed=1)
    report = build_report(df, ReportConfig(title="Synthetic cohort activity report"))

    out = write_html(report, Path("mims_report_synthetic.html"))
    webbrowser.open(out.resolve().as_uri())


if __name__ == "__main__":
    main()
