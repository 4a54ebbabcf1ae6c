"""Report assembly: run the pipeline and render one HTML document.

build_report() runs reshape -> aggregate -> summarize -> figures on a
participant table. write_html() renders the result as a standalone HTML
document with the summary tables followed by the charts.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import plotly.io as pio

from mimsreport.pipeline.aggregator import ActivityAggregator
from mimsreport.pipeline.figure_generator import FigureGenerator
from mimsreport.pipeline.report_config import CHART_TITLES, ChartType, ReportConfig
from mimsreport.pipeline.reshaper import to_long_form
from mimsreport.pipeline.summary import ActivitySummary, build_summary
from mimsreport.utils.logging import get_logger

logger = get_logger(__name__)

TABLE_TITLES = {
    "overview": "Cohort overview",
    "by_group": "Participant daily-average MIMS by age group and gender",
    "age_band_gender": "Mean activity by age group and gender",
}

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: sans-serif; margin: 2rem auto; max-width: 1100px; }}
table.summary-table {{ border-collapse: collapse; margin-bottom: 1.5rem; font-size: 0.85rem; }}
table.summary-table th, table.summary-table td {{ padding: 2px 8px; border-bottom: 1px solid #ddd; text-align: right; }}
</style>
</head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


@dataclass
class ActivityReport:
    """Everything the document shows.

    Attributes:
        config: ReportConfig used for this run.
        summary: Cohort overview and per-group statistics.
        tables: Extra aggregate tables keyed by TABLE_TITLES name.
        figures: Plotly figure dicts keyed by ChartType, in document order.
    """
    config: ReportConfig
    summary: ActivitySummary
    tables: dict[str, pd.DataFrame] = field(default_factory=dict)
    figures: dict[ChartType, dict] = field(default_factory=dict)

    def all_tables(self) -> dict[str, pd.DataFrame]:
        """Summary tables followed by extra aggregate tables."""
        out = {
            "overview": self.summary.overview,
            "by_group": self.summary.by_group,
        }
        out.update(self.tables)
        return out


def build_report(df: pd.DataFrame, config: Optional[ReportConfig] = None) -> ActivityReport:
    """Run the whole pipeline on a participant table.

    Args:
        df: Participant table from load_activity_dataset() or make_synthetic_cohort().
        config: Report configuration; defaults to ReportConfig().
    """
    config = config or ReportConfig()
    logger.info(f"Building report for {len(df)} participants: {config.to_dict()}")

    long_df = to_long_form(df)
    aggregator = ActivityAggregator(long_df, window_minutes=config.window_minutes)
    summary = build_summary(df, aggregator, config.to_dict())
    figures = FigureGenerator(aggregator, config).make_all()

    return ActivityReport(
        config=config,
        summary=summary,
        tables={"age_band_gender": aggregator.mean_by_age_band_gender()},
        figures=figures,
    )


def render_html(report: ActivityReport) -> str:
    """Render the report as one HTML document string."""
    parts: list[str] = []
    for name, table in report.all_tables().items():
        parts.append(f"<h2>{html.escape(TABLE_TITLES.get(name, name))}</h2>")
        parts.append(
            table.to_html(
                index=False,
                border=0,
                classes="summary-table",
                float_format=lambda v: f"{v:.2f}",
                na_rep="",
            )
        )

    include_js: Union[str, bool] = "cdn" if report.config.include_plotlyjs == "cdn" else True
    for chart_type, fig in report.figures.items():
        parts.append(f"<h2>{html.escape(CHART_TITLES[chart_type])}</h2>")
        parts.append(
            pio.to_html(
                fig,
                full_html=False,
                include_plotlyjs=include_js,
                div_id=chart_type.value,
            )
        )
        # plotly.js is loaded once, with the first chart
        include_js = False

    return _PAGE_TEMPLATE.format(title=html.escape(report.config.title), body="\n".join(parts))


def write_html(report: ActivityReport, path: Union[str, Path]) -> Path:
    """Write the rendered report to path (parent directories are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_html(report), encoding="utf-8")
    logger.info(f"Wrote report to {path}")
    return path
