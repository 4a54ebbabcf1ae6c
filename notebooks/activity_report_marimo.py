"""
Activity report: Marimo notebook

Narrative walk-through of the NHANES MIMS report: load the cohort, reshape
to long form, summarize, and show the five charts. Uses the mimsreport
pipeline; the smoothing window and percentile ribbon are adjustable.

Run:
  uv run marimo edit notebooks/activity_report_marimo.py
  uv run marimo run notebooks/activity_report_marimo.py

Requires: pip install mimsreport[notebook]
Set MIMSREPORT_DATA to a dataset path, or MIMSREPORT_SYNTHETIC=1.
"""

import marimo

__generated_with = "0.19.11"
app = marimo.App(width="medium")


@app.cell(hide_code=True)
def _():
    import marimo as mo
    import sys
    from pathlib import Path

    # Ensure mimsreport is importable when run from the repo root
    _src = Path(__file__).resolve().parent.parent / "src"
    if str(_src) not in sys.path:
        sys.path.insert(0, str(_src))

    import plotly.graph_objects as go

    from mimsreport.pipeline.aggregator import ActivityAggregator
    from mimsreport.pipeline.figure_generator import FigureGenerator
    from mimsreport.pipeline.report_config import CHART_TITLES, ChartType, ReportConfig
    from mimsreport.pipeline.reshaper import to_long_form
    from mimsreport.pipeline.source import load_report_input
    from mimsreport.pipeline.summary import cohort_overview, describe_activity

    return (
        ActivityAggregator,
        CHART_TITLES,
        ChartType,
        FigureGenerator,
        ReportConfig,
        cohort_overview,
        describe_activity,
        go,
        load_report_input,
        mo,
        to_long_form,
    )


@app.cell(hide_code=True)
def _(mo):
    mo.md(
        """
        # Physical activity across age and gender

        Wrist-worn accelerometers in NHANES record a Monitor-Independent
        Movement Summary (MIMS) for every minute of the day. This notebook
        compares daily activity patterns between age groups and genders.
        """
    )
    return


@app.cell
def _(cohort_overview, load_report_input, mo, to_long_form):
    participants = load_report_input()
    long_df = to_long_form(participants)
    mo.vstack([
        mo.md(f"Loaded **{len(participants)}** participants, **{len(long_df)}** minute-level samples."),
        mo.ui.table(cohort_overview(participants), selection=None),
    ])
    return (long_df,)


@app.cell
def _(mo):
    window_select = mo.ui.dropdown(
        options=["5", "10", "15", "30", "60"],
        value="10",
        label="Smoothing window (minutes)",
    )
    ribbon_slider = mo.ui.slider(0.80, 0.99, step=0.01, value=0.95, label="Percentile ribbon width")
    mo.hstack([window_select, ribbon_slider], justify="start", gap=2)
    return ribbon_slider, window_select


@app.cell
def _(
    ActivityAggregator,
    FigureGenerator,
    ReportConfig,
    describe_activity,
    long_df,
    mo,
    ribbon_slider,
    window_select,
):
    _tail = (1.0 - float(ribbon_slider.value)) / 2.0
    config = ReportConfig(
        window_minutes=int(window_select.value),
        lower_quantile=_tail,
        upper_quantile=1.0 - _tail,
    )
    aggregator = ActivityAggregator(long_df, window_minutes=config.window_minutes)
    figure_generator = FigureGenerator(aggregator, config)
    mo.vstack([
        mo.md("## Daily-average MIMS by age group and gender"),
        mo.ui.table(describe_activity(aggregator).round(2), selection=None),
    ])
    return (figure_generator,)


@app.cell
def _(CHART_TITLES, ChartType, figure_generator, go, mo):
    _sections = []
    for _chart_type in ChartType:
        _sections.append(mo.md(f"## {CHART_TITLES[_chart_type]}"))
        _sections.append(go.Figure(figure_generator.make_figure(_chart_type)))
    mo.vstack(_sections)
    return


if __name__ == "__main__":
    app.run()
