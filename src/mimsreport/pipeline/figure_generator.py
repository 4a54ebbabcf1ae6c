"""Plotly figure generation for the activity report.

This module provides the FigureGenerator class for creating Plotly figure
dictionaries from aggregated activity tables, separating figure generation
from aggregation and report assembly.
"""

from __future__ import annotations

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from mimsreport.pipeline.aggregator import (
    DIFF_COL,
    HOUR_COL,
    LOWER_COL,
    MEAN_COL,
    UPPER_COL,
    ActivityAggregator,
)
from mimsreport.pipeline.band_conventions import AGE_BAND_LABELS, TIME_BAND_LABELS
from mimsreport.pipeline.loader import ACTIVITY_COL, AGE_COL, GENDER_COL
from mimsreport.pipeline.report_config import CHART_TITLES, ChartType, ReportConfig
from mimsreport.pipeline.reshaper import AGE_BAND_COL, TIME_BAND_COL
from mimsreport.utils.logging import get_logger

logger = get_logger(__name__)

GENDER_COLORS = {
    "Male": (31, 119, 180),
    "Female": (214, 39, 40),
}

TIME_BAND_COLORS = {
    "00-06": "rgba(68, 1, 84, 0.8)",
    "06-12": "rgba(59, 82, 139, 0.8)",
    "12-18": "rgba(33, 145, 140, 0.8)",
    "18-24": "rgba(253, 231, 37, 0.9)",
}

# Clock ticks for time-of-day axes
HOUR_TICKS = list(range(0, 25, 3))
HOUR_TICK_TEXT = [f"{h:02d}:00" for h in HOUR_TICKS]

# Line-plot facet grid (age bands)
FACET_COLS = 3


def _rgba(gender: str, alpha: float = 1.0) -> str:
    r, g, b = GENDER_COLORS.get(gender, (128, 128, 128))
    return f"rgba({r}, {g}, {b}, {alpha})"


class FigureGenerator:
    """Generates Plotly figure dictionaries for each report chart.

    Attributes:
        aggregator: ActivityAggregator providing the grouped tables.
        config: ReportConfig with visual options.
    """

    def __init__(self, aggregator: ActivityAggregator, config: ReportConfig | None = None) -> None:
        self.aggregator = aggregator
        self.config = config or ReportConfig()

    def make_figure(self, chart_type: ChartType) -> dict:
        """Generate the Plotly figure dictionary for one chart.

        Args:
            chart_type: Which report chart to build.

        Returns:
            Plotly figure dictionary.
        """
        logger.info(f"FigureGenerator.make_figure: chart_type={chart_type.value}")

        if chart_type == ChartType.RADIAL_PROFILE:
            fig = self._figure_radial_profile()
        elif chart_type == ChartType.LINEAR_PROFILE:
            fig = self._figure_linear_profile()
        elif chart_type == ChartType.VIOLIN_AGE_BAND:
            fig = self._figure_violin_age_band()
        elif chart_type == ChartType.LINE_AGE_BAND:
            fig = self._figure_line_age_band()
        elif chart_type == ChartType.GENDER_DIFFERENCE:
            fig = self._figure_gender_difference()
        else:
            raise ValueError(f"Unknown chart type: {chart_type!r}")

        fig.update_layout(
            title_text=CHART_TITLES[chart_type],
            height=self.config.figure_height,
            showlegend=self.config.show_legend,
            margin=dict(l=50, r=20, t=70, b=50),
        )
        result = fig.to_dict()
        logger.debug(f"Figure generated: {len(result.get('data', []))} traces")
        return result

    def make_all(self) -> dict[ChartType, dict]:
        """Generate every chart, in ChartType order."""
        return {chart_type: self.make_figure(chart_type) for chart_type in ChartType}

    def _figure_radial_profile(self) -> go.Figure:
        """Polar time-of-day profile: one closed line per gender, midnight at the top."""
        table = self.aggregator.mean_by_time_gender()
        fig = go.Figure()
        for gender, sub in table.groupby(GENDER_COL, sort=True, observed=True):
            sub = sub.sort_values(HOUR_COL)
            theta = (sub[HOUR_COL] * 15.0).tolist()
            r = sub[MEAN_COL].tolist()
            if theta:
                # close the loop
                theta.append(theta[0] + 360.0)
                r.append(r[0])
            fig.add_trace(go.Scatterpolar(
                r=r,
                theta=theta,
                mode="lines",
                name=str(gender),
                line=dict(color=_rgba(str(gender)), width=self.config.line_width),
                hovertemplate=f"{gender}<br>MIMS=%{{r:.2f}}<extra></extra>",
            ))
        fig.update_layout(
            polar=dict(
                angularaxis=dict(
                    rotation=90,
                    direction="clockwise",
                    tickmode="array",
                    tickvals=[h * 15 for h in HOUR_TICKS[:-1]],
                    ticktext=HOUR_TICK_TEXT[:-1],
                ),
                radialaxis=dict(title=dict(text="MIMS")),
            ),
            legend_title_text="Gender",
        )
        return fig

    def _figure_linear_profile(self) -> go.Figure:
        """Mean MIMS over the day per gender with a lower/upper quantile ribbon."""
        table = self.aggregator.quantiles_by_minute_gender(
            self.config.lower_quantile, self.config.upper_quantile
        )
        fig = go.Figure()
        for gender, sub in table.groupby(GENDER_COL, sort=True, observed=True):
            gender = str(gender)
            sub = sub.sort_values(HOUR_COL)
            fig.add_trace(go.Scatter(
                x=sub[HOUR_COL],
                y=sub[UPPER_COL],
                mode="lines",
                line=dict(width=0),
                legendgroup=gender,
                showlegend=False,
                hoverinfo="skip",
            ))
            fig.add_trace(go.Scatter(
                x=sub[HOUR_COL],
                y=sub[LOWER_COL],
                mode="lines",
                line=dict(width=0),
                fill="tonexty",
                fillcolor=_rgba(gender, 0.2),
                legendgroup=gender,
                showlegend=False,
                hoverinfo="skip",
            ))
            fig.add_trace(go.Scatter(
                x=sub[HOUR_COL],
                y=sub[MEAN_COL],
                mode="lines",
                name=gender,
                legendgroup=gender,
                line=dict(color=_rgba(gender), width=self.config.line_width),
                hovertemplate=f"{gender}<br>hour=%{{x:.2f}}<br>mean=%{{y:.2f}}<extra></extra>",
            ))
        fig.update_layout(
            xaxis=dict(title="Time of day", tickvals=HOUR_TICKS, ticktext=HOUR_TICK_TEXT, range=[0, 24]),
            yaxis_title="MIMS",
            legend_title_text="Gender",
        )
        return fig

    def _figure_violin_age_band(self) -> go.Figure:
        """Violins of participant averages by age band, split by gender, one facet per time band."""
        pm = self.aggregator.participant_means(by=[TIME_BAND_COL])
        fig = make_subplots(
            rows=1,
            cols=len(TIME_BAND_LABELS),
            shared_yaxes=True,
            subplot_titles=TIME_BAND_LABELS,
            horizontal_spacing=0.03,
        )
        legend_shown: set[str] = set()
        for col_idx, band in enumerate(TIME_BAND_LABELS, start=1):
            band_df = pm[pm[TIME_BAND_COL].astype(str) == band]
            for gender, sub in band_df.groupby(GENDER_COL, sort=True, observed=True):
                gender = str(gender)
                fig.add_trace(
                    go.Violin(
                        x=sub[AGE_BAND_COL].astype(str),
                        y=sub[ACTIVITY_COL],
                        name=gender,
                        legendgroup=gender,
                        showlegend=gender not in legend_shown,
                        alignmentgroup=band,
                        offsetgroup=gender,
                        box_visible=True,
                        meanline_visible=True,
                        points=False,
                        line=dict(color=_rgba(gender), width=1.5),
                        fillcolor=_rgba(gender, 0.4),
                    ),
                    row=1,
                    col=col_idx,
                )
                legend_shown.add(gender)
        fig.update_xaxes(categoryorder="array", categoryarray=AGE_BAND_LABELS, tickangle=-30)
        fig.update_yaxes(title_text="Participant mean MIMS", row=1, col=1)
        fig.update_layout(violinmode="group", legend_title_text="Gender")
        return fig

    def _figure_line_age_band(self) -> go.Figure:
        """Smoothed daily profile per gender, one facet per age band."""
        table = self.aggregator.mean_by_age_band_time()
        n_rows = -(-len(AGE_BAND_LABELS) // FACET_COLS)
        fig = make_subplots(
            rows=n_rows,
            cols=FACET_COLS,
            shared_xaxes=True,
            shared_yaxes=True,
            subplot_titles=AGE_BAND_LABELS,
            vertical_spacing=0.12,
            horizontal_spacing=0.04,
        )
        legend_shown: set[str] = set()
        for i, band in enumerate(AGE_BAND_LABELS):
            row, col = i // FACET_COLS + 1, i % FACET_COLS + 1
            band_df = table[table[AGE_BAND_COL].astype(str) == band]
            for gender, sub in band_df.groupby(GENDER_COL, sort=True, observed=True):
                gender = str(gender)
                sub = sub.sort_values(HOUR_COL)
                fig.add_trace(
                    go.Scatter(
                        x=sub[HOUR_COL],
                        y=sub[MEAN_COL],
                        mode="lines",
                        name=gender,
                        legendgroup=gender,
                        showlegend=gender not in legend_shown,
                        line=dict(color=_rgba(gender), width=self.config.line_width),
                    ),
                    row=row,
                    col=col,
                )
                legend_shown.add(gender)
        fig.update_xaxes(tickvals=HOUR_TICKS[::2], ticktext=HOUR_TICK_TEXT[::2], range=[0, 24])
        fig.update_yaxes(title_text="MIMS", col=1)
        fig.update_layout(legend_title_text="Gender")
        return fig

    def _figure_gender_difference(self) -> go.Figure:
        """Female minus male mean MIMS against age, one marker series per time band."""
        table = self.aggregator.gender_difference_by_age_time_band()
        fig = go.Figure()
        for band, sub in table.groupby(TIME_BAND_COL, sort=True, observed=True):
            band = str(band)
            fig.add_trace(go.Scatter(
                x=sub[AGE_COL],
                y=sub[DIFF_COL],
                mode="markers",
                name=band,
                marker=dict(size=self.config.point_size, color=TIME_BAND_COLORS.get(band)),
                hovertemplate=f"{band}<br>age=%{{x}}<br>F-M=%{{y:.2f}}<extra></extra>",
            ))
        fig.add_hline(y=0, line=dict(color="gray", dash="dash", width=1))
        fig.update_layout(
            xaxis_title="Age (years)",
            yaxis_title="Female - Male MIMS",
            legend_title_text="Time of day",
        )
        return fig

