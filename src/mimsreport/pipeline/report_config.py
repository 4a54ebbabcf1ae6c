"""Report configuration state.

This module defines the ChartType enum and ReportConfig dataclass used to
serialize and manage report configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from mimsreport.pipeline.aggregator import DEFAULT_WINDOW_MINUTES


class ChartType(Enum):
    """Enumeration of report charts, in document order."""
    RADIAL_PROFILE = "radial_profile"
    LINEAR_PROFILE = "linear_profile"
    VIOLIN_AGE_BAND = "violin_age_band"
    LINE_AGE_BAND = "line_age_band"
    GENDER_DIFFERENCE = "gender_difference"


CHART_TITLES = {
    ChartType.RADIAL_PROFILE: "Average activity by time of day",
    ChartType.LINEAR_PROFILE: "Activity over the day (mean, 2.5-97.5 percentile)",
    ChartType.VIOLIN_AGE_BAND: "Participant average activity by age group",
    ChartType.LINE_AGE_BAND: "Daily activity profile by age group",
    ChartType.GENDER_DIFFERENCE: "Female minus male activity by age",
}


@dataclass
class ReportConfig:
    """Configuration for one report run.

    Holds the smoothing and quantile parameters of the aggregation step and
    the visual options shared by every chart.
    """
    title: str = "Physical activity across age and gender (NHANES MIMS)"
    window_minutes: int = DEFAULT_WINDOW_MINUTES  # smoothing window; must divide 1440
    lower_quantile: float = 0.025      # ribbon lower edge for the linear profile
    upper_quantile: float = 0.975      # ribbon upper edge for the linear profile
    line_width: int = 2                # line width for profile/trend lines
    point_size: int = 6                # marker size for the difference scatter
    figure_height: int = 500           # pixel height of every figure
    show_legend: bool = True           # show plot legends
    include_plotlyjs: str = "cdn"      # how write_html embeds plotly.js ("cdn" or "inline")

    def to_dict(self) -> dict[str, Any]:
        """Serialize ReportConfig to dictionary."""
        return {
            "title": self.title,
            "window_minutes": self.window_minutes,
            "lower_quantile": self.lower_quantile,
            "upper_quantile": self.upper_quantile,
            "line_width": self.line_width,
            "point_size": self.point_size,
            "figure_height": self.figure_height,
            "show_legend": self.show_legend,
            "include_plotlyjs": self.include_plotlyjs,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportConfig":
        """Deserialize ReportConfig from dictionary; missing keys take defaults.

        Raises:
            ValueError: If include_plotlyjs is not "cdn" or "inline".
        """
        default = cls()
        include_plotlyjs = str(data.get("include_plotlyjs", default.include_plotlyjs))
        if include_plotlyjs not in ("cdn", "inline"):
            raise ValueError(f"include_plotlyjs must be 'cdn' or 'inline', got {include_plotlyjs!r}")
        return cls(
            title=str(data.get("title", default.title)),
            window_minutes=int(data.get("window_minutes", default.window_minutes)),
            lower_quantile=float(data.get("lower_quantile", default.lower_quantile)),
            upper_quantile=float(data.get("upper_quantile", default.upper_quantile)),
            line_width=int(data.get("line_width", default.line_width)),
            point_size=int(data.get("point_size", default.point_size)),
            figure_height=int(data.get("figure_height", default.figure_height)),
            show_legend=bool(data.get("show_legend", default.show_legend)),
            include_plotlyjs=include_plotlyjs,
        )
