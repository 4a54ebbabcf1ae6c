"""Activity report pipeline: load, reshape, aggregate, visualize."""

from mimsreport.pipeline.aggregator import ActivityAggregator
from mimsreport.pipeline.figure_generator import FigureGenerator
from mimsreport.pipeline.loader import load_activity_dataset, normalize_activity_frame
from mimsreport.pipeline.report import ActivityReport, build_report, render_html, write_html
from mimsreport.pipeline.report_config import ChartType, ReportConfig
from mimsreport.pipeline.reshaper import to_long_form
from mimsreport.pipeline.synthetic import make_synthetic_cohort

__all__ = [
    "ActivityAggregator",
    "ActivityReport",
    "ChartType",
    "FigureGenerator",
    "ReportConfig",
    "build_report",
    "load_activity_dataset",
    "make_synthetic_cohort",
    "normalize_activity_frame",
    "render_html",
    "to_long_form",
    "write_html",
]
