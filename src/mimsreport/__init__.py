"""
mimsreport: physical-activity report over NHANES wrist-accelerometer MIMS data.

This package provides:
- A pipeline that loads per-participant minute-level MIMS vectors, reshapes
  them to long form, and aggregates them by time of day, age group and gender
- Plotly figures for the report charts and a standalone HTML report writer
- A NiceGUI viewer app for the same report
- Logging utilities for library and application use

For logging configuration in scripts and notebooks:
    ```python
    from mimsreport.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from mimsreport.utils.logging import configure_logging, get_logger

from mimsreport.pipeline import (
    ActivityAggregator,
    ChartType,
    ReportConfig,
    build_report,
    load_activity_dataset,
    write_html,
)

# Ensure mimsreport logger has NullHandler so logs don't propagate to root
# when no application has configured logging. Entry points call
# configure_logging() to add a real handler.
_logger = logging.getLogger("mimsreport")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ActivityAggregator",
    "ChartType",
    "ReportConfig",
    "build_report",
    "configure_logging",
    "get_logger",
    "load_activity_dataset",
    "write_html",
]

__version__ = "0.1.0"
