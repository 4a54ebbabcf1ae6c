"""Report viewer: standalone NiceGUI application for the activity report.

Runs in native or web mode via env vars. Uses @ui.page("/") pattern; the
report is rebuilt on every page load.

Run:
    python -m mimsreport.report_app.report_app

Env vars:
    MIMSREPORT_GUI_NATIVE: 1/0 (default 0)
    MIMSREPORT_GUI_RELOAD: 1/0 (default 0)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
    MIMSREPORT_DATA / MIMSREPORT_SYNTHETIC: input selection (see pipeline.source)
"""

from __future__ import annotations

import multiprocessing as mp
import os
from multiprocessing import freeze_support

import pandas as pd
from nicegui import ui

from mimsreport.pipeline.report import TABLE_TITLES, ActivityReport, build_report
from mimsreport.pipeline.report_config import CHART_TITLES, ReportConfig
from mimsreport.pipeline.source import load_report_input
from mimsreport.report_app import header
from mimsreport.report_app.gui_defaults import setUpGuiDefaults
from mimsreport.utils.env import env_bool, env_int
from mimsreport.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

STORAGE_SECRET = "mimsreport-viewer-session-secret"

GRID_ROW_HEIGHT_PX = 28


def grid_frame(table: pd.DataFrame, decimals: int = 3) -> pd.DataFrame:
    """Make a table JSON-friendly for AG Grid: categories as str, floats rounded, NaN blank."""
    out = table.copy()
    for col in out.columns:
        s = out[col]
        if isinstance(s.dtype, pd.CategoricalDtype):
            out[col] = s.astype(str)
        elif s.dtype.kind == "f":
            out[col] = s.round(decimals)
    return out.astype(object).where(out.notna(), "")


def render_report(report: ActivityReport) -> None:
    """Add summary grids and charts to the current NiceGUI container."""
    for name, table in report.all_tables().items():
        ui.label(TABLE_TITLES.get(name, name)).classes("text-lg font-bold")
        height = GRID_ROW_HEIGHT_PX * (len(table) + 2)
        ui.aggrid.from_pandas(grid_frame(table)).classes("w-full").style(f"height: {height}px")

    for chart_type, fig in report.figures.items():
        ui.label(CHART_TITLES[chart_type]).classes("text-lg font-bold")
        ui.plotly(fig).classes("w-full")


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header + summary tables + report charts."""
    config = ReportConfig()

    setUpGuiDefaults("text-sm")

    ui.page_title(config.title)

    header.build_report_header(config.title)

    with ui.column().classes("w-full gap-4 p-4"):
        try:
            df = load_report_input()
            report = build_report(df, config)
        except FileNotFoundError as e:
            ui.label(str(e)).classes("text-negative")
            return
        except Exception as e:
            logger.exception("Failed to build report: %s", e)
            ui.label(f"Failed to build report: {e}").classes("text-negative")
            return
        render_report(report)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the report viewer.

    Defaults (no env vars, no args):
      - native=False
      - reload=False
    """
    configure_logging()

    native_bool = env_bool("MIMSREPORT_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = env_bool("MIMSREPORT_GUI_RELOAD", False) if reload is None else reload

    if native_bool:
        from nicegui import native as native_module
        port = env_int("PORT", native_module.find_open_port())
    else:
        port = env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting report viewer: host=%s port=%s reload=%s native=%s",
        host,
        port,
        reload,
        native_bool,
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "storage_secret": STORAGE_SECRET,
        "title": ReportConfig().title,
    }
    if native_bool:
        run_kwargs["window_size"] = (1200, 900)
    ui.run(**run_kwargs)


if __name__ == "__main__":
    freeze_support()
    if mp.current_process().name == "MainProcess":
        main()
    else:
        logger.debug("Skipping GUI startup in worker process: %s", mp.current_process().name)
