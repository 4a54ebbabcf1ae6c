"""Header component for the report viewer.

Provides build_report_header() with title, theme toggle, and a data-source link.
"""

from __future__ import annotations

import webbrowser

from nicegui import app, ui

THEME_STORAGE_KEY = "mimsreport_dark_mode"

NHANES_URL = "https://wwwn.cdc.gov/nchs/nhanes/"


def _open_external(url: str) -> None:
    """Open URL in system browser (native) or new tab (browser)."""
    native = getattr(app, "native", None)
    in_native = getattr(native, "main_window", None) is not None
    if in_native:
        webbrowser.open(url)
    else:
        ui.run_javascript(f'window.open("{url}", "_blank")')


def build_report_header(title: str, *, source_url: str = NHANES_URL) -> ui.dark_mode:
    """Build header with title, theme toggle, and data-source link.

    Args:
        title: Report title shown on the left.
        source_url: URL opened by the data-source button.

    Returns:
        Dark mode controller for the page.
    """
    dark_mode = ui.dark_mode()
    dark_mode.value = app.storage.user.get(THEME_STORAGE_KEY, False)

    def _update_theme_icon() -> None:
        icon = "light_mode" if dark_mode.value else "dark_mode"
        theme_btn.props(f"icon={icon}")

    def _toggle_theme() -> None:
        dark_mode.value = not dark_mode.value
        app.storage.user[THEME_STORAGE_KEY] = dark_mode.value
        _update_theme_icon()

    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 36px; height: 36px; padding: 0 8px;"
    ):
        with ui.row().classes("items-center gap-2"):
            ui.label(title).classes("!text-lg font-bold text-white")

        with ui.row().classes("items-center gap-2"):
            theme_btn = ui.button(
                icon="light_mode" if dark_mode.value else "dark_mode",
                on_click=_toggle_theme,
            ).props("flat round dense text-color=white").tooltip("Toggle dark / light mode")
            _update_theme_icon()

            ui.button(
                icon="dataset",
                on_click=lambda: _open_external(source_url),
            ).props("flat round dense text-color=white").tooltip("Open NHANES data source")

    return dark_mode
