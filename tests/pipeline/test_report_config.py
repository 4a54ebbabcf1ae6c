"""Unit tests for ReportConfig serialization."""

import pytest

from mimsreport.pipeline.report_config import CHART_TITLES, ChartType, ReportConfig


def test_defaults():
    cfg = ReportConfig()
    assert cfg.window_minutes == 10
    assert cfg.lower_quantile == 0.025
    assert cfg.upper_quantile == 0.975


def test_from_dict_round_trip():
    cfg = ReportConfig(title="T", window_minutes=30, show_legend=False, include_plotlyjs="inline")
    restored = ReportConfig.from_dict(cfg.to_dict())
    assert restored == cfg


def test_from_dict_missing_keys_take_defaults():
    cfg = ReportConfig.from_dict({"window_minutes": "20"})
    assert cfg.window_minutes == 20
    assert cfg.figure_height == ReportConfig().figure_height


def test_from_dict_rejects_bad_plotlyjs_mode():
    with pytest.raises(ValueError, match="include_plotlyjs"):
        ReportConfig.from_dict({"include_plotlyjs": "directory"})


def test_every_chart_has_a_title():
    assert set(CHART_TITLES) == set(ChartType)
    assert len(ChartType) == 5
