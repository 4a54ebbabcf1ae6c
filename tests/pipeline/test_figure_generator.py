"""Unit tests for FigureGenerator figure dictionaries."""

from __future__ import annotations

import pytest

from mimsreport.pipeline.aggregator import ActivityAggregator
from mimsreport.pipeline.figure_generator import FigureGenerator
from mimsreport.pipeline.report_config import CHART_TITLES, ChartType, ReportConfig
from mimsreport.pipeline.reshaper import to_long_form


@pytest.fixture(scope="module")
def generator(synthetic_cohort):
    agg = ActivityAggregator(to_long_form(synthetic_cohort))
    return FigureGenerator(agg, ReportConfig(figure_height=420))


@pytest.fixture(scope="module")
def figures(generator):
    return generator.make_all()


def _trace_types(fig: dict) -> set[str]:
    return {t.get("type") for t in fig["data"]}


def test_make_all_returns_every_chart_in_order(figures):
    assert list(figures) == list(ChartType)


@pytest.mark.parametrize("chart_type", list(ChartType))
def test_layout_common_options(figures, chart_type):
    layout = figures[chart_type]["layout"]
    assert layout["title"]["text"] == CHART_TITLES[chart_type]
    assert layout["height"] == 420


def test_radial_profile_closed_loop_per_gender(figures):
    fig = figures[ChartType.RADIAL_PROFILE]
    assert _trace_types(fig) == {"scatterpolar"}
    assert {t["name"] for t in fig["data"]} == {"Male", "Female"}
    for trace in fig["data"]:
        # 144 windows plus the closing point
        assert len(trace["r"]) == 145
        assert trace["r"][0] == trace["r"][-1]


def test_linear_profile_has_ribbon_and_mean(figures):
    fig = figures[ChartType.LINEAR_PROFILE]
    # upper, lower (filled), mean per gender
    assert len(fig["data"]) == 6
    fills = [t for t in fig["data"] if t.get("fill") == "tonexty"]
    assert len(fills) == 2
    means = [t for t in fig["data"] if t.get("showlegend") is not False]
    assert {t["name"] for t in means} == {"Male", "Female"}


def test_violin_faceted_by_time_band(figures):
    fig = figures[ChartType.VIOLIN_AGE_BAND]
    assert _trace_types(fig) == {"violin"}
    assert fig["layout"]["violinmode"] == "group"
    axes = {t.get("xaxis", "x") for t in fig["data"]}
    assert axes == {"x", "x2", "x3", "x4"}
    assert sum(1 for t in fig["data"] if t.get("showlegend")) == 2


def test_line_faceted_by_age_band(figures):
    fig = figures[ChartType.LINE_AGE_BAND]
    assert _trace_types(fig) == {"scatter"}
    annotations = [a["text"] for a in fig["layout"]["annotations"]]
    assert annotations == ["<10", "10-19", "20-34", "35-49", "50-64", "65+"]


def test_gender_difference_has_zero_line(figures):
    fig = figures[ChartType.GENDER_DIFFERENCE]
    assert _trace_types(fig) <= {"scatter"}
    shapes = fig["layout"]["shapes"]
    assert any(s.get("y0") == 0 and s.get("y1") == 0 for s in shapes)


def test_make_figure_single_gender(participants_factory):
    """Charts still build when only one gender is present."""
    df = participants_factory([(1, "Female", 30, 3.0), (2, "Female", 70, 5.0)])
    gen = FigureGenerator(ActivityAggregator(to_long_form(df)))
    diff = gen.make_figure(ChartType.GENDER_DIFFERENCE)
    assert diff["data"] == [] or all(len(t.get("x", [])) == 0 for t in diff["data"])
    radial = gen.make_figure(ChartType.RADIAL_PROFILE)
    assert [t["name"] for t in radial["data"]] == ["Female"]
