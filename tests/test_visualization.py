from __future__ import annotations

import math

import numpy as np
import pytest

from models.core import AxisPlan, ChartData
from services.axes import plan_aperture_axis, plan_focal_axis
from services.curves import merge_lens_curves
from services.spatial import normalize_lenses
from services.visualization import (
    create_aperture_chart,
    create_lens_scene,
    create_report_png,
    format_aperture,
    frustum_mesh,
)

COLORS = {"std": "#ff0000", "tele": "#00ff00"}


@pytest.fixture
def chart_inputs(standard_zoom, tele_zoom):
    lenses = [standard_zoom, tele_zoom]
    return merge_lens_curves(lenses), lenses, plan_focal_axis(lenses), plan_aperture_axis(lenses)


def test_format_aperture() -> None:
    assert format_aperture(2.8) == "f/2.8"
    assert format_aperture(4) == "f/4.0"


# ----- 2D chart -----

def test_chart_has_step_line_and_knot_markers_per_lens(chart_inputs) -> None:
    data, lenses, x_plan, y_plan = chart_inputs

    fig = create_aperture_chart(data, lenses, COLORS, x_plan, y_plan)

    lines = [t for t in fig.data if t.mode == "lines"]
    markers = [t for t in fig.data if t.mode == "markers"]
    assert [t.name for t in lines] == ["Standard 24-70", "Tele 28-100"]
    assert all(t.line.shape == "hv" for t in lines)
    assert len(markers) == 2
    assert list(markers[0].x) == [24.0, 70.0]
    assert lines[0].line.color == "#ff0000"


def test_ai_research_lines_are_dashed(chart_inputs) -> None:
    data, lenses, x_plan, y_plan = chart_inputs

    fig = create_aperture_chart(data, lenses, COLORS, x_plan, y_plan)

    lines = [t for t in fig.data if t.mode == "lines"]
    assert lines[0].line.dash == "solid"
    assert lines[1].line.dash != "solid"


def test_aperture_axis_is_log_and_reversed(chart_inputs) -> None:
    data, lenses, x_plan, y_plan = chart_inputs

    fig = create_aperture_chart(data, lenses, COLORS, x_plan, y_plan)

    yaxis = fig.layout.yaxis
    assert yaxis.type == "log"
    assert yaxis.range[0] == pytest.approx(math.log10(y_plan.domain[0]))
    assert yaxis.range[0] > yaxis.range[1]
    assert list(yaxis.ticktext) == ["f/2.8", "f/4.0", "f/5.6", "f/6.3"]
    assert list(fig.layout.xaxis.range) == list(x_plan.domain)


def test_auto_axes_leave_range_to_plotly() -> None:
    auto = AxisPlan(domain=None, ticks=(2.8, 4.0))

    fig = create_aperture_chart(ChartData(), [], {}, auto, auto)

    assert fig.layout.yaxis.autorange == "reversed"
    assert fig.layout.xaxis.range is None
    assert len(fig.data) == 0


# ----- 3D scene -----

def test_frustum_mesh_shape() -> None:
    x, y, z, i, j, k = frustum_mesh(1.0, 0.5, 2.0, center=(3.0, 1.0, -2.0), segments=8)

    assert len(x) == len(y) == len(z) == 18
    assert len(i) == len(j) == len(k) == 32
    assert max(np.max(i), np.max(j), np.max(k)) < 18
    # Vertical extent is centred on the proxy's y position
    assert np.min(z) == pytest.approx(0.0)
    assert np.max(z) == pytest.approx(2.0)
    assert np.max(x) == pytest.approx(4.0)
    assert np.mean(y[:8]) == pytest.approx(-2.0)


def test_scene_has_one_mesh_per_proxy(standard_zoom, tele_zoom) -> None:
    lenses = [standard_zoom, tele_zoom]
    proxies = normalize_lenses(lenses)

    fig = create_lens_scene(proxies, {lens.id: lens for lens in lenses}, COLORS, revision=3)

    assert [t.type for t in fig.data] == ["mesh3d", "mesh3d"]
    assert [t.name for t in fig.data] == ["Standard 24-70", "Tele 28-100"]
    assert fig.data[0].color == "#ff0000"
    assert "24–70mm" in fig.data[0].hovertext
    assert fig.layout.uirevision == "scene-3"


def test_scene_revision_changes_ui_revision(standard_zoom) -> None:
    proxies = normalize_lenses([standard_zoom])
    lenses = {"std": standard_zoom}

    first = create_lens_scene(proxies, lenses, COLORS, revision=0)
    second = create_lens_scene(proxies, lenses, COLORS, revision=1)

    assert first.layout.uirevision != second.layout.uirevision


# ----- PNG export -----

def test_report_png_is_png(chart_inputs) -> None:
    data, lenses, x_plan, y_plan = chart_inputs

    png = create_report_png(data, lenses, COLORS, x_plan, y_plan)

    assert png.startswith(b"\x89PNG")


def test_report_png_empty_chart() -> None:
    auto = AxisPlan(domain=None, ticks=())

    assert create_report_png(ChartData(), [], {}, auto, auto) == b""
