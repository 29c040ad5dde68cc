from __future__ import annotations

import math

import pytest

from models.constants import TARGET_HEIGHT_RANGE, TARGET_RADIUS_RANGE
from services.data import load_lens_catalog
from services.spatial import compute_lens_metrics, grid_position, map_range, normalize_lenses


# ----- map_range -----

def test_map_range_linear_and_inverted() -> None:
    assert map_range(5.0, (0.0, 10.0), (0.0, 1.0)) == pytest.approx(0.5)
    assert map_range(2.0, (0.0, 10.0), (0.0, 1.0), invert=True) == pytest.approx(0.8)


def test_map_range_clamp() -> None:
    assert map_range(20.0, (0.0, 10.0), (0.0, 1.0)) == pytest.approx(2.0)
    assert map_range(20.0, (0.0, 10.0), (0.0, 1.0), clamp=True) == 1.0
    assert map_range(-5.0, (0.0, 10.0), (0.0, 1.0), clamp=True) == 0.0


def test_map_range_degenerate_source_gives_midpoint() -> None:
    assert map_range(3.0, (3.0, 3.0), (1.0, 2.0)) == pytest.approx(1.5)


def test_map_range_nan_value_gives_lower_target() -> None:
    assert map_range(float("nan"), (0.0, 10.0), (1.2, 4.5)) == 1.2


def test_map_range_non_finite_bounds_fall_back_to_unit_range() -> None:
    assert map_range(0.5, (float("nan"), float("nan")), (0.0, 10.0)) == pytest.approx(5.0)


# ----- metrics and layout -----

def test_compute_lens_metrics(tele_zoom, make_lens) -> None:
    metrics = compute_lens_metrics(tele_zoom)
    assert (metrics.min_focal, metrics.max_focal) == (28.0, 100.0)
    assert (metrics.min_aperture, metrics.max_aperture) == (3.5, 5.6)
    assert metrics.focal_span == 72.0

    empty = compute_lens_metrics(make_lens("empty", []))
    assert math.isnan(empty.focal_span)


@pytest.mark.parametrize(
    "index, count, expected",
    [
        (0, 1, (0.0, 0.0)),
        (0, 2, (-1.75, 0.0)),
        (1, 2, (1.75, 0.0)),
        (2, 3, (-1.75, 1.75)),
        (4, 5, (0.0, 1.75)),
    ],
)
def test_grid_position(index, count, expected) -> None:
    x, y, z = grid_position(index, count, height=2.0)

    assert (x, z) == pytest.approx(expected)
    assert y == 1.0


# ----- normalize_lenses -----

def test_normalize_empty_selection() -> None:
    assert normalize_lenses([]) == ()


def test_single_lens_has_midpoint_height(standard_zoom) -> None:
    (proxy,) = normalize_lenses([standard_zoom])

    assert proxy.lens_id == "std"
    assert proxy.height == pytest.approx(sum(TARGET_HEIGHT_RANGE) / 2)
    # Wide end (f/2.8) is the fastest aperture in the selection
    assert proxy.radius_bottom == pytest.approx(TARGET_RADIUS_RANGE[1])
    assert proxy.radius_top == pytest.approx(TARGET_RADIUS_RANGE[0])
    assert proxy.position == pytest.approx((0.0, proxy.height / 2, 0.0))


def test_two_lenses_are_normalized_against_each_other(make_lens) -> None:
    constant = make_lens("constant", [(24, 2.8), (70, 2.8)])
    tele = make_lens("tele", [(100, 4.5), (400, 5.6)])

    a, b = normalize_lenses([constant, tele])

    assert a.height == pytest.approx(TARGET_HEIGHT_RANGE[0])
    assert b.height == pytest.approx(TARGET_HEIGHT_RANGE[1])
    assert a.radius_bottom == pytest.approx(1.4)
    assert a.radius_top == pytest.approx(1.4)
    assert b.radius_bottom == pytest.approx(0.5 + 0.9 * (1 - 1.7 / 2.8))
    assert b.radius_top == pytest.approx(0.5)
    assert a.position[0] < b.position[0]


def test_lens_without_knots_gets_minimum_dimensions(standard_zoom, make_lens) -> None:
    _, empty = normalize_lenses([standard_zoom, make_lens("empty", [])])

    assert empty.height == TARGET_HEIGHT_RANGE[0]
    assert empty.radius_bottom == TARGET_RADIUS_RANGE[0]
    assert empty.radius_top == TARGET_RADIUS_RANGE[0]


def test_proxies_stay_within_bounds_for_full_catalog() -> None:
    lenses = load_lens_catalog().lenses

    proxies = normalize_lenses(lenses)

    assert len(proxies) == len(lenses)
    for proxy in proxies:
        assert TARGET_HEIGHT_RANGE[0] <= proxy.height <= TARGET_HEIGHT_RANGE[1]
        assert TARGET_RADIUS_RANGE[0] <= proxy.radius_bottom <= TARGET_RADIUS_RANGE[1]
        assert TARGET_RADIUS_RANGE[0] <= proxy.radius_top <= TARGET_RADIUS_RANGE[1]
        # Bottom (fastest aperture) is never narrower than the top
        assert proxy.radius_bottom >= proxy.radius_top


def test_identical_lenses_get_identical_dimensions(make_lens) -> None:
    a = make_lens("a", [(24, 4.0), (105, 4.0)])
    b = make_lens("b", [(24, 4.0), (105, 4.0)])
    c = make_lens("c", [(100, 5.0), (500, 7.1)])

    pa, pb, _ = normalize_lenses([a, b, c])

    assert (pa.height, pa.radius_bottom, pa.radius_top) == (pb.height, pb.radius_bottom, pb.radius_top)
