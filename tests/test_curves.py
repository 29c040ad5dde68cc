from __future__ import annotations

import numpy as np
import pytest

from models.core import KnotKind
from services.curves import build_sample_grid, merge_lens_curves, sample_lens
from services.data import load_lens_catalog


def test_sample_grid_is_sorted_union(standard_zoom, tele_zoom) -> None:
    assert build_sample_grid([standard_zoom, tele_zoom]) == (24.0, 28.0, 50.0, 70.0, 100.0)


def test_sample_lens_exact_interpolated_and_clamped(standard_zoom) -> None:
    grid = (20.0, 24.0, 47.0, 70.0, 100.0)

    apertures, kinds = sample_lens(standard_zoom, grid)

    assert kinds == [
        KnotKind.CLAMPED, KnotKind.EXACT, KnotKind.INTERPOLATED, KnotKind.EXACT, KnotKind.CLAMPED,
    ]
    assert apertures[0] == 2.8
    assert apertures[1] == 2.8
    assert apertures[2] == pytest.approx(3.4)
    assert apertures[3] == 4.0
    assert apertures[4] == 4.0


def test_sample_lens_without_knots_is_missing(make_lens) -> None:
    apertures, kinds = sample_lens(make_lens("empty", []), (24.0, 70.0))

    assert apertures == [None, None]
    assert kinds == [KnotKind.MISSING, KnotKind.MISSING]


def test_merge_two_lenses(standard_zoom, tele_zoom) -> None:
    data = merge_lens_curves([standard_zoom, tele_zoom])

    assert data.grid == (24.0, 28.0, 50.0, 70.0, 100.0)
    assert data.lens_ids == ("std", "tele")
    assert len(data.rows) == 5

    _, std = data.series("std")
    assert np.allclose(std, [2.8, 2.8 + 1.2 * 4 / 46, 2.8 + 1.2 * 26 / 46, 4.0, 4.0])

    _, tele = data.series("tele")
    assert np.allclose(tele, [3.5, 3.5, 4.5, 4.5 + 1.1 * 20 / 50, 5.6])

    row = data.rows[-1]
    assert row.kinds["std"] is KnotKind.CLAMPED
    assert row.is_original("tele")
    assert not row.is_original("std")


def test_original_points_only_at_knots(standard_zoom, tele_zoom) -> None:
    data = merge_lens_curves([standard_zoom, tele_zoom])

    x, y = data.original_points("tele")

    assert list(x) == [28.0, 50.0, 100.0]
    assert list(y) == [3.5, 4.5, 5.6]


def test_merge_empty_selection() -> None:
    data = merge_lens_curves([])

    assert data.is_empty
    assert data.grid == ()


def test_lens_without_knots_gives_nan_series(standard_zoom, make_lens) -> None:
    data = merge_lens_curves([standard_zoom, make_lens("empty", [])])

    _, y = data.series("empty")

    assert data.grid == (24.0, 70.0)
    assert np.isnan(y).all()
    assert len(data.original_points("empty")[0]) == 0


def test_to_frame_columns(standard_zoom, tele_zoom) -> None:
    frame = merge_lens_curves([standard_zoom, tele_zoom]).to_frame()

    assert list(frame.columns) == [
        "Focal Length", "std", "std_is_original", "tele", "tele_is_original",
    ]
    assert frame["Focal Length"].tolist() == [24.0, 28.0, 50.0, 70.0, 100.0]
    assert frame["std_is_original"].tolist() == [True, False, False, True, False]


def test_interpolated_values_stay_between_bracketing_knots() -> None:
    lenses = list(load_lens_catalog().lenses)
    data = merge_lens_curves(lenses)

    for lens in lenses:
        xp, fp = lens.focal_lengths, lens.apertures
        for row in data.rows:
            if row.kinds[lens.id] is not KnotKind.INTERPOLATED:
                continue
            right = int(np.searchsorted(xp, row.focal_length))
            low, high = sorted((fp[right - 1], fp[right]))
            assert low - 1e-9 <= row.apertures[lens.id] <= high + 1e-9
