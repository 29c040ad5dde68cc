from __future__ import annotations

import pytest

from models.core import LensFormat
from services.equivalence import crop_factor, round_millimetre, to_equivalent, to_equivalent_all


def test_crop_factors_per_format() -> None:
    assert crop_factor(LensFormat.FULL_FRAME) == 1.0
    assert crop_factor(LensFormat.APSC) == 1.5
    assert crop_factor(LensFormat.M43) == 2.0


def test_round_millimetre_rounds_half_up() -> None:
    assert round_millimetre(82.5) == 83
    assert round_millimetre(27.0) == 27
    assert round_millimetre(26.49) == 26


def test_full_frame_lens_is_returned_unchanged(standard_zoom) -> None:
    assert to_equivalent(standard_zoom) is standard_zoom


def test_apsc_lens_is_scaled_and_rounded(make_lens) -> None:
    lens = make_lens("kit", [(18, 3.5), (55, 5.6)], fmt=LensFormat.APSC, name="Kit 18-55")

    converted = to_equivalent(lens)

    assert [k.focal_length for k in converted.knots] == [27.0, 83.0]
    assert converted.knots[0].aperture == pytest.approx(5.25)
    assert converted.knots[1].aperture == pytest.approx(8.4)
    assert converted.id == lens.id
    assert converted.name == lens.name
    assert converted.format is LensFormat.APSC
    # Source lens is untouched
    assert lens.knots[1].focal_length == 55.0


def test_m43_lens_doubles(make_lens) -> None:
    lens = make_lens("m43", [(12, 2.8), (35, 2.8)], fmt=LensFormat.M43)

    converted = to_equivalent(lens)

    assert [(k.focal_length, k.aperture) for k in converted.knots] == [(24.0, 5.6), (70.0, 5.6)]


def test_convert_all_preserves_order(make_lens, standard_zoom) -> None:
    apsc = make_lens("apsc", [(16, 2.8)], fmt=LensFormat.APSC)

    converted = to_equivalent_all([apsc, standard_zoom])

    assert [lens.id for lens in converted] == ["apsc", "std"]
    assert converted[0].knots[0].focal_length == 24.0
    assert converted[1] is standard_zoom


def test_lens_without_knots_converts_to_empty(make_lens) -> None:
    lens = make_lens("empty", [], fmt=LensFormat.APSC)

    assert to_equivalent(lens).knots == ()


def test_aperture_round_trips_through_crop_factor(make_lens) -> None:
    lens = make_lens("x", [(16, 3.5), (80, 6.3)], fmt=LensFormat.APSC)

    converted = to_equivalent(lens)

    for original, knot in zip(lens.knots, converted.knots):
        assert knot.aperture / 1.5 == pytest.approx(original.aperture)
        assert abs(knot.focal_length / 1.5 - original.focal_length) <= 0.5 / 1.5
