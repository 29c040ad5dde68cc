from __future__ import annotations

from typing import Callable, Sequence, Tuple

import pytest

from models.core import DataSource, Knot, LensFormat, LensSpec


def build_lens(
    lens_id: str,
    knots: Sequence[Tuple[float, float]],
    fmt: LensFormat = LensFormat.FULL_FRAME,
    source: DataSource = DataSource.OFFICIAL,
    name: str | None = None,
) -> LensSpec:
    return LensSpec(
        id=lens_id,
        name=name or lens_id,
        format=fmt,
        data_source=source,
        knots=tuple(Knot(float(f), float(a)) for f, a in knots),
    )


@pytest.fixture
def make_lens() -> Callable[..., LensSpec]:
    return build_lens


@pytest.fixture
def standard_zoom() -> LensSpec:
    return build_lens("std", [(24, 2.8), (70, 4.0)], name="Standard 24-70")


@pytest.fixture
def tele_zoom() -> LensSpec:
    return build_lens(
        "tele",
        [(28, 3.5), (50, 4.5), (100, 5.6)],
        source=DataSource.AI_RESEARCH,
        name="Tele 28-100",
    )
