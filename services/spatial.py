"""
Spatial normalization for the 3D lens scene.

Each selected lens becomes a truncated cone whose dimensions encode its
optical range, normalized across the current selection so lenses with very
different absolute specs remain comparable:

- height:        focal span (max - min focal length)
- bottom radius: widest aperture (smallest f-number), inverted so a faster
                 lens is wider
- top radius:    aperture at the slowest setting (largest f-number), inverted

Lenses are laid out on a near-square grid centred at the origin. The scene
renderer uses y as the vertical axis; each proxy's base sits at y = 0.
"""
import math
from typing import List, Sequence, Tuple

import numpy as np

from models.constants import (
    TARGET_HEIGHT_RANGE, TARGET_RADIUS_RANGE, GRID_SPACING, DEGENERATE_RANGE_EPSILON
)
from models.core import LensMetrics, LensSpec, SpatialProxy


def map_range(
    value: float,
    source: Tuple[float, float],
    target: Tuple[float, float],
    invert: bool = False,
    clamp: bool = False
) -> float:
    """
    Linearly map value from the source range onto the target range.

    Args:
        value: Value to map
        source: (a, b) source bounds
        target: (c, d) target bounds
        invert: Map a onto d and b onto c instead
        clamp: Clamp the result into [c, d]

    Returns:
        Mapped value; the target midpoint when the source range is degenerate,
        and c when value is NaN
    """
    out_min, out_max = target
    if math.isnan(value):
        return out_min

    in_min = source[0] if math.isfinite(source[0]) else 0.0
    in_max = source[1] if math.isfinite(source[1]) else 1.0
    denominator = in_max - in_min
    if abs(denominator) < DEGENERATE_RANGE_EPSILON:
        return (out_min + out_max) / 2

    t = (value - in_min) / denominator
    if invert:
        t = 1 - t
    scaled = out_min + t * (out_max - out_min)
    if clamp:
        scaled = min(max(scaled, out_min), out_max)
    return scaled


def compute_lens_metrics(lens: LensSpec) -> LensMetrics:
    """Collect the raw focal and aperture extents of a lens."""
    return LensMetrics(
        min_focal=lens.min_focal,
        max_focal=lens.max_focal,
        min_aperture=lens.min_aperture,
        max_aperture=lens.max_aperture,
    )


def _bounds(values: Sequence[float]) -> Tuple[float, float]:
    arr = np.asarray(values, dtype=float)
    if arr.size == 0 or np.all(np.isnan(arr)):
        return float("nan"), float("nan")
    return float(np.nanmin(arr)), float(np.nanmax(arr))


def grid_position(
    index: int,
    count: int,
    height: float,
    spacing: float = GRID_SPACING
) -> Tuple[float, float, float]:
    """
    Place the index-th of count proxies on a near-square grid.

    Returns:
        (x, y, z) with the grid centred on the origin and y = height / 2
    """
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    row, col = divmod(index, cols)
    x = (col - (min(cols, count) - 1) * 0.5) * spacing
    z = (row - (rows - 1) * 0.5) * spacing
    return x, height / 2, z


def normalize_lenses(lenses: Sequence[LensSpec]) -> Tuple[SpatialProxy, ...]:
    """
    Compute bounded 3D proxies for the selected lenses.

    Args:
        lenses: Selected lenses in selection order

    Returns:
        One SpatialProxy per lens, empty for an empty selection
    """
    if not lenses:
        return ()

    metrics: List[LensMetrics] = [compute_lens_metrics(lens) for lens in lenses]

    span_bounds = _bounds([m.focal_span for m in metrics])
    aperture_bounds = _bounds(
        [m.min_aperture for m in metrics] + [m.max_aperture for m in metrics]
    )

    proxies = []
    for index, (lens, m) in enumerate(zip(lenses, metrics)):
        height = map_range(m.focal_span, span_bounds, TARGET_HEIGHT_RANGE, clamp=True)
        radius_bottom = map_range(
            m.min_aperture, aperture_bounds, TARGET_RADIUS_RANGE, invert=True, clamp=True
        )
        radius_top = map_range(
            m.max_aperture, aperture_bounds, TARGET_RADIUS_RANGE, invert=True, clamp=True
        )
        proxies.append(SpatialProxy(
            lens_id=lens.id,
            height=height,
            radius_top=radius_top,
            radius_bottom=radius_bottom,
            position=grid_position(index, len(lenses), height),
            metrics=m,
        ))
    return tuple(proxies)
