"""
Axis planning for the aperture chart.

Both axes snap to fixed photographic catalogs instead of data-driven ranges:

- Aperture (y): logarithmic, reversed, ticks at full-stop f-numbers with an
  optional half-stop pad beyond the outermost ticks
- Focal length (x): linear, ticks at standard focal lengths within a 10%
  tolerance band around the data
"""
import logging
from typing import Iterable, Sequence

import numpy as np

from models.constants import (
    STANDARD_APERTURE_VALUES, STANDARD_FOCAL_LENGTHS, HALF_STOP_RATIO, MIN_STOP_SPAN,
    NARROW_WINDOW_BEFORE, NARROW_WINDOW_AFTER, FOCAL_TOLERANCE_LOW, FOCAL_TOLERANCE_HIGH,
    FOCAL_FALLBACK_PAD_LOW, FOCAL_FALLBACK_PAD_HIGH
)
from models.core import AxisPlan, LensSpec

logger = logging.getLogger(__name__)


# ============================================================================
# SHARED HELPERS
# ============================================================================

def snap_to_catalog(value: float, catalog: Sequence[float] = STANDARD_APERTURE_VALUES) -> int:
    """
    Return the index of the catalog entry closest to value.

    Ties keep the earlier (smaller) entry.
    """
    best = 0
    for i, entry in enumerate(catalog):
        if abs(entry - value) < abs(catalog[best] - value):
            best = i
    return best


def _knot_values(lenses: Iterable[LensSpec], attr: str) -> np.ndarray:
    values = [getattr(knot, attr) for lens in lenses for knot in lens.knots]
    return np.asarray(values, dtype=float)


# ============================================================================
# APERTURE AXIS
# ============================================================================

def plan_aperture_axis_from_values(
    values: Iterable[float],
    catalog: Sequence[float] = STANDARD_APERTURE_VALUES
) -> AxisPlan:
    """
    Plan the logarithmic aperture axis for a set of raw knot apertures.

    Args:
        values: Aperture values (f-numbers) of all selected lenses' knots
        catalog: Ordered full-stop catalog

    Returns:
        AxisPlan whose domain is reversed, (larger f-number, smaller f-number),
        so the most open aperture sits at the top of the chart
    """
    values = np.asarray(list(values), dtype=float)
    if values.size == 0:
        return AxisPlan(domain=None, ticks=tuple(catalog))

    min_index = snap_to_catalog(float(values.min()), catalog)
    max_index = snap_to_catalog(float(values.max()), catalog)
    span = max_index - min_index
    last = len(catalog) - 1

    if span < MIN_STOP_SPAN:
        # Narrow range: fixed window around the centre, truncated at the catalog ends
        center = (min_index + max_index) // 2
        start = max(0, center - NARROW_WINDOW_BEFORE)
        end = min(last, center + NARROW_WINDOW_AFTER)
        ticks = tuple(catalog[start:end + 1])
        domain_min, domain_max = ticks[0], ticks[-1]
    else:
        start = max(0, min_index)
        end = min(last, start + span)
        ticks = tuple(catalog[start:end + 1])
        # Half-stop padding from the window edges, none at a catalog boundary
        domain_min = ticks[0] / HALF_STOP_RATIO if start > 0 else ticks[0]
        domain_max = ticks[-1] * HALF_STOP_RATIO if end < last else ticks[-1]

    logger.debug(f"Aperture axis: span={span}, ticks={ticks}")
    return AxisPlan(domain=(domain_max, domain_min), ticks=ticks or tuple(catalog))


def plan_aperture_axis(lenses: Sequence[LensSpec]) -> AxisPlan:
    """Plan the aperture axis for the selected lenses' raw knots."""
    return plan_aperture_axis_from_values(_knot_values(lenses, "aperture"))


# ============================================================================
# FOCAL LENGTH AXIS
# ============================================================================

def plan_focal_axis_from_values(
    values: Iterable[float],
    catalog: Sequence[float] = STANDARD_FOCAL_LENGTHS
) -> AxisPlan:
    """
    Plan the focal length axis for a set of raw knot focal lengths.

    Args:
        values: Focal lengths (mm) of all selected lenses' knots
        catalog: Ordered standard focal lengths

    Returns:
        AxisPlan snapped to the catalog entries within the tolerance band, or a
        padded data range with the full catalog when no entry falls inside it
    """
    values = np.asarray(list(values), dtype=float)
    if values.size == 0:
        return AxisPlan(domain=None, ticks=tuple(catalog))

    min_focal = float(values.min())
    max_focal = float(values.max())
    low = min_focal * FOCAL_TOLERANCE_LOW
    high = max_focal * FOCAL_TOLERANCE_HIGH

    ticks = tuple(f for f in catalog if low <= f <= high)
    if ticks:
        return AxisPlan(domain=(min(ticks), max(ticks)), ticks=ticks)

    # Range falls between catalog entries; the renderer drops out-of-domain ticks
    domain = (max(0.0, min_focal * FOCAL_FALLBACK_PAD_LOW), max_focal * FOCAL_FALLBACK_PAD_HIGH)
    return AxisPlan(domain=domain, ticks=tuple(catalog))


def plan_focal_axis(lenses: Sequence[LensSpec]) -> AxisPlan:
    """Plan the focal length axis for the selected lenses' raw knots."""
    return plan_focal_axis_from_values(_knot_values(lenses, "focal_length"))


def ticks_in_domain(plan: AxisPlan) -> tuple:
    """Return the ticks that fall inside the plan's domain (all ticks when auto)."""
    if plan.is_auto:
        return plan.ticks
    low, high = sorted(plan.domain)
    return tuple(t for t in plan.ticks if low <= t <= high)
