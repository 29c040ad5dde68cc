"""
Full-frame equivalence conversion.

APS-C and Micro Four Thirds lenses are rescaled by their format's crop factor
so they can be compared against full-frame lenses:

- focal length * crop factor, rounded half up to the nearest millimetre
- aperture * crop factor, unrounded (an equivalent light-gathering proxy,
  not a physical re-measurement)
"""
import math
from dataclasses import replace
from typing import Iterable, List

from models.core import Knot, LensFormat, LensSpec


def crop_factor(fmt: LensFormat) -> float:
    """Return the crop factor of a sensor format."""
    return LensFormat(fmt).crop_factor


def round_millimetre(value: float) -> int:
    """Round half up, so 82.5 mm becomes 83 mm."""
    return int(math.floor(value + 0.5))


def to_equivalent(lens: LensSpec) -> LensSpec:
    """
    Convert a lens to its full-frame equivalent.

    Args:
        lens: Lens in its native format

    Returns:
        The same object for full-frame lenses, otherwise a new LensSpec with
        identical metadata and rescaled knots
    """
    factor = crop_factor(lens.format)
    if factor == 1:
        return lens

    knots = tuple(
        Knot(
            focal_length=float(round_millimetre(knot.focal_length * factor)),
            aperture=knot.aperture * factor,
        )
        for knot in lens.knots
    )
    return replace(lens, knots=knots)


def to_equivalent_all(lenses: Iterable[LensSpec]) -> List[LensSpec]:
    """Convert every lens, preserving order."""
    return [to_equivalent(lens) for lens in lenses]
