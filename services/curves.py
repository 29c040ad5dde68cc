"""
Curve merging for the aperture chart.

Every selected lens is described by its own sparse knot sequence. The chart
needs a single x-grid shared by all series, so this module:

1. Builds the sample grid: the sorted union of every lens's knot focal lengths
2. Samples each lens on that grid: exact where the lens has a knot, linearly
   interpolated between its own bracketing knots, or flat-clamped to its
   nearest end knot outside its range (never extrapolated)
3. Tags every value with a KnotKind so the renderer can mark true knots
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from models.core import ChartData, ChartRow, KnotKind, LensSpec


def build_sample_grid(lenses: Iterable[LensSpec]) -> Tuple[float, ...]:
    """
    Return the sorted, duplicate-free union of all knot focal lengths.

    Args:
        lenses: Lenses to merge (already converted if equivalence mode is on)

    Returns:
        Ascending tuple of focal lengths
    """
    focal_lengths = set()
    for lens in lenses:
        focal_lengths.update(knot.focal_length for knot in lens.knots)
    return tuple(sorted(focal_lengths))


def sample_lens(
    lens: LensSpec,
    grid: Sequence[float]
) -> Tuple[List[Optional[float]], List[KnotKind]]:
    """
    Sample one lens on the shared grid.

    Args:
        lens: Lens whose knots are strictly increasing by focal length
        grid: Sample grid

    Returns:
        Tuple of (aperture per grid point, KnotKind per grid point)
    """
    if not lens.knots:
        return [None] * len(grid), [KnotKind.MISSING] * len(grid)

    xp = lens.focal_lengths
    fp = lens.apertures
    exact = {knot.focal_length: knot.aperture for knot in lens.knots}

    # np.interp holds the end values outside [xp[0], xp[-1]], which is the clamp rule
    interpolated = np.interp(np.asarray(grid, dtype=float), xp, fp)

    apertures: List[Optional[float]] = []
    kinds: List[KnotKind] = []
    for f, value in zip(grid, interpolated):
        if f in exact:
            apertures.append(float(exact[f]))
            kinds.append(KnotKind.EXACT)
        elif xp[0] < f < xp[-1]:
            apertures.append(float(value))
            kinds.append(KnotKind.INTERPOLATED)
        else:
            apertures.append(float(value))
            kinds.append(KnotKind.CLAMPED)
    return apertures, kinds


def merge_lens_curves(lenses: Sequence[LensSpec]) -> ChartData:
    """
    Merge the selected lenses into a shared chart dataset.

    Args:
        lenses: Selected lenses in display order

    Returns:
        ChartData with one row per grid point; empty for an empty selection
    """
    if not lenses:
        return ChartData()

    grid = build_sample_grid(lenses)
    sampled: Dict[str, Tuple[List[Optional[float]], List[KnotKind]]] = {
        lens.id: sample_lens(lens, grid) for lens in lenses
    }

    rows = tuple(
        ChartRow(
            focal_length=f,
            apertures={lens_id: values[i] for lens_id, (values, _) in sampled.items()},
            kinds={lens_id: kinds[i] for lens_id, (_, kinds) in sampled.items()},
        )
        for i, f in enumerate(grid)
    )
    return ChartData(grid=grid, rows=rows, lens_ids=tuple(sampled))
