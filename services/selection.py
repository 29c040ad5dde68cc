"""
Lens selection and colour assignment.

Pure helpers behind the sidebar: filtering the catalog by search text and data
source, toggling membership of the selection, and assigning a display colour
to every lens. Nothing here holds state; the caller keeps the selection and
colour map (in the session state) and passes them back in.
"""
import colorsys
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence

import numpy as np

from models.constants import COLOR_SATURATION, COLOR_LIGHTNESS
from models.core import LensSpec
from services.equivalence import to_equivalent_all


def filter_lenses(
    lenses: Iterable[LensSpec],
    query: str = "",
    data_source: str = "all"
) -> List[LensSpec]:
    """
    Filter lenses by search text and data source.

    Args:
        lenses: Lenses in catalog order
        query: Case-insensitive text matched against lens name or format
        data_source: "all", "official" or "ai-research"

    Returns:
        Matching lenses in catalog order
    """
    needle = (query or "").strip().lower()
    result = []
    for lens in lenses:
        matches_search = (
            not needle
            or needle in lens.name.lower()
            or needle in lens.format.value.lower()
        )
        matches_source = data_source == "all" or lens.data_source.value == data_source
        if matches_search and matches_source:
            result.append(lens)
    return result


def toggle_lens_selection(selected: AbstractSet[str], lens_id: str) -> frozenset:
    """Flip membership of lens_id and return the new selection."""
    if lens_id in selected:
        return frozenset(selected - {lens_id})
    return frozenset(selected | {lens_id})


def toggle_all(selected: AbstractSet[str], visible_ids: Sequence[str]) -> frozenset:
    """
    Select every visible lens, or clear the selection if all are already selected.

    Clears whenever every visible lens is selected, hidden selections included.
    """
    if all_visible_selected(selected, visible_ids):
        return frozenset()
    return frozenset(visible_ids)


def all_visible_selected(selected: AbstractSet[str], visible_ids: Sequence[str]) -> bool:
    return bool(visible_ids) and set(visible_ids) <= set(selected)


def selected_lenses(
    visible: Sequence[LensSpec],
    selected: AbstractSet[str],
    equivalent: bool = False
) -> List[LensSpec]:
    """
    Return the selected lenses among the visible ones, in catalog order.

    Args:
        visible: Lenses that pass the current filters
        selected: Selected lens ids
        equivalent: Convert to full-frame equivalent when True
    """
    lenses = [lens for lens in visible if lens.id in selected]
    return to_equivalent_all(lenses) if equivalent else lenses


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (hue in degrees, s and l in 0-1) to a #RRGGBB string."""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness, saturation)
    return '#{:02x}{:02x}{:02x}'.format(int(round(r * 255)), int(round(g * 255)), int(round(b * 255)))


def generate_lens_colors(
    lens_ids: Iterable[str],
    rng: Optional[np.random.Generator] = None
) -> Dict[str, str]:
    """
    Assign a random hue to every lens.

    Args:
        lens_ids: Lens ids to colour
        rng: Random generator; pass a seeded one for reproducible colours

    Returns:
        Mapping of lens id to hex colour
    """
    rng = rng if rng is not None else np.random.default_rng()
    return {
        lens_id: hsl_to_hex(float(rng.integers(0, 360)), COLOR_SATURATION, COLOR_LIGHTNESS)
        for lens_id in lens_ids
    }
