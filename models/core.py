"""
Core data models for the Lens Aperture Comparator.

This module defines all fundamental data structures used throughout the application:

Data Models:
- Knot: A single (focal length, aperture) point of a lens specification
- LensSpec: An immutable zoom lens with its piecewise-linear aperture curve
- LensCatalog: The loaded, read-only list of lenses plus its metadata frame
- ChartRow / ChartData: The merged, densified dataset behind the 2D chart
- AxisPlan: Domain and ticks of a chart axis
- LensMetrics / SpatialProxy: Bounded 3D dimensions and placement of a lens

Design Principles:
- Frozen dataclasses; derived data is recomputed, never mutated
- Leverages NumPy for numeric helpers
- Keeps data models free of business logic beyond simple accessors
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Any
import numpy as np
import pandas as pd

from models.constants import CROP_FACTORS, FORMAT_LABELS, DATA_SOURCE_LABELS


class LensFormat(str, Enum):
    """Sensor format a lens is designed for."""
    FULL_FRAME = "full-frame"
    APSC = "apsc"
    M43 = "m43"

    @property
    def crop_factor(self) -> float:
        return CROP_FACTORS[self.value]

    @property
    def label(self) -> str:
        return FORMAT_LABELS[self.value]


class DataSource(str, Enum):
    """Provenance of a lens specification."""
    OFFICIAL = "official"
    AI_RESEARCH = "ai-research"

    @property
    def label(self) -> str:
        return DATA_SOURCE_LABELS[self.value]


class KnotKind(Enum):
    """
    How a chart value for one lens at one grid point was obtained.

    EXACT:        the lens has a knot at this focal length
    INTERPOLATED: linear interpolation between the bracketing knots
    CLAMPED:      outside the lens's range, flat extension of the nearest end knot
    MISSING:      the lens has no knots at all, no value
    """
    EXACT = "exact"
    INTERPOLATED = "interpolated"
    CLAMPED = "clamped"
    MISSING = "missing"

    @property
    def is_original(self) -> bool:
        return self is KnotKind.EXACT


@dataclass(frozen=True)
class Knot:
    """An exact (focal length, aperture) measurement point."""
    focal_length: float
    aperture: float


@dataclass(frozen=True)
class LensSpec:
    """
    A zoom lens described by a sparse piecewise-linear aperture curve.

    Attributes:
        id: Unique lens identifier (used as the series key everywhere)
        name: Human-readable lens name
        format: Sensor format, determines the crop factor
        data_source: Whether the knots come from an official spec or AI research
        knots: Knots ordered by strictly increasing focal length
        source_url: Optional link to where the knots were taken from
    """
    id: str
    name: str
    format: LensFormat
    data_source: DataSource
    knots: Tuple[Knot, ...]
    source_url: Optional[str] = None

    def __str__(self) -> str:
        return self.name

    @property
    def focal_lengths(self) -> np.ndarray:
        return np.array([k.focal_length for k in self.knots], dtype=float)

    @property
    def apertures(self) -> np.ndarray:
        return np.array([k.aperture for k in self.knots], dtype=float)

    @property
    def min_focal(self) -> float:
        return float(self.focal_lengths.min()) if self.knots else float("nan")

    @property
    def max_focal(self) -> float:
        return float(self.focal_lengths.max()) if self.knots else float("nan")

    @property
    def min_aperture(self) -> float:
        return float(self.apertures.min()) if self.knots else float("nan")

    @property
    def max_aperture(self) -> float:
        return float(self.apertures.max()) if self.knots else float("nan")

    @property
    def is_ai_research(self) -> bool:
        return self.data_source is DataSource.AI_RESEARCH

    def knot_at(self, focal_length: float) -> Optional[Knot]:
        """Return the knot at exactly this focal length, if any."""
        for knot in self.knots:
            if knot.focal_length == focal_length:
                return knot
        return None


@dataclass(frozen=True)
class ChartRow:
    """
    One sample-grid point of the merged chart dataset.

    Attributes:
        focal_length: Grid focal length (mm)
        apertures: Lens id -> aperture at this focal length (None when missing)
        kinds: Lens id -> how the value was obtained
    """
    focal_length: float
    apertures: Dict[str, Optional[float]]
    kinds: Dict[str, KnotKind]

    def is_original(self, lens_id: str) -> bool:
        """True when the lens has an actual knot at this grid point."""
        kind = self.kinds.get(lens_id)
        return kind is not None and kind.is_original


@dataclass(frozen=True)
class ChartData:
    """Shared sample grid plus one row per grid point."""
    grid: Tuple[float, ...] = ()
    rows: Tuple[ChartRow, ...] = ()
    lens_ids: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def series(self, lens_id: str) -> Tuple[np.ndarray, np.ndarray]:
        """Return (focal lengths, apertures) for one lens; missing values become NaN."""
        x = np.array(self.grid, dtype=float)
        y = np.array(
            [np.nan if row.apertures.get(lens_id) is None else row.apertures[lens_id]
             for row in self.rows],
            dtype=float,
        )
        return x, y

    def original_points(self, lens_id: str) -> Tuple[np.ndarray, np.ndarray]:
        """Return only the grid points where the lens has an exact knot."""
        x, y = self.series(lens_id)
        mask = np.array([row.is_original(lens_id) for row in self.rows], dtype=bool)
        if not mask.size:
            return x, y
        return x[mask], y[mask]

    def to_frame(self) -> pd.DataFrame:
        """
        Convert to a DataFrame with one row per grid point.

        Columns: "Focal Length", then per lens the aperture column (named by
        lens id) and a "<id>_is_original" boolean column.
        """
        records: List[Dict[str, Any]] = []
        for row in self.rows:
            record: Dict[str, Any] = {"Focal Length": row.focal_length}
            for lens_id in self.lens_ids:
                record[lens_id] = row.apertures.get(lens_id)
                record[f"{lens_id}_is_original"] = row.is_original(lens_id)
            records.append(record)
        columns = ["Focal Length"]
        for lens_id in self.lens_ids:
            columns.extend([lens_id, f"{lens_id}_is_original"])
        return pd.DataFrame.from_records(records, columns=columns)


@dataclass(frozen=True)
class AxisPlan:
    """
    Domain and tick values of one chart axis.

    A domain of None is the "auto" sentinel: the renderer picks the range.
    The aperture axis domain is stored reversed, (larger f-number, smaller f-number).
    """
    domain: Optional[Tuple[float, float]]
    ticks: Tuple[float, ...]

    @property
    def is_auto(self) -> bool:
        return self.domain is None


@dataclass(frozen=True)
class LensMetrics:
    """Raw optical extents of a lens (NaN for a lens without knots)."""
    min_focal: float
    max_focal: float
    min_aperture: float
    max_aperture: float

    @property
    def focal_span(self) -> float:
        return self.max_focal - self.min_focal


@dataclass(frozen=True)
class SpatialProxy:
    """Bounded 3D dimensions and position of one lens in the scene."""
    lens_id: str
    height: float
    radius_top: float
    radius_bottom: float
    position: Tuple[float, float, float]
    metrics: Optional[LensMetrics] = None


@dataclass(frozen=True)
class LensCatalog:
    """
    Read-only catalog of lens specifications.

    Attributes:
        lenses: Lenses in file order
        df: Long-format DataFrame the catalog was built from (one row per knot)
    """
    lenses: Tuple[LensSpec, ...] = ()
    df: Any = field(default=None, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.lenses)

    def ids(self) -> List[str]:
        return [lens.id for lens in self.lenses]

    def get(self, lens_id: str) -> Optional[LensSpec]:
        for lens in self.lenses:
            if lens.id == lens_id:
                return lens
        return None

    @property
    def knot_count(self) -> int:
        """Number of knot rows in the source table."""
        return 0 if self.df is None else len(self.df)

    def count_by_source(self) -> Dict[DataSource, int]:
        counts = {source: 0 for source in DataSource}
        for lens in self.lenses:
            counts[lens.data_source] += 1
        return counts
