"""
Model package for the Lens Aperture Comparator.

Exports all data models used in the application.
"""

from models.core import (
    # Lens Models
    Knot,
    LensSpec,
    LensFormat,
    DataSource,
    LensCatalog,

    # Chart Models
    KnotKind,
    ChartRow,
    ChartData,
    AxisPlan,

    # Scene Models
    LensMetrics,
    SpatialProxy
)
