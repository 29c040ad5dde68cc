"""
Services package for the Lens Aperture Comparator.

This package provides all core business logic and processing services:

Core Services:
- equivalence: Full-frame equivalent focal length and aperture conversion
- curves: Merging per-lens aperture curves onto a shared focal length grid
- axes: Stop-aligned aperture axis and focal length axis planning
- spatial: Normalization of lenses into bounded 3D proxies
- selection: Catalog filtering, selection toggles and colour assignment
- data: Lens catalog loading with validation
- visualization: Plotly chart and scene creation, Matplotlib PNG export
- state_manager: Application state management using Streamlit session state
- app_operations: High-level application operations and exports

The numeric services (equivalence, curves, axes, spatial) are pure functions
over immutable models and have no Streamlit dependency.
"""
# Import numeric services
from services.equivalence import (
    crop_factor,
    round_millimetre,
    to_equivalent,
    to_equivalent_all
)

from services.curves import (
    build_sample_grid,
    sample_lens,
    merge_lens_curves
)

from services.axes import (
    snap_to_catalog,
    plan_aperture_axis,
    plan_aperture_axis_from_values,
    plan_focal_axis,
    plan_focal_axis_from_values,
    ticks_in_domain
)

from services.spatial import (
    map_range,
    compute_lens_metrics,
    grid_position,
    normalize_lenses
)

# Import selection services
from services.selection import (
    filter_lenses,
    toggle_lens_selection,
    toggle_all,
    all_visible_selected,
    selected_lenses,
    generate_lens_colors
)

# Import data services
from services.data import (
    load_lens_catalog,
    create_empty_lens_catalog
)

# Import visualization services
from services.visualization import (
    create_aperture_chart,
    create_lens_scene,
    frustum_mesh,
    create_report_png
)
