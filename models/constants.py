# models/constants.py
"""
Application constants and configuration values for the Lens Aperture Comparator.

This module centralizes all constant values used throughout the application:
- Photographic catalogs (standard f-stops, standard focal lengths)
- Sensor format crop factors
- 3D proxy target ranges and layout spacing
- User interface text and styling constants
- Chart rendering configuration
- File paths for the lens catalog

Constants defined here ensure consistency across all modules and provide
a single location for configuration changes.
"""

# Standard library imports
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# =============================================================================
# LENS CATALOG CONFIGURATION
# =============================================================================

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
LENS_DATA_FILE = DATA_DIR / "lenses.tsv"

# Column names of the long-format catalog (one row per knot)
LENS_COLUMNS = {
    'id': "Lens ID",
    'name': "Name",
    'format': "Format",
    'data_source': "Data Source",
    'source_url': "Source URL",
    'focal_length': "Focal Length",
    'aperture': "Aperture",
}

# Crop factor per sensor format (full-frame equivalence)
CROP_FACTORS = {
    'full-frame': 1.0,
    'apsc': 1.5,
    'm43': 2.0,
}

FORMAT_LABELS = {
    'full-frame': "Full Frame",
    'apsc': "APS-C",
    'm43': "M4/3",
}

DATA_SOURCE_LABELS = {
    'official': "Official spec",
    'ai-research': "AI research (verify before use)",
}

# Data source filter options shown in the sidebar
DATA_SOURCE_FILTERS = {
    'all': "All sources",
    'official': "Official specs only",
    'ai-research': "AI research only",
}

# =============================================================================
# AXIS CATALOGS
# =============================================================================

# Full-stop f-numbers used as aperture ticks. 6.3 is not a geometric stop but
# is the common long end of consumer zooms.
STANDARD_APERTURE_VALUES = (1.4, 2.0, 2.8, 4.0, 5.6, 6.3, 8.0, 11.0)

# Standard focal lengths (mm) used as focal-length ticks
STANDARD_FOCAL_LENGTHS = (
    12, 14, 16, 18, 20, 24, 28, 35, 40, 50, 70, 85, 100, 135, 200, 300, 400, 500, 600,
)

HALF_STOP_RATIO = math.sqrt(math.sqrt(2))  # ≈ 1.1892
MIN_STOP_SPAN = 3                          # below this the aperture axis shows a fixed window
NARROW_WINDOW_BEFORE = 1                   # entries kept below the centre of a narrow window
NARROW_WINDOW_AFTER = 2                    # entries kept above the centre of a narrow window

FOCAL_TOLERANCE_LOW = 0.9                  # tick band: [min * 0.9, max * 1.1]
FOCAL_TOLERANCE_HIGH = 1.1
FOCAL_FALLBACK_PAD_LOW = 0.98              # domain padding when no catalog tick fits
FOCAL_FALLBACK_PAD_HIGH = 1.02

# =============================================================================
# 3D SCENE CONFIGURATION
# =============================================================================

TARGET_HEIGHT_RANGE = (1.2, 4.5)
TARGET_RADIUS_RANGE = (0.5, 1.4)
GRID_SPACING = 3.5
DEGENERATE_RANGE_EPSILON = 1e-6
FRUSTUM_SEGMENTS = 48

SCENE_CONFIG = {
    'background': "#020617",
    'camera_eye': {'x': 1.6, 'y': 1.6, 'z': 1.1},
    'height': 560,
}

# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

DEFAULT_VIEW_MODE = "3d"
VIEW_MODES = {
    '2d': "2D chart",
    '3d': "3D scene",
}

# Lens colours are random hues at fixed saturation and lightness
COLOR_SATURATION = 0.85
COLOR_LIGHTNESS = 0.60

# =============================================================================
# USER INTERFACE TEXT CONSTANTS
# =============================================================================

UI_BUTTONS = {
    'shuffle_colors': "🎨 Shuffle Colours",
    'select_all': "✅ Select All",
    'clear_all': "✖ Clear All",
    'reset_scene': "🔄 Reset 3D View",
    'export_tsv': "⬇️ Download Chart Data (TSV)",
    'export_png': "📄 Download Chart (PNG)",
}

UI_SECTIONS = {
    'title': "Lens Aperture Comparator",
    'subtitle': "Compare the maximum aperture of zoom lenses across their focal range",
    'select_lenses': "Select Lenses",
    'statistics': "Catalog",
    'export': "Export",
    'scene_help': "3D view tips",
}

UI_LABELS = {
    'search': "Search lenses or formats",
    'data_source': "Data source",
    'equivalent': "35mm equivalent focal length",
    'view_mode': "View",
    'selected_count': "{count} lens(es) selected",
    'x_axis': "Focal length (mm)",
    'y_axis': "Maximum aperture",
    'attribution': "Derived from the Lens Aperture Comparator by y-g-jiang",
    'legend_official': "Solid line: official spec",
    'legend_ai': "Dashed line: AI research (verify first)",
}

UI_HELP_TEXT = {
    'equivalent': "Convert APS-C and M4/3 lenses to full-frame equivalent focal length and aperture",
    'scene_tips': (
        "- Drag to rotate, scroll to zoom, right-drag to pan.\n"
        "- Use the toggles under the scene to change which lenses are highlighted.\n"
        "- Select more lenses in the sidebar to compare them side by side."
    ),
}

UI_INFO_MESSAGES = {
    'no_selection': "No lens selected. Tick at least one lens in the sidebar to see the chart.",
    'no_selection_3d': "Select lenses in the sidebar to see their focal and aperture ranges in 3D.",
    'no_matches': "No lens matches the current search.",
}

UI_ERROR_MESSAGES = {
    'no_catalog': "❌ No lens data found. Check data/lenses.tsv.",
}

# =============================================================================
# CHART RENDERING AND VISUALIZATION CONSTANTS
# =============================================================================

CHART_HEIGHTS = {
    'default': 500,
    'report': (10, 6),  # matplotlib figure size in inches
}

CHART_LINE_STYLES = {
    'width': 2,
    'marker_size': 8,
    'ai_dash': "dash",
    'mpl_ai_dash': (5, 5),
}

CHART_COLORS = {
    'grid': "rgba(71,85,105,0.6)",
    'axis': "#cbd5e1",
    'background': "#1e293b",
    'paper': "#0f172a",
}

REPORT_CONFIG = {
    'dpi': 150,
    'title_size': 14,
    'legend_size': 8,
}

MPL_STYLE_CONFIG = {
    "font.family": "DejaVu Sans",
    "axes.facecolor": "white",
    "axes.edgecolor": "#CCCCCC",
    "axes.grid": True,
    "grid.color": "#EEEEEE",
    "grid.linestyle": "-",
    "axes.spines.top": False,
    "axes.spines.right": False,
    "xtick.color": "#444444",
    "ytick.color": "#444444",
    "text.color": "#333333",
    "axes.labelcolor": "#333333",
    "axes.titleweight": "bold",
    "axes.titlesize": 14,
    "axes.labelsize": 12,
    "legend.frameon": False,
    "legend.fontsize": 8,
}


@dataclass
class ChartConfig:
    """Configuration for chart styling and layout parameters."""
    title: str = ""
    x_title: str = UI_LABELS['x_axis']
    y_title: str = UI_LABELS['y_axis']
    height: Optional[int] = CHART_HEIGHTS['default']
    template: str = "plotly_dark"
    hovermode: str = "x unified"
    show_legend: bool = True
