"""
High-level application operations for the Lens Aperture Comparator.

This module orchestrates application workflows by coordinating between the
data, numeric and visualization services.

Key Functions:

Data Initialization:
- initialize_application_data(): Loads the lens catalog (cached on file mtime)

Comparison:
- build_comparison(): Runs merge, both axis planners and spatial normalization
  for the current selection in one pass

Export:
- generate_tsv_for_download(): Merged chart data as a TSV download
- generate_png_for_download(): Static chart image as a PNG download
- sanitize_filename_component(): Ensures safe filename generation

Workflow Integration:
The numeric services are pure; this module is the only place that combines
their results for the views and reports failures through the UI error helpers.
"""
# Standard library imports
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union, TYPE_CHECKING

# Third-party imports
import pandas as pd
import streamlit as st

# Local imports
from models.constants import LENS_DATA_FILE, UI_ERROR_MESSAGES
from models.core import ChartData, LensCatalog, LensSpec
from services.axes import plan_aperture_axis, plan_focal_axis
from services.curves import merge_lens_curves
from services.data import create_empty_lens_catalog, load_lens_catalog
from services.spatial import normalize_lenses
from services.visualization import create_report_png
from views.ui_utils import handle_error, try_operation

# Type checking imports
if TYPE_CHECKING:
    from services.state_manager import StateManager

logger = logging.getLogger(__name__)


# ----- UTILITY FUNCTIONS -----

def sanitize_filename_component(name: str, lowercase=False, max_len=None) -> str:
    """
    Sanitize a string for safe use in filenames across operating systems.

    Args:
        name: The input string to sanitize
        lowercase: If True, convert to lowercase for consistency
        max_len: Maximum length limit for the output string

    Returns:
        Cleaned string safe for use in filenames

    Example:
        >>> sanitize_filename_component("Sony FE 24-70mm f/2.8", lowercase=True)
        'sony fe 24-70mm f-2.8'
    """
    clean = re.sub(r'[<>:"/\\|?*]', "-", name).strip()
    if lowercase:
        clean = clean.lower()
    if max_len:
        clean = clean[:max_len]
    return clean


def export_basename(lenses: Sequence[LensSpec], timestamp: Optional[str] = None) -> str:
    """Build a download filename stem from the selected lens names."""
    timestamp = timestamp or pd.Timestamp.now().strftime("%Y%m%d_%H%M%S")
    if len(lenses) == 1:
        label = sanitize_filename_component(lenses[0].name, max_len=60)
    else:
        label = f"{len(lenses)}_lenses"
    return f"LensApertures_{label}_{timestamp}".replace(" ", "_")


# ----- APPLICATION OPERATIONS -----

@st.cache_data(show_spinner=False)
def _cached_lens_catalog(path: str, mtime: float) -> LensCatalog:
    # mtime is part of the cache key so edits to the TSV invalidate the cache
    return load_lens_catalog(path)


def load_lens_catalog_cached(path: Union[str, Path] = LENS_DATA_FILE) -> LensCatalog:
    """Load the catalog through Streamlit's data cache, keyed on file mtime."""
    path = Path(path)
    return _cached_lens_catalog(str(path), path.stat().st_mtime)


def initialize_application_data(path: Union[str, Path] = LENS_DATA_FILE) -> Optional[Dict[str, Any]]:
    """
    Initialize and validate the application data.

    Returns:
        Dictionary with keys:
        - 'catalog': LensCatalog with every lens in file order
        - 'lens_map': Dict of lens id -> LensSpec

        Returns None (after showing an error) if no lenses could be loaded.
    """
    catalog = try_operation(
        lambda: load_lens_catalog_cached(path),
        "Failed to load lens catalog",
        default_value=create_empty_lens_catalog()
    )

    if not catalog.lenses:
        handle_error(UI_ERROR_MESSAGES['no_catalog'], stop_execution=True)
        return None

    return {
        'catalog': catalog,
        'lens_map': {lens.id: lens for lens in catalog.lenses},
    }


def build_comparison(lenses: Sequence[LensSpec]) -> Dict[str, Any]:
    """
    Compute everything both views need for the selected lenses.

    Args:
        lenses: Selected lenses (already converted when equivalence is on)

    Returns:
        Dictionary with keys 'lenses', 'chart_data', 'x_plan', 'y_plan', 'proxies'
    """
    lenses = list(lenses)
    chart_data = merge_lens_curves(lenses)
    return {
        'lenses': lenses,
        'chart_data': chart_data,
        'x_plan': plan_focal_axis(lenses),
        'y_plan': plan_aperture_axis(lenses),
        'proxies': normalize_lenses(lenses),
    }


# ----- EXPORTS -----

def create_tsv_data(chart_data: ChartData) -> Optional[str]:
    """
    Serialize the merged chart data to TSV.

    One row per grid focal length, one aperture column per lens plus a
    boolean column marking original knots. Missing values are empty cells.
    """
    if chart_data.is_empty:
        return None
    return chart_data.to_frame().to_csv(sep="\t", index=False, float_format="%.4g")


def generate_tsv_for_download(app_state: "StateManager", comparison: Dict[str, Any]) -> bool:
    """
    Generate TSV data and prepare it for download (does not save to disk).

    Returns:
        True if generation was successful, False otherwise
    """
    tsv_content = create_tsv_data(comparison['chart_data'])
    if not tsv_content:
        return False

    timestamp = pd.Timestamp.now().strftime("%Y%m%d_%H%M%S")
    app_state.last_export = {
        'bytes': tsv_content.encode('utf-8'),
        'name': f"{export_basename(comparison['lenses'], timestamp)}.tsv",
        'mime': "text/tab-separated-values",
        'timestamp': timestamp,
    }
    logger.info(f"Prepared TSV export {app_state.last_export['name']}")
    return True


def generate_png_for_download(
    app_state: "StateManager",
    comparison: Dict[str, Any],
    colors: Dict[str, str]
) -> bool:
    """
    Render the chart with Matplotlib and prepare it for download.

    Returns:
        True if generation was successful, False otherwise
    """
    png_bytes = try_operation(
        lambda: create_report_png(
            comparison['chart_data'], comparison['lenses'], colors,
            comparison['x_plan'], comparison['y_plan']
        ),
        "Failed to render chart image",
        default_value=b""
    )
    if not png_bytes:
        return False

    timestamp = pd.Timestamp.now().strftime("%Y%m%d_%H%M%S")
    app_state.last_export = {
        'bytes': png_bytes,
        'name': f"{export_basename(comparison['lenses'], timestamp)}.png",
        'mime': "image/png",
        'timestamp': timestamp,
    }
    logger.info(f"Prepared PNG export {app_state.last_export['name']}")
    return True
