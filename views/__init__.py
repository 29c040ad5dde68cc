"""
User Interface components and views for the Lens Aperture Comparator.

This package contains all Streamlit UI components organized by functionality:

UI Utilities (ui_utils):
- Error handling and user messaging
- Safe operation wrappers with error recovery
- Colour swatches and badges

Sidebar Components (sidebar):
- Search, data-source filter and equivalence toggle
- Lens checklist with select-all and colour shuffle
- Catalog statistics and export downloads

Main Content (main_content):
- 2D aperture chart
- 3D lens scene with per-lens toggles

State Management (state):
- Session state initialization
- User action handling and coordination

Only ui_utils is re-exported here; the services package imports it, and
importing the page modules at package level would be circular.
"""

from views.ui_utils import (
    # Error handling
    show_error_message,
    show_warning_message,
    show_info_message,
    handle_error,
    try_operation,

    # Color utilities
    is_valid_hex_color,
    color_swatch,
)
