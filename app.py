"""
Lens Aperture Comparator - Zoom Lens Maximum Aperture Explorer

A Streamlit application for comparing how the maximum aperture of zoom lenses
changes across their focal range. Photographers can:

- Search and filter a catalog of lenses by name, format and data source
- Plot maximum aperture against focal length on stop-aligned axes
- Convert APS-C lenses to full-frame equivalent focal length and aperture
- Compare focal span and aperture range as 3D proxies
- Export the merged chart data (TSV) or a static chart image (PNG)

Usage:
    Run with: streamlit run app.py
    Server port and base path are set in .streamlit/config.toml
"""

import streamlit as st

# Configure Streamlit
st.set_page_config(page_title="Lens Aperture Comparator", layout="wide")

# Import main application components
from services.app_operations import build_comparison, initialize_application_data
from services.selection import selected_lenses
from views.main_content import render_main_content
from views.sidebar import render_sidebar
from views.state import initialize_session_state, handle_app_actions


def main():
    """
    Main application entry point.

    Each rerun:
    1. Loads the lens catalog (cached until the TSV changes)
    2. Sets up the session state and lens colours
    3. Renders the sidebar and collects the visible lenses
    4. Computes the comparison for the selected lenses
    5. Renders the chart or 3D scene and handles user actions
    """
    # 1. Initialize data and state
    data = initialize_application_data()
    if not data:
        return
    app_state = initialize_session_state(data['catalog'].ids())

    # 2. Render sidebar
    sidebar_actions = render_sidebar(app_state, data)

    # 3. Compute the comparison for the current selection
    lenses = selected_lenses(
        sidebar_actions.pop('visible'),
        app_state.selected_lens_ids,
        equivalent=app_state.equivalent_mode,
    )
    comparison = build_comparison(lenses)

    # 4. Render main content
    content_actions = render_main_content(app_state, data, comparison)

    # 5. Handle actions
    handle_app_actions({**sidebar_actions, **content_actions}, app_state, data, comparison)


if __name__ == "__main__":
    main()
