"""
Main content display components for the Lens Aperture Comparator.

This module consolidates the main content area: header, view-mode toggle,
the 2D aperture chart, the 3D lens scene with its per-lens toggles, and the
line style legend.
"""
import streamlit as st
from typing import Any, Dict, Mapping, Optional, Sequence

from models.constants import (
    DEFAULT_VIEW_MODE, UI_BUTTONS, UI_HELP_TEXT, UI_INFO_MESSAGES, UI_LABELS, UI_SECTIONS, VIEW_MODES
)
from models.core import LensSpec, SpatialProxy
from services.visualization import create_aperture_chart, create_lens_scene
from views.ui_utils import color_swatch, show_info_message

# ============================================================================
# CHART RENDERING UTILITIES
# ============================================================================

def render_chart(
    fig: Any,
    title: Optional[str] = None,
    description: Optional[str] = None,
    use_container_width: bool = True,
    height: Optional[int] = None,
    key: Optional[str] = None
) -> None:
    """Render a chart with optional title and description."""
    if title:
        st.subheader(title)

    # Apply height if specified
    if height and hasattr(fig, "update_layout"):
        fig.update_layout(height=height)

    # Display the chart
    st.plotly_chart(fig, use_container_width=use_container_width, key=key)

    if description:
        st.markdown(description)


# ============================================================================
# DATA DISPLAY COMPONENTS
# ============================================================================

def render_header() -> None:
    """Title, subtitle and attribution."""
    st.markdown(f"""
    <div style='display: flex; justify-content: space-between; align-items: baseline;'>
        <h3 style='margin: 0;'>{UI_SECTIONS['title']}</h3>
        <span style='font-size: 0.8em; opacity: 0.6;'>{UI_LABELS['attribution']}</span>
    </div>
    """, unsafe_allow_html=True)
    st.caption(UI_SECTIONS['subtitle'])


def line_style_legend() -> None:
    """Explain solid versus dashed lines."""
    st.caption(f"{UI_LABELS['legend_official']} · {UI_LABELS['legend_ai']}")


def aperture_chart_view(comparison: Dict[str, Any], colors: Mapping[str, str]) -> None:
    """Render the 2D chart, or a hint when nothing is selected."""
    if comparison['chart_data'].is_empty:
        show_info_message(UI_INFO_MESSAGES['no_selection'])
        return

    fig = create_aperture_chart(
        comparison['chart_data'],
        comparison['lenses'],
        colors,
        comparison['x_plan'],
        comparison['y_plan'],
    )
    render_chart(fig, key="aperture_chart")
    line_style_legend()


def scene_toggles(
    proxies: Sequence[SpatialProxy],
    lens_map: Mapping[str, LensSpec],
    colors: Mapping[str, str],
    app_state
) -> None:
    """
    One toggle per lens in the scene; unticking removes it from the selection.

    Streamlit cannot report clicks on Plotly 3D meshes, so these toggles stand
    in for clicking a proxy.
    """
    if not proxies:
        return

    cols = st.columns(min(len(proxies), 4))
    for index, proxy in enumerate(proxies):
        lens = lens_map[proxy.lens_id]
        key = f"scene_{lens.id}"
        st.session_state[key] = True
        with cols[index % len(cols)]:
            st.markdown(color_swatch(colors.get(lens.id, "")), unsafe_allow_html=True)
            st.checkbox(
                lens.name,
                key=key,
                on_change=app_state.toggle_lens,
                args=(lens.id,),
            )


def lens_scene_view(
    comparison: Dict[str, Any],
    lens_map: Mapping[str, LensSpec],
    colors: Mapping[str, str],
    app_state
) -> Dict[str, Any]:
    """
    Render the 3D scene, its toggles and tips.

    Returns:
        Dictionary of user actions (reset_scene)
    """
    actions: Dict[str, Any] = {}
    proxies = comparison['proxies']

    if not proxies:
        show_info_message(UI_INFO_MESSAGES['no_selection_3d'])
    else:
        # Proxies carry the converted lenses; look them up by id for names and metadata
        scene_lenses = {lens.id: lens for lens in comparison['lenses']}
        fig = create_lens_scene(proxies, scene_lenses, colors, revision=app_state.scene_revision)
        render_chart(fig, key=f"lens_scene_{app_state.scene_revision}")
        scene_toggles(proxies, lens_map, colors, app_state)

    col1, col2 = st.columns([1, 3])
    if col1.button(UI_BUTTONS['reset_scene'], disabled=not proxies):
        actions['reset_scene'] = True
    with col2.expander(UI_SECTIONS['scene_help'], expanded=False):
        st.markdown(UI_HELP_TEXT['scene_tips'])

    return actions


def render_main_content(app_state, data: Dict[str, Any], comparison: Dict[str, Any]) -> Dict[str, Any]:
    """
    Render the main content area of the application.

    Args:
        app_state: Application state manager
        data: Dictionary containing loaded application data
        comparison: Result of build_comparison for the current selection

    Returns:
        Dictionary of user actions from the main content area
    """
    render_header()

    st.radio(
        UI_LABELS['view_mode'],
        options=list(VIEW_MODES.keys()),
        index=list(VIEW_MODES.keys()).index(DEFAULT_VIEW_MODE),
        format_func=lambda key: VIEW_MODES[key],
        key="view_mode",
        horizontal=True,
        label_visibility="collapsed",
    )

    colors = app_state.lens_colors
    if app_state.view_mode == "2d":
        aperture_chart_view(comparison, colors)
        return {}
    return lens_scene_view(comparison, data['lens_map'], colors, app_state)
