"""
Sidebar UI components for the Lens Aperture Comparator.

This module provides UI components for the sidebar: search and data-source
filters, the equivalence toggle, the lens checklist, catalog statistics,
colour and selection buttons, and export downloads.
"""
# Third-party imports
import streamlit as st
from typing import Any, Dict, List, Sequence

# Local imports
from models.constants import (
    DATA_SOURCE_FILTERS, UI_BUTTONS, UI_SECTIONS, UI_LABELS, UI_HELP_TEXT, UI_INFO_MESSAGES
)
from models.core import DataSource, LensCatalog, LensSpec
from services.selection import all_visible_selected, filter_lenses
from views.ui_utils import badge, color_swatch


def lens_filters() -> None:
    """Search box and data-source selector (widget-controlled state)."""
    st.sidebar.text_input(
        UI_LABELS['search'],
        key="search_query",
        placeholder="e.g. 24-70, apsc",
    )
    st.sidebar.selectbox(
        UI_LABELS['data_source'],
        options=list(DATA_SOURCE_FILTERS.keys()),
        format_func=lambda key: DATA_SOURCE_FILTERS[key],
        key="data_source_filter",
    )
    st.sidebar.checkbox(
        UI_LABELS['equivalent'],
        key="equivalent_mode",
        help=UI_HELP_TEXT['equivalent'],
    )


def lens_checklist(visible: Sequence[LensSpec], app_state) -> None:
    """
    One checkbox per visible lens, with colour dot, format and AI badge.

    Checkbox keys mirror the selection held in app_state; changes go through
    an on_change callback so the selection is updated before the next render.
    """
    if not visible:
        st.sidebar.info(UI_INFO_MESSAGES['no_matches'])
        return

    selected = app_state.selected_lens_ids
    colors = app_state.lens_colors

    for lens in visible:
        key = f"select_{lens.id}"
        st.session_state[key] = lens.id in selected

        dot_col, box_col = st.sidebar.columns([1, 12])
        dot_col.markdown(color_swatch(colors.get(lens.id, "")), unsafe_allow_html=True)
        box_col.checkbox(
            lens.name,
            key=key,
            on_change=app_state.toggle_lens,
            args=(lens.id,),
        )
        label = lens.format.label
        if lens.is_ai_research:
            label += badge("AI research")
        box_col.markdown(
            f"<div style='font-size:0.75em;opacity:0.7;margin-top:-12px;'>{label}</div>",
            unsafe_allow_html=True,
        )


def catalog_statistics(catalog: LensCatalog, visible: Sequence[LensSpec]) -> None:
    """Counts of lenses per data source and in the current selection."""
    counts = catalog.count_by_source()
    with st.sidebar.expander(UI_SECTIONS['statistics'], expanded=False):
        col1, col2 = st.columns(2)
        col1.metric("Official", counts.get(DataSource.OFFICIAL, 0))
        col2.metric("AI research", counts.get(DataSource.AI_RESEARCH, 0))
        st.caption(f"{catalog.knot_count} published aperture points")
        st.caption(f"{len(visible)} of {len(catalog)} lenses shown")


def render_sidebar(app_state, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Render the complete sidebar with all controls.

    Args:
        app_state: Application state manager
        data: Application data dictionary

    Returns:
        Dictionary of user actions from sidebar interactions; always contains
        'visible' with the lenses that pass the current filters
    """
    catalog: LensCatalog = data['catalog']

    st.sidebar.header(UI_SECTIONS['select_lenses'])

    # ========== 1. FILTERS ==========
    lens_filters()
    visible: List[LensSpec] = filter_lenses(
        catalog.lenses, app_state.search_query, app_state.data_source_filter
    )
    visible_ids = [lens.id for lens in visible]

    actions: Dict[str, Any] = {'visible': visible}

    # ========== 2. SELECTION BUTTONS ==========
    col1, col2 = st.sidebar.columns(2)
    toggle_label = (
        UI_BUTTONS['clear_all']
        if all_visible_selected(app_state.selected_lens_ids, visible_ids)
        else UI_BUTTONS['select_all']
    )
    if col1.button(toggle_label, disabled=not visible_ids, use_container_width=True):
        actions['toggle_all'] = visible_ids
    if col2.button(UI_BUTTONS['shuffle_colors'], use_container_width=True):
        actions['shuffle_colors'] = True

    st.sidebar.caption(UI_LABELS['selected_count'].format(count=len(app_state.selected_lens_ids)))

    # ========== 3. LENS CHECKLIST ==========
    lens_checklist(visible, app_state)

    # ========== 4. STATISTICS ==========
    catalog_statistics(catalog, visible)

    # ========== 5. EXPORT ==========
    with st.sidebar.expander(UI_SECTIONS['export'], expanded=False):
        last_export = app_state.last_export
        if last_export and last_export.get('bytes'):
            st.download_button(
                label=f"Save {last_export['name']}",
                data=last_export['bytes'],
                file_name=last_export['name'],
                mime=last_export['mime'],
            )
        has_selection = bool(app_state.selected_lens_ids)
        if st.button(UI_BUTTONS['export_tsv'], disabled=not has_selection):
            actions['export_tsv'] = True
        if st.button(UI_BUTTONS['export_png'], disabled=not has_selection):
            actions['export_png'] = True

    return actions
