"""
Application state management and user action handling.

This module provides centralized coordination between the UI and application state,
managing the flow of user interactions and ensuring consistent state updates.

Key Components:

State Initialization:
- initialize_session_state(): Sets up the StateManager for the session and
  makes sure every catalog lens has a colour

Action Processing:
- handle_app_actions(): Processes user-triggered actions from UI components

Supported Actions:
- toggle_all: Select every visible lens, or clear when all are selected
- shuffle_colors: Assign fresh random colours to every lens
- reset_scene: Rebuild the 3D view, discarding its camera state
- export_tsv / export_png: Prepare chart downloads

Per-lens toggles bypass this dispatcher: they are checkbox callbacks bound to
StateManager.toggle_lens so the selection changes before widgets re-render.
"""

# Standard library imports
from typing import Any, Dict, Iterable, Optional

# Third-party imports
import streamlit as st

# Local imports
from services.app_operations import generate_png_for_download, generate_tsv_for_download
from services.state_manager import StateManager
from views.ui_utils import handle_error, try_operation


def initialize_session_state(lens_ids: Optional[Iterable[str]] = None) -> StateManager:
    """
    Initialize and return the application state manager.

    Args:
        lens_ids: Catalog lens ids that need a display colour

    Returns:
        StateManager bound to the current session
    """
    state_manager = StateManager()
    if lens_ids is not None:
        state_manager.ensure_colors(lens_ids)
    return state_manager


def handle_app_actions(
    actions: Dict[str, Any],
    state_manager: StateManager,
    data: Dict[str, Any],
    comparison: Dict[str, Any]
) -> None:
    """
    Process and execute actions triggered by user interface interactions.

    Args:
        actions: Dictionary of action types and parameters from UI components
        state_manager: State manager for accessing and updating application state
        data: Loaded application data (catalog, lens_map)
        comparison: Result of build_comparison for the current selection
    """
    if not actions:
        return

    rerun = False

    if 'toggle_all' in actions:
        state_manager.toggle_all(actions['toggle_all'])
        rerun = True

    if actions.get('shuffle_colors'):
        state_manager.shuffle_colors(data['catalog'].ids())
        rerun = True

    if actions.get('reset_scene'):
        state_manager.request_scene_reset()
        rerun = True

    if actions.get('export_tsv'):
        success = try_operation(
            lambda: generate_tsv_for_download(state_manager, comparison),
            "TSV generation failed",
            default_value=False
        )
        if success:
            rerun = True
        else:
            handle_error("Failed to generate TSV. Make sure you have lenses selected.", severity="warning")

    if actions.get('export_png'):
        success = generate_png_for_download(state_manager, comparison, state_manager.lens_colors)
        if success:
            rerun = True
        else:
            handle_error("Failed to generate chart image. Make sure you have lenses selected.", severity="warning")

    if rerun:
        st.rerun()
