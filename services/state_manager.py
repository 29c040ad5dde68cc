"""
Unified State Management for the Lens Aperture Comparator.

This module provides application state management using Streamlit's
session_state as the single source of truth, with a clean object-oriented
interface for state access and modification.

The numeric services hold no state at all; everything the user can change
(selection, equivalence mode, filters, colours, scene revision) lives here
and is passed into the services on every rerun.
"""
import streamlit as st
from typing import Any, Dict, Iterable, Optional

import numpy as np

from models.constants import DEFAULT_VIEW_MODE
from services.selection import generate_lens_colors, toggle_lens_selection, toggle_all


class StateManager:
    """
    Unified state management with dynamic attribute access.

    State Organization:
        Selection: selected_lens_ids (frozenset of lens ids)
        Display config: lens_colors, scene_revision
        Filters (widget-controlled): search_query, data_source_filter
        Modes (widget-controlled): equivalent_mode, view_mode
        Export: last_export metadata for download buttons

    Widget Handling:
        Widget-controlled keys are read through this class but never set
        programmatically, to avoid conflicts with Streamlit's widget management.
    """

    # Widget-controlled keys (managed by Streamlit widgets, don't initialize manually)
    WIDGET_KEYS = {
        'search_query': "",
        'data_source_filter': "all",
        'equivalent_mode': False,
        'view_mode': DEFAULT_VIEW_MODE,
    }

    def __init__(self):
        self._ensure_initialized()

    def _ensure_initialized(self) -> None:
        """
        Initialize all required state keys in session_state with defaults.

        Idempotent; widget-controlled keys are excluded.
        """
        defaults = {
            'selected_lens_ids': frozenset(),
            'lens_colors': {},
            'scene_revision': 0,
            'last_export': {},
        }
        for key, default_value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = default_value

    # ========================================================================
    # DYNAMIC ATTRIBUTE ACCESS
    # ========================================================================

    def __getattr__(self, name: str) -> Any:
        """
        Get state attribute with appropriate default values.

        Example:
            state.selected_lens_ids  # frozenset() if not set
            state.equivalent_mode    # False if the toggle was never rendered
        """
        if name.startswith('_'):
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

        if name in self.WIDGET_KEYS:
            return st.session_state.get(name, self.WIDGET_KEYS[name])

        defaults = {
            'selected_lens_ids': frozenset(),
            'lens_colors': {},
            'scene_revision': 0,
            'last_export': {},
        }
        return st.session_state.get(name, defaults.get(name))

    def __setattr__(self, name: str, value: Any) -> None:
        """Set attribute in session state."""
        if name.startswith('_'):
            super().__setattr__(name, value)
        elif name in self.WIDGET_KEYS:
            # Managed by widgets
            pass
        else:
            st.session_state[name] = value

    # ========================================================================
    # SELECTION AND DISPLAY CONFIG
    # ========================================================================

    def toggle_lens(self, lens_id: str) -> None:
        """Flip selection membership of one lens (the 3D proxy click contract)."""
        self.selected_lens_ids = toggle_lens_selection(self.selected_lens_ids, lens_id)
        self.last_export = {}

    def toggle_all(self, visible_ids: Iterable[str]) -> None:
        """Select all visible lenses, or clear when they are all selected."""
        self.selected_lens_ids = toggle_all(self.selected_lens_ids, list(visible_ids))
        self.last_export = {}

    def ensure_colors(self, lens_ids: Iterable[str], rng: Optional[np.random.Generator] = None) -> Dict[str, str]:
        """Assign colours to lenses that do not have one yet."""
        colors = dict(self.lens_colors)
        missing = [lens_id for lens_id in lens_ids if lens_id not in colors]
        if missing:
            colors.update(generate_lens_colors(missing, rng))
            self.lens_colors = colors
        return colors

    def shuffle_colors(self, lens_ids: Iterable[str], rng: Optional[np.random.Generator] = None) -> None:
        """Replace every lens colour with a new random one."""
        self.lens_colors = generate_lens_colors(lens_ids, rng)
        self.last_export = {}

    def request_scene_reset(self) -> None:
        """Ask the 3D view to rebuild from scratch (discard retained camera state)."""
        self.scene_revision = self.scene_revision + 1

