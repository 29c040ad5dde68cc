"""
UI utilities and components for the Lens Aperture Comparator.

This module provides shared UI functionality including:
- Error handling and messaging utilities
- Safe operation execution
- Color utilities and swatches for the lens list
- Small badges for the lens list
"""
# Standard library imports
import logging
import re
from typing import Callable, Optional, TypeVar

# Third-party imports
import streamlit as st

# Configure logging for error tracking
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

T = TypeVar('T')

# ============================================================================
# ERROR HANDLING AND MESSAGING
# ============================================================================

def show_error_message(message: str, stop_execution: bool = False) -> None:
    """Display an error message with consistent styling."""
    logger.error(f"Error displayed to user: {message}")
    st.error(message)
    if stop_execution:
        st.stop()


def show_warning_message(message: str) -> None:
    """Display a warning message with consistent styling."""
    st.warning(message)


def show_info_message(message: str) -> None:
    """Display an info message with consistent styling."""
    st.info(message)


def handle_error(message: str, severity: str = "error", stop_execution: bool = False) -> None:
    """Display an error message with consistent styling based on severity."""
    if severity == "error":
        show_error_message(message, stop_execution)
    elif severity == "warning":
        logger.warning(f"Warning displayed to user: {message}")
        show_warning_message(message)
    else:
        logger.info(f"Info displayed to user: {message}")
        show_info_message(message)


def try_operation(
    operation: Callable[[], T],
    error_message: str,
    default_value: Optional[T] = None,
    severity: str = "error",
    stop_on_error: bool = False
) -> T:
    """Try to execute an operation and handle errors gracefully."""
    try:
        return operation()
    except Exception as e:
        logger.exception(f"Operation failed: {error_message}")
        handle_error(f"{error_message}: {str(e)}", severity, stop_on_error)
        return default_value


# ============================================================================
# COLOR UTILITIES
# ============================================================================

def is_valid_hex_color(hex_code: str) -> bool:
    """
    Check if a string is a valid hex color code.

    Args:
        hex_code: String to check

    Returns:
        True if the string is a valid hex color code
    """
    return isinstance(hex_code, str) and bool(re.fullmatch(r"#([0-9a-fA-F]{6})", hex_code))


def color_swatch(hex_color: str, size: int = 12) -> str:
    """
    Generate HTML for a round lens colour dot.

    Args:
        hex_color: Hex color code (falls back to grey when invalid)
        size: Diameter in pixels

    Returns:
        HTML string for the swatch
    """
    if not is_valid_hex_color(hex_color):
        hex_color = "#94a3b8"
    return (
        f"<span style='display:inline-block;width:{size}px;height:{size}px;"
        f"background-color:{hex_color};border-radius:50%;"
        f"margin-right:6px;vertical-align:middle;'></span>"
    )


def badge(text: str, color: str = "#7c3aed") -> str:
    """Generate HTML for a small pill badge (used for AI research data)."""
    return (
        f"<span style='background-color:{color};color:#fff;font-size:0.7em;"
        f"padding:1px 6px;border-radius:8px;margin-left:4px;'>{text}</span>"
    )
