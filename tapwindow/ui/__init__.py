"""
UI Module - Display, rendering, and user interface components.

This module provides:
- Camera setup and configuration
- Tap indicator and confidence bar overlay
- FPS and tracking status text
"""

from .display import (
    draw_confidence_bar,
    draw_tap_indicator,
    draw_ui_overlay,
    setup_camera
)

__all__ = [
    'draw_confidence_bar',
    'draw_tap_indicator',
    'draw_ui_overlay',
    'setup_camera',
]
