"""
Tracking Module - Fingertip tracking with MediaPipe.
"""

from .hand_tracker import HandTracker, select_fingertip

__all__ = [
    'HandTracker',
    'select_fingertip',
]
