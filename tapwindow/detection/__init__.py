"""
Detection Module - Per-tick signal processing and tap decision.

This module provides:
- Velocity and acceleration estimation from fingertip positions
- Feature layout and normalization
- Debounced tap event decision
"""

from .motion import DerivativeEstimator, MotionEstimate, MotionState
from .features import FeatureLayout
from .normalization import FeatureNormalizer, NormalizationParameters, normalize
from .event_decider import DebounceState, DetectionEvent, EventDecider, decide

__all__ = [
    'DerivativeEstimator',
    'MotionEstimate',
    'MotionState',
    'FeatureLayout',
    'FeatureNormalizer',
    'NormalizationParameters',
    'normalize',
    'DebounceState',
    'DetectionEvent',
    'EventDecider',
    'decide',
]
