"""
TapWindow - Streaming tap gesture classification from fingertip tracking.

Turns a per-frame stream of 3D fingertip positions into a normalized sliding
feature window, classifies it, and emits a debounced tap event.

Main components:
- config: Centralized configuration and command line arguments
- detection: Derivative estimation, normalization, event decision
- utils: Fixed-size window ring buffer
- tap_classifier: Inference adapter and window classifier backend
- tracking: MediaPipe fingertip tracking
- ui: Display and rendering
"""

from .errors import ConfigurationError, InferenceFailure, TapWindowError
from .pipeline import TapPipeline, TrackingSample

__version__ = "1.0.0"

__all__ = [
    'ConfigurationError',
    'InferenceFailure',
    'TapWindowError',
    'TapPipeline',
    'TrackingSample',
]
