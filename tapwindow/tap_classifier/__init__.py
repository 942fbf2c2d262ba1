"""
Tap Classifier Module - Window classification.

This module provides:
- The adapter that feeds the feature window to an inference backend
- A logistic regression window classifier usable as a backend
"""

from .adapter import ClassifierAdapter, InferenceBackend
from .tap_classifier import WindowTapClassifier

__all__ = [
    'ClassifierAdapter',
    'InferenceBackend',
    'WindowTapClassifier',
]
