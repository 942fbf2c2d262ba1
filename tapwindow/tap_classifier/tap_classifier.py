"""
Window Tap Classifier for TapWindow.

This module implements a lightweight inference backend that scores a whole
feature window at once. It is a logistic regression over every value of the
(window_size, feature_count) window, so each frame and each feature gets its
own weight.

ARCHITECTURE:
- Input: float32 tensor of shape (1, window_size, feature_count), oldest frame first
- Output: array of shape (1, 1) holding the tap probability
- Weights and bias are stored as JSON for persistence across sessions

USAGE:
    from tapwindow.tap_classifier import WindowTapClassifier

    classifier = WindowTapClassifier.from_file('models/tap_window_model.json')

    # Score a window
    probability = classifier(window.as_tensor())[0, 0]

    # Save model
    classifier.save_model('tap_window_model.json')
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import numpy as np
import numpy.typing as npt

from tapwindow.errors import ConfigurationError

logger = logging.getLogger(__name__)


class WindowTapClassifier:
    """
    Logistic regression over a full feature window.

    Instances are callable and can be used directly as the inference backend
    of a `ClassifierAdapter`.
    """

    def __init__(self, window_size: int, feature_count: int,
                 weights: Optional[npt.ArrayLike] = None, bias: float = 0.0,
                 feature_names: Optional[Sequence[str]] = None):
        """
        Initialize the window classifier.

        Args:
            window_size (int): Number of frames in the window
            feature_count (int): Number of features per frame
            weights (array-like, optional): Weights of shape (window_size, feature_count).
                Defaults to zeros (untrained model).
            bias (float): Decision boundary bias
            feature_names (list, optional): Feature names for interpretability
        """
        if window_size <= 0 or feature_count <= 0:
            raise ConfigurationError(
                f"Invalid classifier shape ({window_size}, {feature_count})"
            )

        self.window_size = window_size
        self.feature_count = feature_count

        if weights is None:
            weights = np.zeros((window_size, feature_count), dtype=float)
        self.weights = np.array(weights, dtype=float)
        if self.weights.shape != (window_size, feature_count):
            raise ConfigurationError(
                f"Classifier weights have shape {self.weights.shape}, "
                f"expected {(window_size, feature_count)}"
            )

        self.bias = float(bias)

        if feature_names is None:
            feature_names = [f"feature_{i}" for i in range(feature_count)]
        if len(feature_names) != feature_count:
            raise ConfigurationError(
                f"Got {len(feature_names)} feature names for {feature_count} features"
            )
        self.feature_names: List[str] = list(feature_names)

        logger.info(f"Initialized WindowTapClassifier with window {window_size}x{feature_count}")

    @classmethod
    def from_file(cls, filepath: Union[str, Path]) -> "WindowTapClassifier":
        """
        Create a classifier from a saved model file.

        Args:
            filepath (str): Path to load model from
        """
        model_data = cls._read_model(filepath)
        weights = np.array(model_data['weights'], dtype=float)
        if weights.ndim != 2:
            raise ConfigurationError(f"Model weights in {filepath} must be a 2D array")

        classifier = cls(
            window_size=weights.shape[0],
            feature_count=weights.shape[1],
            weights=weights,
            bias=model_data.get('bias', 0.0),
            feature_names=model_data.get('feature_names'),
        )
        logger.info(f"Model loaded from {filepath}")
        return classifier

    def predict(self, window: npt.ArrayLike) -> float:
        """
        Predict tap probability for a single window.

        Args:
            window (array-like): Window values, any shape holding
                window_size * feature_count values in time-major order

        Returns:
            float: Tap probability (0-1)
        """
        window = np.asarray(window, dtype=float).reshape(self.window_size, self.feature_count)

        # Compute logistic regression: sigmoid(w . x + b)
        z = float(np.sum(self.weights * window) + self.bias)
        return float(1.0 / (1.0 + np.exp(-z)))

    def __call__(self, tensor: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
        """
        Inference entry point.

        Args:
            tensor (numpy.ndarray): Input of shape (1, window_size, feature_count)

        Returns:
            numpy.ndarray: Output of shape (1, 1) holding the tap probability
        """
        tensor = np.asarray(tensor)
        expected = (1, self.window_size, self.feature_count)
        if tensor.shape != expected:
            raise ValueError(f"Input tensor has shape {tensor.shape}, expected {expected}")

        return np.array([[self.predict(tensor[0])]], dtype=np.float32)

    def get_feature_importance(self) -> Dict[str, float]:
        """
        Get feature importance scores based on weight magnitudes,
        summed over all frames of the window.

        Returns:
            dict: Feature names mapped to importance scores, most important first
        """
        importances = np.abs(self.weights).sum(axis=0)
        total = np.sum(importances) + 1e-10
        normalized = importances / total

        feature_importance = {
            name: float(score)
            for name, score in zip(self.feature_names, normalized)
        }

        # Sort by importance
        return dict(sorted(
            feature_importance.items(),
            key=lambda x: x[1],
            reverse=True
        ))

    def save_model(self, filepath: Union[str, Path]) -> None:
        """
        Save model weights to JSON file.

        Args:
            filepath (str): Path to save model
        """
        model_data = {
            'weights': self.weights.tolist(),
            'bias': self.bias,
            'feature_names': self.feature_names,
            'window_size': self.window_size,
            'feature_count': self.feature_count,
        }

        try:
            with open(filepath, 'w') as f:
                json.dump(model_data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save model: {e}")
            raise
        logger.info(f"Model saved to {filepath}")

    def load_model(self, filepath: Union[str, Path]) -> None:
        """
        Load model weights from JSON file into this classifier.
        The saved weights must match the classifier window shape.

        Args:
            filepath (str): Path to load model from
        """
        model_data = self._read_model(filepath)

        weights = np.array(model_data['weights'], dtype=float)
        if weights.shape != self.weights.shape:
            raise ConfigurationError(
                f"Model in {filepath} has weights of shape {weights.shape}, "
                f"expected {self.weights.shape}"
            )

        self.weights = weights
        self.bias = float(model_data.get('bias', 0.0))
        if 'feature_names' in model_data:
            self.feature_names = list(model_data['feature_names'])

        logger.info(f"Model loaded from {filepath}")

    @staticmethod
    def _read_model(filepath: Union[str, Path]) -> dict:
        try:
            with open(filepath, 'r') as f:
                model_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load model: {e}")
            raise ConfigurationError(f"Cannot read model file {filepath}: {e}") from e

        if not isinstance(model_data, dict) or 'weights' not in model_data:
            raise ConfigurationError(f"Model file {filepath} has no weights")
        return model_data
