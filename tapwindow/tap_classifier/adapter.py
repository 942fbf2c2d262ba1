"""
Adapter between the feature window and the inference backend.

The backend is any callable taking a float32 tensor of shape
(1, window_size, feature_count) and returning a numeric buffer whose first
element is the tap probability. The adapter owns the shape contract and turns
every backend malfunction into an `InferenceFailure`.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable

import numpy as np
import numpy.typing as npt

from tapwindow.errors import InferenceFailure

logger = logging.getLogger(__name__)

InferenceBackend = Callable[[npt.NDArray[np.float32]], Any]
"Callable mapping the input tensor to the raw model output."


async def _join(awaitable: Awaitable[Any]) -> Any:
    return await awaitable


class ClassifierAdapter:
    """
    Runs the inference backend on a flattened feature window.

    Inference is blocking: when the backend hands back a future or an
    awaitable, it is resolved before `infer` returns, so two ticks never
    overlap.
    """

    def __init__(self, backend: InferenceBackend, window_size: int, feature_count: int) -> None:
        """
        Args:
            backend: Inference callable. If it has a `close()` method, it is
                called when the adapter is closed.
            window_size (int): Number of frames in the window.
            feature_count (int): Number of features per frame.
        """
        self.backend = backend
        self.window_size = window_size
        self.feature_count = feature_count
        self.closed = False

    @property
    def input_shape(self):
        return (1, self.window_size, self.feature_count)

    def infer(self, flat: npt.ArrayLike) -> float:
        """
        Run inference on a flattened window.

        Args:
            flat: Window values, oldest frame first, length window_size * feature_count.

        Returns:
            float: Tap probability, as returned by the backend (not clamped).

        Raises:
            InferenceFailure: On a shape mismatch, a backend error, or an
                empty or non-finite output.
        """
        if self.closed:
            raise InferenceFailure("Inference backend has been released")

        flat = np.asarray(flat, dtype=np.float32).reshape(-1)
        expected = self.window_size * self.feature_count
        if flat.size != expected:
            raise InferenceFailure(
                f"Input has {flat.size} values, expected {expected} for shape {self.input_shape}"
            )
        tensor = flat.reshape(self.input_shape)

        try:
            output = self._resolve(self.backend(tensor))
            values = np.asarray(output, dtype=float).reshape(-1)
        except InferenceFailure:
            raise
        except Exception as e:
            raise InferenceFailure(f"Inference backend failed: {e}") from e

        if values.size == 0:
            raise InferenceFailure("Inference backend returned an empty output")

        probability = float(values[0])
        if not np.isfinite(probability):
            raise InferenceFailure(f"Inference backend returned a non-finite probability: {probability}")

        return probability

    @staticmethod
    def _resolve(output: Any) -> Any:
        """
        Wait for deferred backend outputs within the current tick.
        """
        if inspect.isawaitable(output):
            return asyncio.run(_join(output))
        result = getattr(output, "result", None)
        if callable(result):
            return result()
        return output

    def close(self) -> None:
        """
        Release the inference backend. Safe to call more than once.
        """
        if self.closed:
            return
        self.closed = True
        close = getattr(self.backend, "close", None)
        if callable(close):
            close()
            logger.info("Inference backend released")
