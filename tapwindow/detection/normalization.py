"""
Feature normalization with precomputed standard scaler parameters.
"""

from typing import Sequence

import numpy as np
import numpy.typing as npt

from tapwindow.errors import ConfigurationError


class NormalizationParameters:
    """
    Per-feature mean and scale, fixed for the lifetime of a pipeline.
    Both arrays are read-only.
    """

    def __init__(self, mean: Sequence[float], scale: Sequence[float]) -> None:
        mean_arr = np.array(mean, dtype=float).reshape(-1)
        scale_arr = np.array(scale, dtype=float).reshape(-1)

        if mean_arr.shape != scale_arr.shape:
            raise ConfigurationError(
                f"mean and scale lengths differ: {mean_arr.size} != {scale_arr.size}"
            )
        if mean_arr.size == 0:
            raise ConfigurationError("mean and scale must not be empty")
        if not np.all(np.isfinite(mean_arr)):
            raise ConfigurationError("mean values must be finite")
        if not np.all(np.isfinite(scale_arr)) or np.any(scale_arr == 0.0):
            raise ConfigurationError(f"scale values must be finite and non-zero, got {scale_arr.tolist()}")

        mean_arr.flags.writeable = False
        scale_arr.flags.writeable = False
        self.mean: npt.NDArray[np.float64] = mean_arr
        self.scale: npt.NDArray[np.float64] = scale_arr

    def __len__(self) -> int:
        return int(self.mean.size)


def normalize(raw: npt.ArrayLike, params: NormalizationParameters) -> npt.NDArray[np.float64]:
    """
    Standardize a raw feature vector: (raw - mean) / scale, component-wise.
    """
    return (np.asarray(raw, dtype=float) - params.mean) / params.scale


class FeatureNormalizer:
    """
    Feature normalizer bound to a fixed set of parameters.
    """

    def __init__(self, params: NormalizationParameters) -> None:
        self.params = params

    @property
    def feature_count(self) -> int:
        return len(self.params)

    def __call__(self, raw: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return normalize(raw, self.params)
