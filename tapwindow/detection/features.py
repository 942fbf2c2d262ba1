"""
Feature layout for the tap classifier.

Each tracked axis contributes three features to the per-frame vector, in order:
position, velocity and acceleration. Tracking ("z",) yields the 3-feature
single-axis layout, ("y", "z") the 6-feature dual-axis layout.
"""

from typing import Dict, List, Sequence

import numpy as np
import numpy.typing as npt

from tapwindow.errors import ConfigurationError

AXIS_INDEX: Dict[str, int] = {"x": 0, "y": 1, "z": 2}
"Index of each axis in a 3D position vector."

QUANTITIES = ("pos", "vel", "acc")


class FeatureLayout:
    """
    Maps the motion of the tracked point to a raw feature vector.
    """

    def __init__(self, axes: Sequence[str]) -> None:
        axes = tuple(axes)
        if len(axes) == 0:
            raise ConfigurationError("At least one tracked axis is required")
        unknown = [a for a in axes if a not in AXIS_INDEX]
        if unknown:
            raise ConfigurationError(f"Unknown tracked axes {unknown}, expected some of x, y, z")
        if len(set(axes)) != len(axes):
            raise ConfigurationError(f"Tracked axes must be unique, got {axes}")

        self.axes = axes
        " The tracked axes, in feature order. "

        self._indices = np.array([AXIS_INDEX[a] for a in axes], dtype=int)

    @property
    def feature_count(self) -> int:
        """
        Number of features per frame.
        """
        return len(QUANTITIES) * len(self.axes)

    @property
    def feature_names(self) -> List[str]:
        """
        Feature names in vector order, e.g. ['y_pos', 'y_vel', 'y_acc'].
        """
        return [f"{axis}_{q}" for axis in self.axes for q in QUANTITIES]

    def extract(
        self,
        position: npt.ArrayLike,
        velocity: npt.ArrayLike,
        acceleration: npt.ArrayLike,
    ) -> npt.NDArray[np.float64]:
        """
        Build the raw feature vector for one frame.

        :param position: Current 3D position.
        :param velocity: Current 3D velocity.
        :param acceleration: Current 3D acceleration.
        """
        stacked = np.stack(
            [
                np.asarray(position, dtype=float),
                np.asarray(velocity, dtype=float),
                np.asarray(acceleration, dtype=float),
            ]
        )
        # (3 quantities, 3 axes) -> axis-major [pos, vel, acc] per tracked axis
        return stacked[:, self._indices].T.reshape(-1)

    def __repr__(self) -> str:
        return f"FeatureLayout(axes={self.axes})"
