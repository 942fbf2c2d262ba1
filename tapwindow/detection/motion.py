"""
Motion estimation for the tracked fingertip.

Velocity and acceleration are estimated with first-order finite differences
between consecutive samples, using the elapsed time reported for each tick.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)


def _zeros() -> npt.NDArray[np.float64]:
    return np.zeros(3, dtype=float)


@dataclass
class MotionState:
    """
    Running state of the derivative estimator.
    """

    last_position: npt.NDArray[np.float64] = field(default_factory=_zeros)
    "Position of the previous accepted sample."
    last_velocity: npt.NDArray[np.float64] = field(default_factory=_zeros)
    "Velocity computed at the previous accepted sample."
    initialized: bool = False
    "Whether a reference sample has been recorded since the last reset."


@dataclass(frozen=True)
class MotionEstimate:
    """
    Instantaneous motion of the tracked point for one tick.
    """

    position: npt.NDArray[np.float64]
    velocity: npt.NDArray[np.float64]
    acceleration: npt.NDArray[np.float64]


class DerivativeEstimator:
    """
    Estimates velocity and acceleration from successive position samples.

    The first sample after construction or `reset()` only records a reference
    position and produces no estimate, so no velocity spike is ever computed
    across a tracking gap.
    """

    def __init__(self) -> None:
        self.state = MotionState()

    @property
    def initialized(self) -> bool:
        return self.state.initialized

    def reset(self) -> None:
        """
        Forget the reference sample. Call whenever tracking is lost.
        """
        if self.state.initialized:
            logger.debug("Motion state reset")
        self.state = MotionState()

    def estimate(self, position: npt.ArrayLike, dt: float) -> Optional[MotionEstimate]:
        """
        Update the estimator with a new sample.

        Args:
            position: Current 3D position.
            dt (float): Seconds elapsed since the previous sample.

        Returns:
            MotionEstimate or None: None while the estimator is not ready, i.e. on
            the first sample after a reset or when `dt` is not positive.
        """
        position = np.array(position, dtype=float).reshape(3)
        state = self.state

        if not state.initialized:
            state.last_position = position.copy()
            state.last_velocity = _zeros()
            state.initialized = True
            return None

        # Duplicate or out-of-order tick: leave the state untouched
        if not math.isfinite(dt) or dt <= 0.0:
            logger.debug(f"Skipping sample with non-positive dt={dt}")
            return None

        velocity = (position - state.last_position) / dt
        acceleration = (velocity - state.last_velocity) / dt

        state.last_position = position.copy()
        state.last_velocity = velocity.copy()

        return MotionEstimate(position=position, velocity=velocity, acceleration=acceleration)
