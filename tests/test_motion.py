import numpy as np
import pytest

from tapwindow.detection import DerivativeEstimator


def test_first_sample_is_not_ready() -> None:
    estimator = DerivativeEstimator()
    assert estimator.estimate([0.0, 0.0, 0.0], 0.016) is None
    assert estimator.initialized


def test_velocity_and_acceleration() -> None:
    p0 = np.array([0.0, 0.0, 1.0])
    p1 = np.array([0.0, 0.1, 1.2])
    p2 = np.array([0.0, 0.4, 1.3])
    dt1, dt2 = 0.02, 0.05

    estimator = DerivativeEstimator()
    estimator.estimate(p0, 0.7)
    estimator.estimate(p1, dt1)
    motion = estimator.estimate(p2, dt2)

    v1 = (p1 - p0) / dt1
    v2 = (p2 - p1) / dt2
    assert motion.velocity == pytest.approx(v2)
    assert motion.acceleration == pytest.approx((v2 - v1) / dt2)
    assert motion.position == pytest.approx(p2)


def test_second_sample_accelerates_from_rest() -> None:
    estimator = DerivativeEstimator()
    estimator.estimate([0.0, 0.0, 0.0], 0.0)
    motion = estimator.estimate([0.0, 0.0, 0.5], 0.5)
    assert np.allclose(motion.velocity, [0.0, 0.0, 1.0])
    assert np.allclose(motion.acceleration, [0.0, 0.0, 2.0])


@pytest.mark.parametrize("dt", [0.0, -0.01, float("nan")])
def test_non_positive_dt_leaves_state_untouched(dt: float) -> None:
    estimator = DerivativeEstimator()
    estimator.estimate([0.0, 0.0, 0.0], 0.01)
    estimator.estimate([0.0, 0.0, 0.1], 0.1)
    before_position = estimator.state.last_position.copy()
    before_velocity = estimator.state.last_velocity.copy()

    assert estimator.estimate([5.0, 5.0, 5.0], dt) is None
    assert estimator.state.last_position.tolist() == before_position.tolist()
    assert estimator.state.last_velocity.tolist() == before_velocity.tolist()

    motion = estimator.estimate([0.0, 0.0, 0.2], 0.1)
    assert np.allclose(motion.velocity, [0.0, 0.0, 1.0])


def test_reset_absorbs_next_sample() -> None:
    estimator = DerivativeEstimator()
    estimator.estimate([0.0, 0.0, 0.0], 0.01)
    assert estimator.estimate([0.0, 0.0, 0.1], 0.01) is not None

    estimator.reset()
    assert not estimator.initialized
    # A large jump across the gap must not produce a velocity spike
    assert estimator.estimate([9.0, 9.0, 9.0], 0.01) is None
    motion = estimator.estimate([9.0, 9.0, 9.0], 0.01)
    assert np.allclose(motion.velocity, [0.0, 0.0, 0.0])
    assert np.allclose(motion.acceleration, [0.0, 0.0, 0.0])


def test_estimate_does_not_alias_state() -> None:
    estimator = DerivativeEstimator()
    estimator.estimate([0.0, 0.0, 0.0], 0.1)
    motion = estimator.estimate([0.0, 0.0, 0.1], 0.1)

    motion.position[:] = 100.0
    motion.velocity[:] = 100.0

    nxt = estimator.estimate([0.0, 0.0, 0.2], 0.1)
    assert np.allclose(nxt.velocity, [0.0, 0.0, 1.0])
    assert np.allclose(nxt.acceleration, [0.0, 0.0, 0.0])
