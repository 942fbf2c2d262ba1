import numpy as np
import pytest

from tapwindow.config import NormalizationConfig
from tapwindow.detection import FeatureNormalizer, NormalizationParameters, normalize
from tapwindow.errors import ConfigurationError


def test_normalize_is_componentwise_affine() -> None:
    params = NormalizationParameters([1.0, -2.0, 0.5], [2.0, 4.0, 0.25])
    raw = [3.0, 2.0, 1.0]
    out = normalize(raw, params)
    expected = [(3.0 - 1.0) / 2.0, (2.0 + 2.0) / 4.0, (1.0 - 0.5) / 0.25]
    assert out.tolist() == pytest.approx(expected)


def test_mean_normalizes_to_zero() -> None:
    params = NormalizationParameters(NormalizationConfig.DUAL_AXIS_MEAN, NormalizationConfig.DUAL_AXIS_SCALE)
    out = normalize(NormalizationConfig.DUAL_AXIS_MEAN, params)
    assert out.shape == (6,)
    assert np.allclose(out, 0.0)


def test_normalizer_is_pure() -> None:
    normalizer = FeatureNormalizer(NormalizationParameters([0.0, 1.0], [1.0, 2.0]))
    raw = np.array([5.0, 5.0])
    first = normalizer(raw)
    second = normalizer(raw)
    assert first.tolist() == second.tolist()
    assert raw.tolist() == [5.0, 5.0]
    assert normalizer.feature_count == 2


def test_parameters_are_read_only() -> None:
    params = NormalizationParameters([0.0], [1.0])
    with pytest.raises(ValueError):
        params.mean[0] = 3.0


@pytest.mark.parametrize(
    "mean, scale",
    [
        ([0.0, 0.0], [1.0, 0.0]),
        ([0.0, 0.0], [1.0]),
        ([], []),
        ([0.0], [float("nan")]),
        ([float("inf")], [1.0]),
    ],
)
def test_invalid_parameters_fail_fast(mean, scale) -> None:
    with pytest.raises(ConfigurationError):
        NormalizationParameters(mean, scale)
