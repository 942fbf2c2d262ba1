import json

import numpy as np
import pytest

from tapwindow.errors import ConfigurationError
from tapwindow.tap_classifier import ClassifierAdapter, WindowTapClassifier


def test_untrained_classifier_outputs_sigmoid_of_bias() -> None:
    classifier = WindowTapClassifier(window_size=10, feature_count=3)
    output = classifier(np.zeros((1, 10, 3), dtype=np.float32))
    assert output.shape == (1, 1)
    assert output[0, 0] == pytest.approx(0.5)


def test_weights_are_applied_per_frame_and_feature() -> None:
    weights = np.zeros((2, 3))
    weights[-1, 2] = 4.0
    classifier = WindowTapClassifier(window_size=2, feature_count=3, weights=weights, bias=-2.0)

    window = np.zeros((1, 2, 3), dtype=np.float32)
    assert classifier(window)[0, 0] == pytest.approx(1 / (1 + np.exp(2.0)))

    window[0, -1, 2] = 1.0
    assert classifier(window)[0, 0] == pytest.approx(1 / (1 + np.exp(-2.0)))


def test_wrong_input_shape_raises() -> None:
    classifier = WindowTapClassifier(window_size=2, feature_count=3)
    with pytest.raises(ValueError):
        classifier(np.zeros((1, 3, 2), dtype=np.float32))


def test_usable_as_adapter_backend() -> None:
    classifier = WindowTapClassifier(window_size=5, feature_count=6, bias=1.0)
    adapter = ClassifierAdapter(classifier, window_size=5, feature_count=6)
    assert adapter.infer(np.zeros(30)) == pytest.approx(1 / (1 + np.exp(-1.0)))


def test_feature_importance_sums_over_frames() -> None:
    weights = np.array([[1.0, -3.0], [1.0, 0.0]])
    classifier = WindowTapClassifier(2, 2, weights=weights, feature_names=["z_pos", "z_vel"])
    importance = classifier.get_feature_importance()
    assert list(importance) == ["z_vel", "z_pos"]
    assert importance["z_vel"] == pytest.approx(0.6)
    assert importance["z_pos"] == pytest.approx(0.4)


def test_save_and_load(tmp_path) -> None:
    path = tmp_path / "model.json"
    weights = np.arange(6, dtype=float).reshape(2, 3) / 10
    WindowTapClassifier(2, 3, weights=weights, bias=0.3).save_model(path)

    loaded = WindowTapClassifier.from_file(path)
    assert loaded.window_size == 2
    assert loaded.feature_count == 3
    assert np.allclose(loaded.weights, weights)
    assert loaded.bias == pytest.approx(0.3)

    other = WindowTapClassifier(2, 3)
    other.load_model(path)
    assert np.allclose(other.weights, weights)


def test_load_rejects_mismatched_window(tmp_path) -> None:
    path = tmp_path / "model.json"
    WindowTapClassifier(4, 3).save_model(path)
    with pytest.raises(ConfigurationError):
        WindowTapClassifier(100, 3).load_model(path)


def test_load_rejects_broken_files(tmp_path) -> None:
    missing = tmp_path / "missing.json"
    with pytest.raises(ConfigurationError):
        WindowTapClassifier.from_file(missing)

    no_weights = tmp_path / "empty.json"
    no_weights.write_text(json.dumps({"bias": 1.0}))
    with pytest.raises(ConfigurationError):
        WindowTapClassifier.from_file(no_weights)


def test_invalid_construction() -> None:
    with pytest.raises(ConfigurationError):
        WindowTapClassifier(0, 3)
    with pytest.raises(ConfigurationError):
        WindowTapClassifier(2, 3, weights=np.zeros((3, 2)))
    with pytest.raises(ConfigurationError):
        WindowTapClassifier(2, 3, feature_names=["a"])
