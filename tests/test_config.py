import argparse
import json

import pytest

from tapwindow.config import Config, HandSide, NormalizationConfig, PipelineConfig
from tapwindow.errors import ConfigurationError


def test_default_is_dual_axis() -> None:
    config = PipelineConfig()
    assert config.tracked_axes == ("y", "z")
    assert config.feature_count == 6
    assert config.window_size == 100
    assert config.detection_threshold == pytest.approx(0.7)
    assert config.pulse_duration == pytest.approx(0.05)
    assert config.mean == pytest.approx(tuple(NormalizationConfig.DUAL_AXIS_MEAN))


def test_single_axis_preset() -> None:
    config = PipelineConfig.single_axis()
    assert config.feature_count == 3
    assert config.layout.feature_names == ["z_pos", "z_vel", "z_acc"]
    assert len(config.normalization) == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"window_size": 0},
        {"window_size": -5},
        {"window_size": 2.5},
        {"detection_threshold": 1.5},
        {"detection_threshold": -0.1},
        {"pulse_duration": -0.01},
        {"feature_count": 3},
        {"mean": [0.0] * 5},
        {"scale": [1.0, 1.0, 0.0, 1.0, 1.0, 1.0]},
        {"tracked_axes": ("q", "z")},
        {"detection_threshold": "0.7"},
        {"detection_threshold": True},
        {"pulse_duration": "0.05"},
        {"mean": None},
        {"scale": [1.0, "1.0", 1.0, 1.0, 1.0, 1.0]},
        {"tracked_axes": 5},
        {"tracked_axes": "yz"},
        {"tracked_axes": ["y", 2]},
    ],
)
def test_invalid_configuration_fails_fast(overrides) -> None:
    with pytest.raises(ConfigurationError):
        PipelineConfig.dual_axis(**overrides)


def test_explicit_matching_feature_count_is_accepted() -> None:
    assert PipelineConfig.single_axis(feature_count=3).feature_count == 3


def test_configuration_is_immutable() -> None:
    config = PipelineConfig()
    with pytest.raises(AttributeError):
        config.window_size = 10


def test_load_from_json(tmp_path) -> None:
    path = tmp_path / "pipeline.json"
    data = PipelineConfig.single_axis(detection_threshold=0.8, window_size=50).to_dict()
    path.write_text(json.dumps(data))

    config = PipelineConfig.load(path)
    assert config.tracked_axes == ("z",)
    assert config.window_size == 50
    assert config.detection_threshold == pytest.approx(0.8)


def test_load_rejects_unknown_keys(tmp_path) -> None:
    path = tmp_path / "pipeline.json"
    path.write_text(json.dumps({"window": 10}))
    with pytest.raises(ConfigurationError):
        PipelineConfig.load(path)


def test_load_rejects_unreadable_file(tmp_path) -> None:
    path = tmp_path / "pipeline.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError):
        PipelineConfig.load(path)


def test_runtime_config_from_args() -> None:
    args = argparse.Namespace(
        debug=True, headless=True, camera=2, hand=HandSide.LEFT,
        model=None, pipeline_config=None, threshold=0.9,
    )
    config = Config()
    assert Config() is config
    config.load_args(args)
    assert config.hand is HandSide.LEFT
    assert config.camera_port == 2

    pipeline_config = config.pipeline_config()
    assert pipeline_config.detection_threshold == pytest.approx(0.9)
    assert pipeline_config.feature_count == 6


@pytest.mark.parametrize(
    "entry",
    [
        {"detection_threshold": "0.7"},
        {"pulse_duration": "0.05"},
        {"mean": None},
        {"tracked_axes": 5},
        {"window_size": "100"},
    ],
)
def test_load_rejects_mistyped_values(tmp_path, entry) -> None:
    path = tmp_path / "pipeline.json"
    data = PipelineConfig.dual_axis().to_dict()
    data.update(entry)
    path.write_text(json.dumps(data))
    with pytest.raises(ConfigurationError):
        PipelineConfig.load(path)
