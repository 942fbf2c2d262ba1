import argparse
import json
import logging
import math
import numbers
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from tapwindow.config.constants import NormalizationConfig, TapDetectionConfig, WindowConfig
from tapwindow.detection.features import FeatureLayout
from tapwindow.detection.normalization import NormalizationParameters
from tapwindow.errors import ConfigurationError

logger = logging.getLogger(__name__)


class HandSide(Enum):
    """
    Hand used for tap detection.
    """

    RIGHT = "right"
    LEFT = "left"

    def __str__(self) -> str:
        return self.value


def _number(name: str, value: Any) -> float:
    """
    Return a numeric configuration value as a float. Strings and booleans are rejected.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    return float(value)


def _number_tuple(name: str, values: Any) -> Tuple[float, ...]:
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise ConfigurationError(f"{name} must be a list of numbers, got {values!r}")
    return tuple(_number(f"{name}[{i}]", v) for i, v in enumerate(values))


def _axes_tuple(axes: Any) -> Tuple[str, ...]:
    if isinstance(axes, (str, bytes)) or not isinstance(axes, (list, tuple)):
        raise ConfigurationError(f"tracked_axes must be a list of axis names, got {axes!r}")
    if not all(isinstance(a, str) for a in axes):
        raise ConfigurationError(f"tracked_axes must contain axis names, got {axes!r}")
    return tuple(axes)


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration of a tap detection pipeline.
    All values are validated on construction and a `ConfigurationError` is raised
    for any inconsistency, so an invalid pipeline can never be built.
    """

    mean: Tuple[float, ...] = tuple(NormalizationConfig.DUAL_AXIS_MEAN)
    "Per-feature mean of the training set."
    scale: Tuple[float, ...] = tuple(NormalizationConfig.DUAL_AXIS_SCALE)
    "Per-feature scale (standard deviation) of the training set. Must be non-zero."
    tracked_axes: Tuple[str, ...] = TapDetectionConfig.TRACKED_AXES
    "Position axes fed to the classifier, in order."
    detection_threshold: float = TapDetectionConfig.DETECTION_THRESHOLD
    "Probability above which a tap is reported. Must be in [0, 1]."
    window_size: int = WindowConfig.WINDOW_SIZE
    "Number of frames in the classifier window."
    pulse_duration: float = TapDetectionConfig.PULSE_DURATION
    "Minimum duration of a tap pulse in seconds."
    feature_count: Optional[int] = field(default=None)
    "Number of features per frame. Derived from `tracked_axes` when omitted."

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", _number_tuple("mean", self.mean))
        object.__setattr__(self, "scale", _number_tuple("scale", self.scale))
        object.__setattr__(self, "tracked_axes", _axes_tuple(self.tracked_axes))
        object.__setattr__(self, "detection_threshold", _number("detection_threshold", self.detection_threshold))
        object.__setattr__(self, "pulse_duration", _number("pulse_duration", self.pulse_duration))

        if isinstance(self.window_size, bool) or not isinstance(self.window_size, int):
            raise ConfigurationError(f"window_size must be an integer, got {self.window_size!r}")
        if self.window_size <= 0:
            raise ConfigurationError(f"window_size must be positive, got {self.window_size}")

        if not 0.0 <= self.detection_threshold <= 1.0:
            raise ConfigurationError(
                f"detection_threshold must be in [0, 1], got {self.detection_threshold}"
            )
        if not math.isfinite(self.pulse_duration) or self.pulse_duration < 0:
            raise ConfigurationError(
                f"pulse_duration must be a non-negative number, got {self.pulse_duration}"
            )

        layout = FeatureLayout(self.tracked_axes)
        if self.feature_count is None:
            object.__setattr__(self, "feature_count", layout.feature_count)
        elif self.feature_count != layout.feature_count:
            raise ConfigurationError(
                f"feature_count={self.feature_count} does not match tracked axes "
                f"{self.tracked_axes} ({layout.feature_count} features)"
            )

        if len(self.mean) != self.feature_count or len(self.scale) != self.feature_count:
            raise ConfigurationError(
                f"mean/scale must have {self.feature_count} entries, "
                f"got {len(self.mean)}/{len(self.scale)}"
            )

        # Validates the scale values themselves
        NormalizationParameters(self.mean, self.scale)

    @property
    def layout(self) -> FeatureLayout:
        """
        Feature layout matching the tracked axes.
        """
        return FeatureLayout(self.tracked_axes)

    @property
    def normalization(self) -> NormalizationParameters:
        """
        Normalization parameters for the feature normalizer.
        """
        return NormalizationParameters(self.mean, self.scale)

    @classmethod
    def dual_axis(cls, **overrides: Any) -> "PipelineConfig":
        """
        Six features: position, velocity and acceleration on the Y and Z axes.
        """
        values: Dict[str, Any] = dict(
            tracked_axes=TapDetectionConfig.DUAL_AXIS,
            mean=NormalizationConfig.DUAL_AXIS_MEAN,
            scale=NormalizationConfig.DUAL_AXIS_SCALE,
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def single_axis(cls, **overrides: Any) -> "PipelineConfig":
        """
        Three features: position, velocity and acceleration on the Z axis.
        """
        values: Dict[str, Any] = dict(
            tracked_axes=TapDetectionConfig.SINGLE_AXIS,
            mean=NormalizationConfig.SINGLE_AXIS_MEAN,
            scale=NormalizationConfig.SINGLE_AXIS_SCALE,
        )
        values.update(overrides)
        return cls(**values)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """
        Build a configuration from a dictionary. Unknown keys are rejected.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown pipeline configuration keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PipelineConfig":
        """
        Load a configuration from a JSON file.
        """
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read pipeline configuration {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Pipeline configuration {path} must be a JSON object")

        config = cls.from_dict(data)
        logger.info(f"Pipeline configuration loaded from {path}")
        return config

    def to_dict(self) -> Dict[str, Any]:
        """
        Return the configuration as a JSON-serializable dictionary.
        """
        data = asdict(self)
        for key in ("mean", "scale", "tracked_axes"):
            data[key] = list(data[key])
        return data


class Config:
    """
    Configuration singleton class for the application.
    It can be accessed from any module by simply importing it.
    """

    __instance = None

    def __new__(cls) -> "Config":
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __init__(self) -> None:
        """
        Initialize configuration attributes with default values.
        """

        self.name = "TapWindow"
        "Name of the application."

        self.debug: bool = False
        "Enable debug logging. Defaults to False."

        self.headless: bool = False
        "Run without a display window. Defaults to False."

        self.camera_port: int = 0
        "Camera device index. Defaults to 0."

        self.hand: HandSide = HandSide.RIGHT
        "Hand used for tap detection. Defaults to the right hand."

        self.model_path: Optional[str] = None
        "Path to the window classifier weights (JSON). Defaults to untrained weights."

        self.pipeline_config_path: Optional[str] = None
        "Path to a pipeline configuration JSON file. Defaults to the dual-axis preset."

        self.threshold: Optional[float] = None
        "Detection threshold override."

    def load_args(self, args: argparse.Namespace) -> None:
        """
        Load configuration attributes from the command line arguments.
        """
        self.debug = args.debug
        self.headless = args.headless
        self.camera_port = args.camera
        self.hand = args.hand
        self.model_path = args.model
        self.pipeline_config_path = args.pipeline_config
        self.threshold = args.threshold

    def pipeline_config(self) -> PipelineConfig:
        """
        Build the pipeline configuration from the loaded settings.
        """
        if self.pipeline_config_path:
            pipeline_config = PipelineConfig.load(self.pipeline_config_path)
        else:
            pipeline_config = PipelineConfig.dual_axis()

        if self.threshold is not None:
            data = pipeline_config.to_dict()
            data["detection_threshold"] = self.threshold
            pipeline_config = PipelineConfig.from_dict(data)

        return pipeline_config


config = Config()
"Singleton instance of the configuration class."
