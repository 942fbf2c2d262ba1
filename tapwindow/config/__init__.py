"""
Configuration Module - Defaults, pipeline configuration and command line arguments.
"""

from .constants import (
    WindowConfig,
    TapDetectionConfig,
    NormalizationConfig,
    MediaPipeConfig,
    CameraConfig,
    UIConfig
)

from .config import Config, HandSide, PipelineConfig, config

__all__ = [
    # Defaults
    'WindowConfig',
    'TapDetectionConfig',
    'NormalizationConfig',
    'MediaPipeConfig',
    'CameraConfig',
    'UIConfig',
    # Runtime configuration
    'Config',
    'HandSide',
    'PipelineConfig',
    'config',
]
