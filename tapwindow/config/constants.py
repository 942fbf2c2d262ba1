"""
Configuration constants for TapWindow.

This module contains all default parameters used throughout the application.
Centralizing them makes it easier to tune the detector and understand system behavior.

TUNING:
- Raise DETECTION_THRESHOLD if taps fire while the finger is only hovering
- Raise PULSE_DURATION if the indicator flickers too fast to notice
- NormalizationConfig must match the scaler used when the model was trained
"""


# ==================== Window Configuration ====================
class WindowConfig:
    """Sliding feature window parameters."""

    # Number of frames the classifier looks at
    WINDOW_SIZE = 100


# ==================== Tap Detection Configuration ====================
class TapDetectionConfig:
    """
    Configuration for tap event decision.

    A tap is reported on the rising edge of the classifier probability above
    DETECTION_THRESHOLD. After a tap, further taps are suppressed for
    PULSE_DURATION seconds and until the probability drops back to the
    threshold or below.
    """

    # Minimum model confidence needed to register a tap (0-1)
    DETECTION_THRESHOLD = 0.7

    # Minimum visible duration of a tap pulse in seconds
    PULSE_DURATION = 0.05

    # Axes fed to the classifier, in order
    SINGLE_AXIS = ("z",)
    DUAL_AXIS = ("y", "z")
    TRACKED_AXES = DUAL_AXIS


# ==================== Normalization Configuration ====================
class NormalizationConfig:
    """
    Standard scaler parameters fitted on the training set.

    Order follows the feature layout: for each tracked axis, position,
    velocity, acceleration.
    """

    # [y_pos, y_vel, y_acc, z_pos, z_vel, z_acc]
    DUAL_AXIS_MEAN = [0.86914025, -0.00037746, -0.03515386, 0.32091813, 0.00010341, 0.04051685]
    DUAL_AXIS_SCALE = [0.04979967, 0.17790756, 44.22439719, 0.02788436, 0.14820831, 36.96062780]

    # The single-axis model was trained on raw features
    SINGLE_AXIS_MEAN = [0.0, 0.0, 0.0]
    SINGLE_AXIS_SCALE = [1.0, 1.0, 1.0]


# ==================== MediaPipe Hand Detection Configuration ====================
class MediaPipeConfig:
    """Configuration for MediaPipe hand tracking."""

    # Hand detection parameters
    MODEL_COMPLEXITY = 1
    MIN_DETECTION_CONFIDENCE = 0.75
    MIN_TRACKING_CONFIDENCE = 0.75
    MAX_NUM_HANDS = 2

    # Index fingertip landmark id
    INDEX_TIP = 8

    # Use metric world landmarks when available (meters, hand-centered)
    USE_WORLD_LANDMARKS = True


# ==================== Camera Configuration ====================
class CameraConfig:
    """Camera capture configuration parameters."""

    # Default camera resolution (lower = faster)
    DEFAULT_WIDTH = 1280
    DEFAULT_HEIGHT = 720

    # Camera buffer size (reduce latency)
    BUFFER_SIZE = 1

    # Target FPS for camera (actual may vary by camera capability)
    TARGET_FPS = 30

    # Camera backend to use (None lets OpenCV choose)
    BACKEND = None


# ==================== UI Configuration ====================
class UIConfig:
    """Configuration for user interface elements."""

    WINDOW_NAME = "TapWindow"

    # Colors (BGR format)
    COLOR_GREEN = (0, 255, 0)
    COLOR_YELLOW = (0, 255, 255)
    COLOR_RED = (0, 0, 255)
    COLOR_GRAY = (128, 128, 128)

    # Text display
    FONT_SCALE = 0.6
    FONT_THICKNESS = 2

    # Tap indicator (filled circle, top-right corner)
    INDICATOR_RADIUS = 24
    INDICATOR_MARGIN = 20

    # Confidence bar
    BAR_WIDTH = 200
    BAR_HEIGHT = 16
