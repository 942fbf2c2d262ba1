"""
Tap detection pipeline.

One call to `TapPipeline.tick` per tracking sample runs the whole chain:

    sample -> derivative estimator -> feature layout -> normalizer
           -> window buffer -> classifier adapter -> event decider

The pipeline is tick-synchronous and not thread-safe: the window and the motion
state are mutated in place, so only one tick may run at a time.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from tapwindow.config import PipelineConfig
from tapwindow.detection import DerivativeEstimator, DetectionEvent, EventDecider, FeatureNormalizer
from tapwindow.tap_classifier import ClassifierAdapter, InferenceBackend
from tapwindow.utils import WindowBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackingSample:
    """
    Tracking result for one frame.
    """

    is_tracked: bool
    "Whether the tracked point is currently visible."
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    "Position of the tracked point. Ignored when not tracked."
    dt: float = 0.0
    "Seconds elapsed since the previous sample."


class TapPipeline:
    """
    Streaming tap detector over a fixed-size feature window.

    The inference backend is owned by the pipeline from construction until
    `close()`; use the pipeline as a context manager to release it.
    """

    def __init__(self, config: PipelineConfig, backend: InferenceBackend) -> None:
        self.config = config
        self.layout = config.layout
        self.estimator = DerivativeEstimator()
        self.normalizer = FeatureNormalizer(config.normalization)
        self.window = WindowBuffer(config.window_size, config.feature_count)
        self.classifier = ClassifierAdapter(backend, config.window_size, config.feature_count)
        self.decider = EventDecider(config.detection_threshold, config.pulse_duration)

        self._tracking = False

        logger.info(
            f"Tap pipeline ready: axes={list(config.tracked_axes)}, "
            f"window={config.window_size}x{config.feature_count}, "
            f"threshold={config.detection_threshold}"
        )

    def tick(self, sample: TrackingSample) -> Optional[DetectionEvent]:
        """
        Process one tracking sample.

        Args:
            sample (TrackingSample): Tracking result for this frame.

        Returns:
            DetectionEvent or None: None when no probability was produced this tick,
            i.e. while tracking is lost, on the first sample after (re)acquisition,
            or when `dt` is not positive.

        Raises:
            InferenceFailure: If the inference backend fails.
        """
        if not sample.is_tracked:
            if self._tracking:
                logger.debug("Tracking lost")
                self._tracking = False
            self.estimator.reset()
            self.decider.elapse(sample.dt)
            return None

        if not self._tracking:
            logger.debug("Tracking acquired")
            self._tracking = True

        motion = self.estimator.estimate(sample.position, sample.dt)
        if motion is None:
            self.decider.elapse(sample.dt)
            return None

        raw = self.layout.extract(motion.position, motion.velocity, motion.acceleration)
        self.window.push(self.normalizer(raw))

        probability = self.classifier.infer(self.window.flatten())
        return self.decider.decide(probability, sample.dt)

    def reset(self) -> None:
        """
        Return to the cold-start state: zero-filled window, no motion reference,
        no running pulse.
        """
        self.estimator.reset()
        self.window.clear()
        self.decider.reset()
        self._tracking = False

    def close(self) -> None:
        """
        Release the inference backend.
        """
        self.classifier.close()

    def __enter__(self) -> "TapPipeline":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
