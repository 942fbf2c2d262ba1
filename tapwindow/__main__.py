"""
TapWindow - Live tap detection from a webcam.

Tracks the index fingertip with MediaPipe, feeds it to the tap pipeline once per
frame and shows the tap indicator and confidence bar.

USAGE:
    python -m tapwindow --model models/tap_window_model.json
    python -m tapwindow --pipeline-config single_axis.json --threshold 0.8 --hand left
"""

import logging
import time

import cv2 as cv

from tapwindow.config import UIConfig, config
from tapwindow.config.args_parser import get_args
from tapwindow.errors import ConfigurationError, InferenceFailure
from tapwindow.pipeline import TapPipeline
from tapwindow.tap_classifier import WindowTapClassifier
from tapwindow.tracking import HandTracker
from tapwindow.ui import draw_ui_overlay, setup_camera

logger = logging.getLogger(__name__)


def create_backend(pipeline_config):
    """
    Load the window classifier, or create an untrained one if no model was given.

    Args:
        pipeline_config (PipelineConfig): Pipeline configuration

    Returns:
        WindowTapClassifier: Inference backend matching the pipeline window
    """
    classifier = WindowTapClassifier(
        window_size=pipeline_config.window_size,
        feature_count=pipeline_config.feature_count,
        feature_names=pipeline_config.layout.feature_names,
    )
    if config.model_path:
        classifier.load_model(config.model_path)
    else:
        logger.warning("No model given, using an untrained classifier")
    return classifier


def run_main_loop(cap, tracker, pipeline, headless=False):
    """
    Main processing loop: one pipeline tick per camera frame.

    Args:
        cap: Camera capture object
        tracker (HandTracker): Fingertip tracker
        pipeline (TapPipeline): Tap detection pipeline
        headless (bool): Whether to run in headless mode (no display)
    """
    fps_state = {
        'display_count': 0,
        'start_time': time.time(),
        'display_fps': 0.0,
        'confidence': 0.0,
    }
    threshold = pipeline.config.detection_threshold

    logger.info(f"Starting main loop (headless={headless})")

    while cap.isOpened():
        success, frame = cap.read()
        if not success:
            logger.warning("Camera returned no frame, stopping")
            break

        sample = tracker.track(frame)
        event = pipeline.tick(sample)

        if headless:
            continue

        tracker.draw(frame)
        fps_state = draw_ui_overlay(frame, sample, event, threshold, fps_state,
                                    pulse_active=pipeline.decider.state.pulse_active)
        cv.imshow(UIConfig.WINDOW_NAME, frame)

        if cv.waitKey(1) & 0xFF == ord('q'):
            logger.info("Quit requested")
            break


def main():
    config.load_args(get_args())

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        pipeline_config = config.pipeline_config()
        backend = create_backend(pipeline_config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise SystemExit(2) from e

    if not config.headless:
        logger.info("Controls: 'q'=quit")
    else:
        logger.info("Running in headless mode. Send SIGINT (Ctrl+C) to stop.")

    cap = None
    tracker = None
    try:
        cap = setup_camera(config.camera_port)
        tracker = HandTracker(config.hand)
        with TapPipeline(pipeline_config, backend) as pipeline:
            run_main_loop(cap, tracker, pipeline, headless=config.headless)
    except InferenceFailure as e:
        logger.error(f"Inference failed, stopping: {e}")
        raise SystemExit(1) from e
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received, shutting down...")
    finally:
        cleanup(cap, tracker)


def cleanup(cap, tracker):
    """
    Release the camera, the tracker and the display windows.
    Components that were never created are skipped.

    Args:
        cap: Camera capture object or None
        tracker (HandTracker): Fingertip tracker or None
    """
    if tracker is not None:
        tracker.close()
    if cap is not None:
        cap.release()
    cv.destroyAllWindows()
    logger.info("Cleanup complete")


if __name__ == "__main__":
    main()
