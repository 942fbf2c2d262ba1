import logging
import time
from typing import Any, Optional, Tuple

import cv2
import mediapipe as mp
import numpy as np
import numpy.typing as npt

from tapwindow.config import HandSide, MediaPipeConfig
from tapwindow.pipeline import TrackingSample

logger = logging.getLogger(__name__)


def select_fingertip(
    results: Any, side: HandSide, use_world: bool = MediaPipeConfig.USE_WORLD_LANDMARKS
) -> Optional[Tuple[float, float, float]]:
    """
    Return the index fingertip position of the requested hand, or None if that hand was not found.

    :param results: The results of the MediaPipe hand detection model.
    :param side: The hand to look for.
    :param use_world: Use metric world landmarks when the model provides them.
    """
    if not results.multi_hand_landmarks:
        return None

    world = getattr(results, "multi_hand_world_landmarks", None) if use_world else None

    for i, handedness in enumerate(results.multi_handedness):
        if handedness.classification[0].label.lower() != side.value:
            continue

        hands = world if world else results.multi_hand_landmarks
        tip = hands[i].landmark[MediaPipeConfig.INDEX_TIP]
        return (float(tip.x), float(tip.y), float(tip.z))

    return None


class HandTracker:
    """
    This class tracks the index fingertip of one hand and produces one
    `TrackingSample` per processed frame.
    """

    def __init__(self, side: HandSide = HandSide.RIGHT) -> None:
        self.side = side
        " The hand being tracked. "

        self.hands_detector = mp.solutions.hands.Hands(
            model_complexity=MediaPipeConfig.MODEL_COMPLEXITY,
            min_detection_confidence=MediaPipeConfig.MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=MediaPipeConfig.MIN_TRACKING_CONFIDENCE,
            max_num_hands=MediaPipeConfig.MAX_NUM_HANDS,
        )
        " The MediaPipe hand detection model. "

        self.last_results = None
        " The raw results of the last processed frame, used for drawing. "

        self._last_timestamp: Optional[float] = None

        logger.info(f"Hand tracker initialized for the {side} hand")

    def track(self, img: npt.NDArray[np.uint8]) -> TrackingSample:
        """
        Detect the hand in a BGR frame and return the tracking sample for this frame.
        The elapsed time is measured between consecutive calls.

        :param img: The frame to process.
        """
        now = time.time()
        dt = 0.0 if self._last_timestamp is None else now - self._last_timestamp
        self._last_timestamp = now

        rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
        rgb.flags.writeable = False
        self.last_results = self.hands_detector.process(rgb)

        position = select_fingertip(self.last_results, self.side)
        if position is None:
            return TrackingSample(is_tracked=False, dt=dt)
        return TrackingSample(is_tracked=True, position=position, dt=dt)

    def draw(self, img: npt.NDArray[np.uint8]) -> None:
        """
        Draw the hands found in the last processed frame.

        :param img: The image where the hands will be drawn. It should be the same image that was processed.
        """
        if self.last_results is None or not self.last_results.multi_hand_landmarks:
            return

        for hand in self.last_results.multi_hand_landmarks:
            mp.solutions.drawing_utils.draw_landmarks(
                img,
                hand,
                mp.solutions.hands.HAND_CONNECTIONS,
                mp.solutions.drawing_styles.get_default_hand_landmarks_style(),
                mp.solutions.drawing_styles.get_default_hand_connections_style(),
            )

    def close(self) -> None:
        """
        Release the MediaPipe model.
        """
        self.hands_detector.close()
