"""
UI Display Module - Drawing and visualization functions for TapWindow.

This module contains the feedback side of tap detection: a tap indicator shown
while the tap pulse is active, a confidence bar updated every frame, and
status text.
"""

import cv2 as cv
import time
import logging

from tapwindow.config import UIConfig, CameraConfig

logger = logging.getLogger(__name__)


def draw_tap_indicator(display_img, active):
    """
    Draw the tap indicator in the top-right corner.

    Args:
        display_img: Image to draw on
        active (bool): Whether a tap pulse is running
    """
    radius = UIConfig.INDICATOR_RADIUS
    center = (display_img.shape[1] - UIConfig.INDICATOR_MARGIN - radius,
              UIConfig.INDICATOR_MARGIN + radius)

    if active:
        cv.circle(display_img, center, radius, UIConfig.COLOR_GREEN, -1)
    else:
        cv.circle(display_img, center, radius, UIConfig.COLOR_GRAY, 2)


def draw_confidence_bar(display_img, confidence, threshold, origin=(10, 70)):
    """
    Draw a horizontal bar showing the current tap confidence.

    Args:
        display_img: Image to draw on
        confidence (float): Current tap probability (0-1)
        threshold (float): Detection threshold, drawn as a marker
        origin (tuple): Top-left corner of the bar
    """
    x, y = origin
    w, h = UIConfig.BAR_WIDTH, UIConfig.BAR_HEIGHT
    filled = int(round(w * min(max(confidence, 0.0), 1.0)))
    color = UIConfig.COLOR_GREEN if confidence > threshold else UIConfig.COLOR_YELLOW

    cv.rectangle(display_img, (x, y), (x + w, y + h), UIConfig.COLOR_GRAY, 1)
    if filled > 0:
        cv.rectangle(display_img, (x, y), (x + filled, y + h), color, -1)

    marker_x = x + int(round(w * threshold))
    cv.line(display_img, (marker_x, y - 3), (marker_x, y + h + 3), UIConfig.COLOR_RED, 2)

    cv.putText(display_img, f"{confidence:.0%}", (x + w + 10, y + h),
               cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
               color, UIConfig.FONT_THICKNESS)


def draw_ui_overlay(display_img, sample, event, threshold, fps_state, pulse_active=False):
    """
    Draw status information and tap feedback on the display image.

    Args:
        display_img: Image to draw on
        sample (TrackingSample): Tracking result for this frame
        event (DetectionEvent or None): Decision for this frame
        threshold (float): Detection threshold
        fps_state (dict): FPS tracking state with keys: 'display_count',
                         'start_time', 'display_fps', 'confidence'
        pulse_active (bool): Current pulse state of the event decider, used
                         when this frame produced no decision

    Returns:
        dict: Updated fps_state
    """
    # Keep the last confidence on screen for frames without a new probability
    if event is not None:
        fps_state['confidence'] = event.confidence
        pulse_active = event.pulse_active
    elif not sample.is_tracked:
        fps_state['confidence'] = 0.0

    # Tracking status
    status_text = "Tracking" if sample.is_tracked else "No hand"
    status_color = UIConfig.COLOR_GREEN if sample.is_tracked else UIConfig.COLOR_RED
    cv.putText(display_img, status_text, (10, 30),
               cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
               status_color, UIConfig.FONT_THICKNESS)

    draw_confidence_bar(display_img, fps_state['confidence'], threshold)
    draw_tap_indicator(display_img, pulse_active)

    # FPS counter - update every second
    current_time = time.time()
    fps_state['display_count'] += 1
    elapsed = current_time - fps_state['start_time']

    if elapsed >= 1.0:
        fps_state['display_fps'] = fps_state['display_count'] / elapsed
        fps_state['display_count'] = 0
        fps_state['start_time'] = current_time

    if fps_state['display_fps'] > 0:
        cv.putText(display_img, f"Processing: {fps_state['display_fps']:.1f} FPS", (10, 120),
                   cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                   UIConfig.COLOR_YELLOW, UIConfig.FONT_THICKNESS)

    return fps_state


def setup_camera(cam_port):
    """
    Initialize and configure the camera.

    Args:
        cam_port (int): Camera port number

    Returns:
        cv.VideoCapture: Configured camera capture object
    """
    logger.info(f"Setting up camera on port {cam_port}")

    if CameraConfig.BACKEND is not None:
        cap = cv.VideoCapture(cam_port, CameraConfig.BACKEND)
    else:
        cap = cv.VideoCapture(cam_port)

    # Set buffer size BEFORE other properties to reduce latency
    cap.set(cv.CAP_PROP_BUFFERSIZE, CameraConfig.BUFFER_SIZE)
    cap.set(cv.CAP_PROP_FPS, CameraConfig.TARGET_FPS)
    cap.set(cv.CAP_PROP_FRAME_HEIGHT, CameraConfig.DEFAULT_HEIGHT)
    cap.set(cv.CAP_PROP_FRAME_WIDTH, CameraConfig.DEFAULT_WIDTH)

    actual_fps = cap.get(cv.CAP_PROP_FPS)
    actual_width = cap.get(cv.CAP_PROP_FRAME_WIDTH)
    actual_height = cap.get(cv.CAP_PROP_FRAME_HEIGHT)
    logger.info(f"Camera configured: {actual_width:.0f}x{actual_height:.0f} @ {actual_fps:.1f}fps")

    return cap
