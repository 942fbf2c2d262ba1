import argparse

from .config import HandSide

tapwindow_parser = argparse.ArgumentParser(
    description="TapWindow, tap detection from index fingertip tracking"
)

tapwindow_parser.add_argument(
    "--model",
    help="Path to window classifier weights (JSON).",
    default=None,
)
tapwindow_parser.add_argument(
    "--pipeline-config",
    help="Path to pipeline configuration JSON file.",
    default=None,
)
tapwindow_parser.add_argument(
    "--threshold",
    help="Detection threshold override (0-1).",
    type=float,
    default=None,
)

tapwindow_parser.add_argument(
    "--camera",
    help="Camera device index.",
    type=int,
    default=0,
)
tapwindow_parser.add_argument(
    "--hand", help="Tracked hand", type=HandSide, choices=list(HandSide), default=HandSide.RIGHT
)

tapwindow_parser.add_argument(
    "--headless",
    help="Run without a display window.",
    action="store_true",
    default=False,
)
tapwindow_parser.add_argument(
    "--debug",
    help="Enable debug mode.",
    action="store_true",
    default=False,
)

get_args = tapwindow_parser.parse_args
