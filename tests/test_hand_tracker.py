from types import SimpleNamespace

import pytest

pytest.importorskip("mediapipe")
pytest.importorskip("cv2")

from tapwindow.config import HandSide  # noqa: E402
from tapwindow.tracking import select_fingertip  # noqa: E402


def make_hand(offset: float):
    landmarks = [SimpleNamespace(x=offset + i, y=offset + i / 10, z=-i / 100) for i in range(21)]
    return SimpleNamespace(landmark=landmarks)


def make_results(labels, world=True):
    hands = [make_hand(float(i)) for i in range(len(labels))]
    return SimpleNamespace(
        multi_hand_landmarks=hands,
        multi_hand_world_landmarks=[make_hand(100.0 + i) for i in range(len(labels))] if world else None,
        multi_handedness=[
            SimpleNamespace(classification=[SimpleNamespace(label=label, index=i)])
            for i, label in enumerate(labels)
        ],
    )


def test_no_hands() -> None:
    results = SimpleNamespace(multi_hand_landmarks=None, multi_handedness=None)
    assert select_fingertip(results, HandSide.RIGHT) is None


def test_selects_requested_hand_world_landmarks() -> None:
    results = make_results(["Left", "Right"])
    assert select_fingertip(results, HandSide.RIGHT) == pytest.approx((109.0, 101.8, -0.08))
    assert select_fingertip(results, HandSide.LEFT) == pytest.approx((108.0, 100.8, -0.08))


def test_falls_back_to_image_landmarks() -> None:
    results = make_results(["Right"], world=False)
    assert select_fingertip(results, HandSide.RIGHT) == pytest.approx((8.0, 0.8, -0.08))
    assert select_fingertip(results, HandSide.RIGHT, use_world=False) == pytest.approx((8.0, 0.8, -0.08))


def test_missing_hand_is_untracked() -> None:
    results = make_results(["Left"])
    assert select_fingertip(results, HandSide.RIGHT) is None
