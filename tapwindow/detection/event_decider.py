"""
Tap event decision with debounce.

A tap is reported on the rising edge of the classifier probability above the
detection threshold. Each tap starts a pulse of fixed duration during which no
further tap is reported; after the pulse, the probability must have dropped to
the threshold or below before another tap can fire.
"""

import logging
from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionEvent:
    """
    Result of one decision tick.
    """

    confidence: float
    "Current tap probability, clamped to [0, 1]. Always up to date."
    triggered: bool
    "True only on the tick where a new tap was detected."
    pulse_active: bool = False
    "True while the tap pulse started by the last trigger is running."


@dataclass(frozen=True)
class DebounceState:
    """
    State of the tap pulse.
    """

    pulse_active: bool = False
    "Whether a pulse is running."
    pulse_remaining: float = 0.0
    "Seconds left in the running pulse."
    armed: bool = True
    "Whether the probability has been at or below threshold since the last trigger."


def advance_pulse(state: DebounceState, dt: float) -> DebounceState:
    """
    Count the running pulse down by `dt` seconds.
    """
    if not state.pulse_active or not dt > 0:
        return state

    remaining = state.pulse_remaining - dt
    if remaining <= 0:
        return replace(state, pulse_active=False, pulse_remaining=0.0)
    return replace(state, pulse_remaining=remaining)


def decide(
    probability: float,
    threshold: float,
    state: DebounceState,
    dt: float,
    pulse_duration: float,
) -> Tuple[DetectionEvent, DebounceState]:
    """
    Threshold the probability and apply the debounce pulse.

    Args:
        probability (float): Raw classifier output for this tick.
        threshold (float): Probability above which a tap is detected.
        state (DebounceState): State after the previous tick.
        dt (float): Seconds elapsed since the previous tick.
        pulse_duration (float): Duration of the pulse started by a tap.

    Returns:
        tuple: (event, new_state)
    """
    state = advance_pulse(state, dt)
    above = probability > threshold

    if not above:
        state = replace(state, armed=True)

    triggered = above and state.armed and not state.pulse_active
    if triggered:
        state = DebounceState(pulse_active=pulse_duration > 0, pulse_remaining=pulse_duration, armed=False)

    event = DetectionEvent(
        confidence=float(np.clip(probability, 0.0, 1.0)),
        triggered=triggered,
        pulse_active=triggered or state.pulse_active,
    )
    return event, state


class EventDecider:
    """
    Stateful tap decider, advanced once per tick.
    """

    def __init__(self, threshold: float, pulse_duration: float) -> None:
        self.threshold = threshold
        self.pulse_duration = pulse_duration
        self.state = DebounceState()

    def decide(self, probability: float, dt: float) -> DetectionEvent:
        event, self.state = decide(probability, self.threshold, self.state, dt, self.pulse_duration)
        if event.triggered:
            logger.info(f"TAP DETECTED! Confidence: {event.confidence:.0%}")
        return event

    def elapse(self, dt: float) -> None:
        """
        Let time pass without a new probability (e.g. while tracking is lost).
        """
        self.state = advance_pulse(self.state, dt)

    def reset(self) -> None:
        self.state = DebounceState()
