"""
Neural Reset trigger.

Decides whether to offer a short stabilisation exercise when cognitive
activity is high but focus stability is low. Rules are evaluated in order;
the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from neuroloop.schemas.neural_reset import NeuralResetPhases, NeuralResetTrigger
from neuroloop.services.numeric import clamp, round_half_up

ACTIVITY_MIN = 30
STABLE_AT = 50
POST_SESSION_MIN_SESSIONS = 2
POST_SESSION_HIGH_ACTIVITY = 80
HIGH_ACTIVITY = 70
LOW_STABILITY = 40


@dataclass(frozen=True)
class NeuralResetConfig:
    min_duration: int = 180          # seconds
    max_duration: int = 300
    default_duration: int = 240
    phases: Dict[str, int] = field(default_factory=lambda: {
        "breathing": 90,
        "anchoring": 60,
        "awareness": 60,
    })


NEURAL_RESET_CONFIG = NeuralResetConfig()


def _not_shown() -> NeuralResetTrigger:
    return NeuralResetTrigger(should_show=False)


def evaluate_trigger(
    activity: float,
    stability: float,
    recent_sessions: int = 0,
    post_session: bool = False,
) -> NeuralResetTrigger:
    if activity < ACTIVITY_MIN:
        return _not_shown()
    if stability >= STABLE_AT:
        return _not_shown()

    if post_session and (recent_sessions >= POST_SESSION_MIN_SESSIONS or activity >= POST_SESSION_HIGH_ACTIVITY):
        return NeuralResetTrigger(
            should_show=True,
            reason="post-intensive",
            copy="Consolidate cognitive activity before continuing.",
            cta="Start Neural Reset",
        )

    if activity >= HIGH_ACTIVITY and stability < LOW_STABILITY:
        return NeuralResetTrigger(
            should_show=True,
            reason="high-activity-low-stability",
            copy="Your cognitive activity is high, but the network is unstable.",
            cta="Stabilize activity (5 min)",
        )

    return _not_shown()


def reset_phases(total_seconds: int = NEURAL_RESET_CONFIG.default_duration) -> NeuralResetPhases:
    """Split a session into its three phases, keeping the 90/60/60 proportions."""
    config = NEURAL_RESET_CONFIG
    total = clamp(total_seconds, config.min_duration, config.max_duration)
    ratio = total / sum(config.phases.values())
    return NeuralResetPhases(**{name: round_half_up(secs * ratio) for name, secs in config.phases.items()})
