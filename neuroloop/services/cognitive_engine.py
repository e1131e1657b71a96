"""
Cognitive State Engine.

Pure functions over the four skill variables. Daily computation order:
skills -> S1/S2 -> REC -> sharpness/readiness -> cognitive age, SCI, dual-process.
Nothing here reads the clock or keeps state.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from neuroloop.config import settings
from neuroloop.rules.decay_constants import (
    COGNITIVE_AGE_MAX_OFFSET_YEARS,
    LOW_RECOVERY_THRESHOLD,
    REC_TARGET,
    REC_WALK_WEIGHT,
)
from neuroloop.schemas.cognitive import (
    BehavioralEngagement,
    CognitiveAgeBaseline,
    CognitiveAgeResult,
    CognitiveStates,
    DerivedSystemScores,
    PhysioReading,
    SCIResult,
    XPRouting,
)
from neuroloop.services.numeric import clamp, round1


class SharpnessFormula(str, Enum):
    V1_3 = "v1_3"       # 0.6*S1 + 0.4*S2
    LEGACY = "legacy"   # 0.5*S1 + 0.3*AE + 0.2*S2


# --- Derived system scores ---

def system_scores(states: CognitiveStates) -> DerivedSystemScores:
    return DerivedSystemScores(
        S1=(states.AE + states.RA) / 2,
        S2=(states.CT + states.IN) / 2,
    )


# --- Recovery ---

def recovery(weekly_detox_min: float, weekly_walk_min: float, target: float = REC_TARGET) -> float:
    """
    REC from the rolling week's detox and walk minutes.
    Walking counts half. Capped at 100.
    """
    if target <= 0:
        return 0.0
    weighted = max(0.0, weekly_detox_min) + REC_WALK_WEIGHT * max(0.0, weekly_walk_min)
    return round1(min(100.0, weighted / target * 100))


def is_recovery_low(rec: float) -> bool:
    return rec < LOW_RECOVERY_THRESHOLD


# --- Sharpness / Readiness ---

def _resolve_formula(formula: Optional[SharpnessFormula]) -> SharpnessFormula:
    if formula is not None:
        return SharpnessFormula(formula)
    return SharpnessFormula(settings.sharpness_formula)


def sharpness_base(states: CognitiveStates, formula: Optional[SharpnessFormula] = None) -> float:
    scores = system_scores(states)
    if _resolve_formula(formula) is SharpnessFormula.LEGACY:
        return 0.5 * scores.S1 + 0.3 * states.AE + 0.2 * scores.S2
    return 0.6 * scores.S1 + 0.4 * scores.S2


def recovery_modulator(rec: float) -> float:
    return 0.75 + 0.25 * (rec / 100)


def sharpness(states: CognitiveStates, rec: float, formula: Optional[SharpnessFormula] = None) -> float:
    value = sharpness_base(states, formula) * recovery_modulator(rec)
    return clamp(round1(value), 0, 100)


def _normalize(value: float, lo: float, hi: float) -> float:
    return clamp((value - lo) / (hi - lo) * 100, 0, 100)


def physio_component(reading: Optional[PhysioReading]) -> Optional[float]:
    """
    Wearable-derived readiness component (0-100).
    Returns None unless every signal is present.
    """
    if reading is None:
        return None
    if None in (reading.hrv_ms, reading.resting_hr, reading.sleep_duration_min, reading.sleep_efficiency):
        return None

    efficiency = reading.sleep_efficiency
    if efficiency > 1:
        efficiency = efficiency / 100

    hrv = _normalize(reading.hrv_ms, 20, 120)
    hr = 100 - _normalize(reading.resting_hr, 45, 90)  # lower resting HR is better
    duration = _normalize(reading.sleep_duration_min, 300, 540)
    eff = _normalize(efficiency, 0.70, 0.98)
    sleep = 0.6 * duration + 0.4 * eff

    return 0.4 * hrv + 0.2 * hr + 0.4 * sleep


def readiness(states: CognitiveStates, rec: float, physio: Optional[float] = None) -> float:
    scores = system_scores(states)
    if physio is None:
        value = 0.35 * rec + 0.35 * scores.S2 + 0.30 * states.AE
    else:
        cognitive = (
            0.30 * states.CT
            + 0.25 * states.AE
            + 0.20 * states.IN
            + 0.15 * scores.S2
            + 0.10 * scores.S1
        )
        value = 0.5 * physio + 0.5 * cognitive
    return clamp(round1(value), 0, 100)


def readiness_level(score: float) -> str:
    if score < 40:
        return "LOW"
    if score < 70:
        return "MEDIUM"
    return "HIGH"


_READINESS_HINTS = {
    "HIGH": "Great window for deep work and important decisions.",
    "MEDIUM": "You can perform well; consider pacing your high-load tasks.",
    "LOW": "Be careful with high-stakes decisions; prioritize clarity and recovery.",
}


def readiness_hint(level: str) -> str:
    return _READINESS_HINTS[level]


# --- Dual-process ---

def dual_process_balance(s1: float, s2: float) -> float:
    return clamp(100 - abs(s1 - s2), 0, 100)


def dual_process_level(balance: float) -> str:
    if balance >= 85:
        return "elite"
    if balance >= 70:
        return "good"
    return "unbalanced"


# --- SCI ---

def performance_avg(states: CognitiveStates) -> float:
    s2 = system_scores(states).S2
    return (states.AE + states.RA + states.CT + states.IN + s2) / 5


def sci(states: CognitiveStates, engagement: BehavioralEngagement, rec: float) -> SCIResult:
    """
    Synthesized Cognitive Index: 50% performance, 30% engagement, 20% recovery.
    """
    scores = system_scores(states)
    cp = clamp(performance_avg(states), 0, 100)
    if engagement.xp_target_week <= 0:
        be = 0.0
    else:
        be = min(100.0, engagement.weekly_games_xp / engagement.xp_target_week * 100)
    rec = clamp(rec, 0, 100)
    total = 0.5 * cp + 0.3 * be + 0.2 * rec

    return SCIResult(
        total=clamp(round1(total), 0, 100),
        cognitive_performance=round1(cp),
        behavioral_engagement=round1(be),
        recovery_factor=round1(rec),
        dual_process_balance=round1(dual_process_balance(scores.S1, scores.S2)),
    )


def sci_level(score: float) -> str:
    if score >= 85:
        return "elite"
    if score >= 70:
        return "high"
    if score >= 55:
        return "moderate"
    if score >= 40:
        return "developing"
    return "early"


_SCI_STATUS = {
    "elite": "Elite cognitive integration",
    "high": "High cognitive performance",
    "moderate": "Moderate cognitive development",
    "developing": "Developing cognitive foundation",
    "early": "Early cognitive baseline",
}


def sci_status_text(score: float) -> str:
    return _SCI_STATUS[sci_level(score)]


# --- Cognitive age ---

def rq_multiplier(rq: Optional[float]) -> float:
    if rq is None:
        return 0.85
    return clamp(0.85 + 0.15 * (rq / 100), 0.85, 1.0)


def baseline_performance_avg(baseline: CognitiveAgeBaseline) -> float:
    return performance_avg(
        CognitiveStates(
            AE=baseline.baseline_AE,
            RA=baseline.baseline_RA,
            CT=baseline.baseline_CT,
            IN=baseline.baseline_IN,
        )
    )


def cognitive_age(
    states: CognitiveStates,
    baseline: CognitiveAgeBaseline,
    rq: Optional[float] = None,
) -> CognitiveAgeResult:
    """
    Functional age estimate: every 10 points of performance gain over the
    baseline takes one year off, scaled by the RQ multiplier, bounded to
    baseline age +/- 15 years.
    """
    current = performance_avg(states)
    base = baseline_performance_avg(baseline)
    improvement = current - base
    base_age = baseline.baseline_cognitive_age

    age = base_age - (improvement / 10) * rq_multiplier(rq)
    age = clamp(age, base_age - COGNITIVE_AGE_MAX_OFFSET_YEARS, base_age + COGNITIVE_AGE_MAX_OFFSET_YEARS)

    return CognitiveAgeResult(
        cognitive_age=round1(age),
        delta=round1(base_age - age),
        performance_avg=round1(current),
        baseline_performance_avg=round1(base),
    )


# --- XP routing ---

def xp_routing(area: Optional[str], mode: Optional[str]) -> XPRouting:
    """Route one exercise to exactly one skill."""
    area = (area or "reasoning").lower()
    mode = (mode or "slow").lower()

    if mode == "fast":
        if area == "creativity":
            return XPRouting(system="S1", skill="RA")
        return XPRouting(system="S1", skill="AE")

    if area in ("creativity", "insight"):
        return XPRouting(system="S2", skill="IN")
    return XPRouting(system="S2", skill="CT")


def state_update(current: float, earned_xp: float) -> float:
    return clamp(current + earned_xp * 0.5, 0, 100)


def apply_xp(states: CognitiveStates, area: Optional[str], mode: Optional[str], earned_xp: float) -> CognitiveStates:
    routing = xp_routing(area, mode)
    updated = states.model_dump()
    updated[routing.skill] = state_update(updated[routing.skill], earned_xp)
    return CognitiveStates(**updated)
