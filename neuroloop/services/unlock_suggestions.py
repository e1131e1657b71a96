"""
Unlock Suggestion Engine.

Turns the gaps behind a withheld game into at most three concrete actions
and a rough time-to-unlock.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from neuroloop.schemas.gating import GameAvailability
from neuroloop.schemas.suggestions import MetricGap, MetricType, UnlockSuggestion
from neuroloop.services.numeric import round1, round_half_up

MAX_SUGGESTIONS = 3

# S2 capacity = 0.6 * sharpness + 0.4 * readiness
S2_CAPACITY_WEIGHTS: Dict[MetricType, float] = {"sharpness": 0.6, "readiness": 0.4}


def _s(id, action, estimated_time, target_metric, estimated_gain, action_type, priority) -> UnlockSuggestion:
    return UnlockSuggestion(
        id=id,
        action=action,
        estimated_time=estimated_time,
        target_metric=target_metric,
        estimated_gain=estimated_gain,
        action_type=action_type,
        priority=priority,
    )


SUGGESTION_POOLS: Dict[MetricType, List[UnlockSuggestion]] = {
    "sharpness": [
        _s("s1-ae-session", "Complete an S1-AE Focus session", "10-15 min", "sharpness", 12, "game", 1),
        _s("focus-block", "90-minute focused work block (no context switching)", "90 min", "sharpness", 10, "focus", 2),
        _s("breathing-reset", "5-minute breathing reset", "5 min", "sharpness", 5, "rest", 3),
    ],
    "readiness": [
        _s("delay-task", "Delay by 2-4 hours", "2-4 hours", "readiness", 10, "delay", 1),
        _s("short-rest", "Short nap or eyes-closed rest (10-20 min)", "10-20 min", "readiness", 8, "rest", 2),
        _s("low-load-block", "Low-cognitive-load activity for 60 min", "60 min", "readiness", 6, "rest", 3),
    ],
    "recovery": [
        _s("detox-session", "30-60 min Detox session (no input)", "30-60 min", "recovery", 15, "detox", 1),
        _s("walk-session", "20-30 min walk (no screens)", "20-30 min", "recovery", 10, "detox", 2),
        _s("no-screens", "No screens for 45 min", "45 min", "recovery", 8, "detox", 3),
    ],
    "s2Capacity": [
        _s("s2-ct-session", "Complete an S2-CT Reasoning session (if available)", "15-20 min", "s2Capacity", 10, "game", 1),
        _s("build-sharpness-first", "Build Sharpness with S1-AE session first", "10-15 min", "s2Capacity", 8, "game", 2),
        _s("rest-for-s2", "Rest and try again later", "1-2 hours", "s2Capacity", 6, "rest", 3),
    ],
}

METRIC_NAMES: Dict[MetricType, str] = {
    "sharpness": "Sharpness",
    "readiness": "Readiness",
    "recovery": "Recovery",
    "s2Capacity": "S2 Capacity",
}


def _gap(metric: MetricType, current: float, required: float) -> MetricGap:
    return MetricGap(metric=metric, current=current, required=required, gap=round1(required - current))


def calculate_gaps(
    sharpness: float,
    readiness: float,
    recovery: float,
    required_sharpness: Optional[float] = None,
    required_readiness: Optional[float] = None,
    required_recovery: Optional[float] = None,
    required_s2_capacity: Optional[float] = None,
) -> List[MetricGap]:
    """
    One gap per failing requirement, in the order recovery, sharpness,
    readiness. A failing S2 capacity requirement is also pushed down onto
    sharpness and readiness by its formula weights, so the suggestions
    target the inputs that actually move it.
    """
    gaps: List[MetricGap] = []
    current = {"sharpness": sharpness, "readiness": readiness, "recovery": recovery}

    if required_recovery is not None and recovery < required_recovery:
        gaps.append(_gap("recovery", recovery, required_recovery))
    if required_sharpness is not None and sharpness < required_sharpness:
        gaps.append(_gap("sharpness", sharpness, required_sharpness))
    if required_readiness is not None and readiness < required_readiness:
        gaps.append(_gap("readiness", readiness, required_readiness))

    if required_s2_capacity is None:
        return gaps

    s2_capacity = round_half_up(0.6 * sharpness + 0.4 * readiness)
    if s2_capacity >= required_s2_capacity:
        return gaps

    capacity_gap = _gap("s2Capacity", s2_capacity, required_s2_capacity)
    gaps.append(capacity_gap)

    for metric, weight in S2_CAPACITY_WEIGHTS.items():
        if current[metric] >= 100:
            continue
        sub_gap = round1(capacity_gap.gap * weight)
        existing = next((g for g in gaps if g.metric == metric), None)
        if existing is None:
            gaps.append(MetricGap(
                metric=metric,
                current=current[metric],
                required=min(100.0, round1(current[metric] + sub_gap)),
                gap=sub_gap,
            ))
        elif sub_gap > existing.gap:
            index = gaps.index(existing)
            gaps[index] = existing.model_copy(update={
                "gap": sub_gap,
                "required": min(100.0, round1(existing.current + sub_gap)),
            })
    return gaps


def _pick(pool: List[UnlockSuggestion], gap: float) -> UnlockSuggestion:
    # Smallest action that closes the gap; otherwise the biggest available
    sufficient = [s for s in pool if s.estimated_gain >= gap]
    if sufficient:
        return min(sufficient, key=lambda s: (s.estimated_gain, s.priority))
    return max(pool, key=lambda s: (s.estimated_gain, -s.priority))


def generate_suggestions(gaps: Iterable[MetricGap], games_enabled: bool = True) -> List[UnlockSuggestion]:
    chosen: List[UnlockSuggestion] = []
    for gap in sorted(gaps, key=lambda g: g.gap, reverse=True):
        if len(chosen) >= MAX_SUGGESTIONS:
            break
        taken = {s.id for s in chosen}
        pool = [
            s for s in SUGGESTION_POOLS[gap.metric]
            if s.id not in taken and (games_enabled or s.action_type != "game")
        ]
        if pool:
            chosen.append(_pick(pool, gap.gap))
    return chosen


def get_unlock_window(gaps: Iterable[MetricGap]) -> str:
    total = sum(g.gap for g in gaps)
    if total <= 10:
        return "Estimated unlock: within 1-2 hours"
    if total <= 20:
        return "Estimated unlock: later today"
    if total <= 35:
        return "Estimated unlock: tomorrow morning"
    return "Estimated unlock: after sustained recovery"


def format_metric_name(metric: MetricType) -> str:
    return METRIC_NAMES[metric]


def game_unlock_actions(gaps: Iterable[MetricGap]) -> List[str]:
    """Short action labels for a withheld game card. At most three."""
    actions: List[str] = []
    for gap in gaps:
        if gap.metric == "sharpness":
            if gap.gap > 10:
                actions.append("Complete an S1-AE session")
            actions.append("90-min focus block")
        elif gap.metric == "readiness":
            actions.extend(["Delay by 2-4 hours", "Short rest (10-20 min)"])
        elif gap.metric == "recovery":
            actions.extend(["30-min detox session", "20-min walk"])
    return list(dict.fromkeys(actions))[:MAX_SUGGESTIONS]


def gaps_from_availability(availability: GameAvailability) -> List[MetricGap]:
    """Gaps for the below-minimum thresholds of a withheld game."""
    gaps: List[MetricGap] = []
    for threshold in availability.thresholds:
        metric = threshold.metric.lower()
        if metric not in METRIC_NAMES or threshold.current >= threshold.required:
            continue
        gaps.append(_gap(metric, threshold.current, threshold.required))
    return gaps
