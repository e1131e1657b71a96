"""
Training Capacity (TC).

Weekly XP the user can absorb, bounded by [TC_FLOOR, plan cap]. Grows with
training scaled by recovery, shrinks after a week of inactivity.
"""

from __future__ import annotations

from typing import Optional

from neuroloop.rules.decay_constants import (
    TC_DECAY_PER_WEEK,
    TC_FLOOR,
    TC_GROWTH_ALPHA,
    TC_INACTIVITY_THRESHOLD_DAYS,
    TC_INITIAL_PLAN_SHARE,
    TC_OPTIMAL_MAX_PERCENT,
    TC_OPTIMAL_MIN_OF_MAX,
    TC_OPTIMAL_MIN_PERCENT,
    TC_UPGRADE_HINT_THRESHOLD,
)
from neuroloop.schemas.cognitive import CognitiveStates
from neuroloop.schemas.training import DynamicOptimalRange
from neuroloop.services.cognitive_engine import system_scores
from neuroloop.services.numeric import clamp, round1, round_half_up


def initialize(states: CognitiveStates, plan_cap: float) -> float:
    scores = system_scores(states)
    initial = round_half_up((scores.S1 + scores.S2) / 2)
    return clamp(initial, TC_FLOOR, round_half_up(TC_INITIAL_PLAN_SHARE * plan_cap))


def recovery_multiplier(avg_rec: float) -> float:
    # REC 0 -> 0.6x, REC 100 -> 1.2x
    return clamp(0.6 + 0.006 * avg_rec, 0.6, 1.2)


def update(tc: float, weekly_xp: float, avg_rec: float, days_since_last_xp: int, plan_cap: float) -> float:
    effective_xp = min(max(0.0, weekly_xp), plan_cap)
    growth = TC_GROWTH_ALPHA * effective_xp * recovery_multiplier(avg_rec)
    decay = TC_DECAY_PER_WEEK if days_since_last_xp >= TC_INACTIVITY_THRESHOLD_DAYS else 0
    return clamp(round1(tc + growth - decay), TC_FLOOR, plan_cap)


def dynamic_optimal_range(tc: float, plan_cap: float, weekly_target: Optional[float] = None) -> DynamicOptimalRange:
    """
    Optimal weekly XP band derived from TC.
    The band never exceeds the plan's weekly target and min never exceeds max.
    """
    max_xp = round_half_up(tc * TC_OPTIMAL_MAX_PERCENT)
    if weekly_target:  # 0 or None means no target
        max_xp = min(max_xp, weekly_target)
    min_xp = min(round_half_up(tc * TC_OPTIMAL_MIN_PERCENT), round_half_up(max_xp * TC_OPTIMAL_MIN_OF_MAX))
    return DynamicOptimalRange(min=min_xp, max=max_xp, cap=plan_cap)


def should_show_upgrade_hint(optimal_range: DynamicOptimalRange) -> bool:
    return optimal_range.max >= optimal_range.cap * TC_UPGRADE_HINT_THRESHOLD
