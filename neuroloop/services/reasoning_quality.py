"""
Reasoning Quality (RQ).

RQ = 0.50 * S2_Core + 0.30 * S2_Consistency + 0.20 * Task_Priming, less an
inactivity decay, floored at S2_Core - 10 and capped at 100.

S2 games reach RQ only through S2_Consistency and tasks only through
Task_Priming. RQ feeds the cognitive-age multiplier.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from neuroloop.schemas.reasoning import RQActivity, RQResult, TaskCompletion
from neuroloop.services.numeric import clamp, round1

S2_GAME_WINDOW = 10
S2_MIN_GAMES = 5
S2_FALLBACK_CONSISTENCY = 50.0
TASK_WINDOW_DAYS = 7
DECAY_INACTIVITY_DAYS = 14
DECAY_PER_WEEK = 2
RQ_FLOOR_BELOW_S2 = 10

TASK_TYPE_WEIGHTS = {
    "podcast": 12,
    "article": 15,
    "book": 20,
}


def s2_consistency(scores: List[float]) -> float:
    """100 minus the normalised spread of the last ten S2 scores (stddev 50 -> 0)."""
    if len(scores) < S2_MIN_GAMES:
        return S2_FALLBACK_CONSISTENCY
    recent = scores[-S2_GAME_WINDOW:]
    mean = sum(recent) / len(recent)
    std_dev = math.sqrt(sum((s - mean) ** 2 for s in recent) / len(recent))
    return clamp(100 - clamp(std_dev / 50 * 100, 0, 100), 0, 100)


def s2_session_quality(accuracy: float, consistency_score: float, coherence_score: float) -> float:
    """Per-session quality in [0, 1]."""
    return (
        0.5 * clamp(accuracy / 100, 0, 1)
        + 0.3 * clamp(consistency_score / 100, 0, 1)
        + 0.2 * clamp(coherence_score / 100, 0, 1)
    )


def s2_consistency_delta(session_quality: float) -> int:
    if session_quality >= 0.70:
        return 2
    if session_quality >= 0.50:
        return 0
    return -1


def task_contribution(task_type: str, completed_at: Optional[datetime], as_of: datetime) -> float:
    """Points one task adds to priming; fades 10% a day down to 30%."""
    base = TASK_TYPE_WEIGHTS.get(task_type, TASK_TYPE_WEIGHTS["podcast"])
    if completed_at is None:
        return float(base)
    days_ago = (as_of - completed_at).days
    recency = max(0.3, 1 - days_ago * 0.1)
    return round1(base * recency)


def task_priming(tasks: Iterable[TaskCompletion], as_of: datetime) -> float:
    window_start = as_of - timedelta(days=TASK_WINDOW_DAYS)
    recent = [t for t in tasks if window_start <= t.completed_at <= as_of]
    if not recent:
        return 0.0

    total = sum(task_contribution(t.type, t.completed_at, as_of) for t in recent)
    # Past five tasks each one counts half toward the ceiling
    effective_tasks = min(len(recent), 5) + max(0, len(recent) - 5) * 0.5
    return clamp(min(total, effective_tasks * 20), 0, 100)


def rq_decay(
    last_s2_game_at: Optional[datetime],
    last_task_at: Optional[datetime],
    s2_core: float,
    as_of: datetime,
) -> Tuple[float, float]:
    """(decay, floor). No activity ever recorded means no decay."""
    floor = max(0.0, s2_core - RQ_FLOOR_BELOW_S2)
    activity = [ts for ts in (last_s2_game_at, last_task_at) if ts is not None]
    if not activity:
        return (0.0, floor)

    days_idle = (as_of - max(activity)).days
    if days_idle < DECAY_INACTIVITY_DAYS:
        return (0.0, floor)
    weeks = (days_idle - DECAY_INACTIVITY_DAYS) // 7 + 1
    return (float(weeks * DECAY_PER_WEEK), floor)


def reasoning_quality(s2: float, activity: RQActivity) -> RQResult:
    consistency = s2_consistency(activity.s2_game_scores)
    priming = task_priming(activity.task_completions, activity.as_of)

    core_part = s2 * 0.50
    consistency_part = consistency * 0.30
    priming_part = priming * 0.20

    decay, floor = rq_decay(activity.last_s2_game_at, activity.last_task_at, s2, activity.as_of)
    value = clamp(core_part + consistency_part + priming_part - decay, floor, 100)

    return RQResult(
        rq=round1(value),
        s2_core=round1(s2),
        s2_consistency=round1(consistency),
        task_priming=round1(priming),
        s2_core_contribution=round1(core_part),
        s2_consistency_contribution=round1(consistency_part),
        task_priming_contribution=round1(priming_part),
        decay=round1(decay),
        is_decaying=decay > 0,
    )
