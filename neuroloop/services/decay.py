"""
Decay rules.

Five independent rules, each pure. Weekly caps are honoured against the
amount already applied this week, which the caller passes in explicitly.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from neuroloop.rules.decay_constants import (
    COGNITIVE_AGE_DROP_DAYS_THRESHOLD,
    COGNITIVE_AGE_MAX_INCREASE_PER_MONTH,
    COGNITIVE_AGE_PERFORMANCE_DROP_THRESHOLD,
    COGNITIVE_AGE_TRACKING_PERIOD_DAYS,
    DUAL_PROCESS_DECAY_MAX_WEEKLY,
    DUAL_PROCESS_IMBALANCE_DECAY,
    DUAL_PROCESS_IMBALANCE_RATIO,
    LOW_RECOVERY_THRESHOLD,
    READINESS_DECAY_INITIAL_POINTS,
    READINESS_DECAY_MAX_WEEKLY,
    READINESS_DECAY_PER_DAY_POINTS,
    READINESS_DECAY_TRIGGER_DAYS,
    REGRESSION_RISK_MEDIUM_DAYS,
    SCI_DECAY_MAX_WEEKLY,
    SCI_LOW_RECOVERY_DECAY,
    SCI_NO_TRAINING_DECAY,
    SCI_NO_TRAINING_THRESHOLD_DAYS,
    SKILL_DECAY_BASE_POINTS,
    SKILL_DECAY_INTERVAL_DAYS,
    SKILL_DECAY_INTERVAL_POINTS,
    SKILL_DECAY_MAX_POINTS,
    SKILL_DECAY_THRESHOLD_DAYS,
)
from neuroloop.schemas.decay import DecayInputs, DecayReport, RegressionRisk
from neuroloop.services.cognitive_engine import performance_avg
from neuroloop.services.daily_tracking import record_decay_applied

logger = logging.getLogger("neuroloop")

SKILLS = ("AE", "RA", "CT", "IN")


def _remaining(weekly_max: float, applied: float) -> float:
    return max(0.0, weekly_max - applied)


def skill_decay(last_xp_date: Optional[date], current: float, baseline: float, today: date) -> float:
    """
    Inactivity decay for one skill. Never drops the skill below its baseline.
    """
    if last_xp_date is None:
        return 0.0
    days = (today - last_xp_date).days
    if days < SKILL_DECAY_THRESHOLD_DAYS:
        return 0.0

    steps = math.floor((days - SKILL_DECAY_THRESHOLD_DAYS) / SKILL_DECAY_INTERVAL_DAYS)
    points = min(SKILL_DECAY_BASE_POINTS + steps * SKILL_DECAY_INTERVAL_POINTS, SKILL_DECAY_MAX_POINTS)
    return float(min(points, max(0.0, current - baseline)))


def readiness_decay(consecutive_low_rec_days: int, current_decay_applied: float = 0.0) -> float:
    if consecutive_low_rec_days < READINESS_DECAY_TRIGGER_DAYS:
        return 0.0
    extra_days = consecutive_low_rec_days - READINESS_DECAY_TRIGGER_DAYS
    decay = READINESS_DECAY_INITIAL_POINTS + extra_days * READINESS_DECAY_PER_DAY_POINTS
    return float(min(decay, _remaining(READINESS_DECAY_MAX_WEEKLY, current_decay_applied)))


def sci_decay(rec: float, days_since_last_training: int, current_decay_applied: float = 0.0) -> float:
    decay = 0.0
    if rec < LOW_RECOVERY_THRESHOLD:
        decay += SCI_LOW_RECOVERY_DECAY
    if days_since_last_training >= SCI_NO_TRAINING_THRESHOLD_DAYS:
        decay += SCI_NO_TRAINING_DECAY
    return min(decay, _remaining(SCI_DECAY_MAX_WEEKLY, current_decay_applied))


def dual_process_decay(weekly_s1_xp: float, weekly_s2_xp: float, current_decay_applied: float = 0.0) -> float:
    if weekly_s1_xp == 0 and weekly_s2_xp == 0:
        return 0.0

    remaining = _remaining(DUAL_PROCESS_DECAY_MAX_WEEKLY, current_decay_applied)
    # One-sided training is maximally imbalanced; no ratio needed
    if weekly_s1_xp == 0 or weekly_s2_xp == 0:
        return float(min(DUAL_PROCESS_IMBALANCE_DECAY, remaining))

    ratio = weekly_s1_xp / weekly_s2_xp
    if ratio >= DUAL_PROCESS_IMBALANCE_RATIO or ratio <= 1 / DUAL_PROCESS_IMBALANCE_RATIO:
        return float(min(DUAL_PROCESS_IMBALANCE_DECAY, remaining))
    return 0.0


def cognitive_age_regression(
    current_avg: float,
    window_start_avg: Optional[float],
    consecutive_drop_days: int,
    today: Optional[date] = None,
    last_trigger_date: Optional[date] = None,
) -> float:
    """
    +1 year when performance has sat 10+ points below the window start for
    21+ days. At most once per 30-day period.
    """
    if window_start_avg is None:
        return 0.0
    if window_start_avg - current_avg < COGNITIVE_AGE_PERFORMANCE_DROP_THRESHOLD:
        return 0.0
    if consecutive_drop_days < COGNITIVE_AGE_DROP_DAYS_THRESHOLD:
        return 0.0
    if today is not None and last_trigger_date is not None:
        if (today - last_trigger_date).days < COGNITIVE_AGE_TRACKING_PERIOD_DAYS:
            return 0.0
    return float(COGNITIVE_AGE_MAX_INCREASE_PER_MONTH)


def regression_risk(streak_days: int) -> RegressionRisk:
    if streak_days >= COGNITIVE_AGE_DROP_DAYS_THRESHOLD:
        return "high"
    if streak_days >= REGRESSION_RISK_MEDIUM_DAYS:
        return "medium"
    return "low"


def compute_decays(inputs: DecayInputs) -> DecayReport:
    """
    Evaluate every decay rule for one day.

    `inputs.tracking` must already be rolled forward to `inputs.today`
    (see daily_tracking.advance_tracking). The returned tracking has this
    report's amounts added to the weekly totals.
    """
    tracking = inputs.tracking
    states = inputs.states.model_dump()
    baseline = inputs.baseline_states.model_dump()

    skill = {
        s: skill_decay(inputs.last_xp_dates.get(s), states[s], baseline[s], inputs.today)
        for s in SKILLS
    }
    decayed = {s: states[s] - skill[s] for s in SKILLS}

    regression = cognitive_age_regression(
        current_avg=performance_avg(inputs.states),
        window_start_avg=tracking.performance_window_start_value,
        consecutive_drop_days=tracking.consecutive_performance_drop_days,
        today=inputs.today,
        last_trigger_date=tracking.last_regression_trigger_date,
    )

    report = DecayReport(
        skill_decay=skill,
        readiness_decay=readiness_decay(tracking.consecutive_low_rec_days, tracking.readiness_decay_applied),
        sci_decay=sci_decay(inputs.recovery, inputs.days_since_last_training, tracking.sci_decay_applied),
        dual_process_decay=dual_process_decay(
            inputs.weekly_s1_xp, inputs.weekly_s2_xp, tracking.dual_process_decay_applied
        ),
        cognitive_age_regression=regression,
        regression_risk=regression_risk(tracking.consecutive_performance_drop_days),
        decayed_states=inputs.states.model_copy(update=decayed),
        tracking=tracking,
    )
    report.tracking = record_decay_applied(tracking, report, inputs.today)

    if regression > 0:
        logger.info("cognitive_age_regression_triggered", extra={
            "drop_days": tracking.consecutive_performance_drop_days,
            "today": inputs.today.isoformat(),
        })
    return report
