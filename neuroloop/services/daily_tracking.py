"""
Daily decay bookkeeping.

The caller stores DecayTracking and hands it back each day. These helpers
roll it forward: weekly totals reset on a new Monday week, the low-recovery
streak and the performance-drop window advance at most once per date.
"""

from __future__ import annotations

from datetime import date, timedelta

from neuroloop.rules.decay_constants import (
    COGNITIVE_AGE_PERFORMANCE_DROP_THRESHOLD,
    LOW_RECOVERY_THRESHOLD,
)
from neuroloop.schemas.decay import DecayReport, DecayTracking


def week_start(day: date) -> date:
    """Monday of the week containing `day`."""
    return day - timedelta(days=day.weekday())


def reset_weekly_if_needed(tracking: DecayTracking, today: date) -> DecayTracking:
    monday = week_start(today)
    if tracking.decay_week_start == monday:
        return tracking
    return tracking.model_copy(update={
        "decay_week_start": monday,
        "readiness_decay_applied": 0.0,
        "sci_decay_applied": 0.0,
        "dual_process_decay_applied": 0.0,
    })


def update_low_rec_streak(tracking: DecayTracking, rec: float, today: date) -> DecayTracking:
    if tracking.last_low_rec_check_date == today:
        return tracking
    streak = tracking.consecutive_low_rec_days + 1 if rec < LOW_RECOVERY_THRESHOLD else 0
    return tracking.model_copy(update={
        "consecutive_low_rec_days": streak,
        "last_low_rec_check_date": today,
    })


def update_performance_window(tracking: DecayTracking, performance_avg: float, today: date) -> DecayTracking:
    start = tracking.performance_window_start_value
    if start is None:
        return tracking.model_copy(update={
            "performance_window_start_value": performance_avg,
            "performance_window_start_date": today,
            "consecutive_performance_drop_days": 0,
        })

    if start - performance_avg >= COGNITIVE_AGE_PERFORMANCE_DROP_THRESHOLD:
        return tracking.model_copy(update={
            "consecutive_performance_drop_days": tracking.consecutive_performance_drop_days + 1,
        })

    # Recovered: restart the window at today's level
    return tracking.model_copy(update={
        "performance_window_start_value": performance_avg,
        "performance_window_start_date": today,
        "consecutive_performance_drop_days": 0,
    })


def advance_tracking(tracking: DecayTracking, rec: float, performance_avg: float, today: date) -> DecayTracking:
    """
    Roll tracking forward to `today`. Calling twice for the same date is a no-op
    for the daily counters.
    """
    already_checked = tracking.last_low_rec_check_date == today
    tracking = reset_weekly_if_needed(tracking, today)
    if already_checked:
        return tracking
    tracking = update_performance_window(tracking, performance_avg, today)
    return update_low_rec_streak(tracking, rec, today)


def record_decay_applied(tracking: DecayTracking, report: DecayReport, today: date) -> DecayTracking:
    update = {
        "readiness_decay_applied": tracking.readiness_decay_applied + report.readiness_decay,
        "sci_decay_applied": tracking.sci_decay_applied + report.sci_decay,
        "dual_process_decay_applied": tracking.dual_process_decay_applied + report.dual_process_decay,
    }
    if report.cognitive_age_regression > 0:
        update["last_regression_trigger_date"] = today
    return tracking.model_copy(update=update)
