"""
Recovery initialisation and the continuous recovery model.

RRI (Recovery Readiness Init) is a temporary REC estimate from three
onboarding answers. It stands in for REC until real detox/walk data exists,
and for at most 72 hours.

Continuous REC halves every 72 effective hours; night hours (23:00-07:00)
count at 0.2. Detox and walking add to it immediately.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal, Optional

from neuroloop.rules.decay_constants import (
    NIGHT_DECAY_MULTIPLIER,
    NIGHT_END_HOUR,
    NIGHT_START_HOUR,
    REC_GAIN_COEFFICIENT,
    REC_HALF_LIFE_HOURS,
    REC_WALK_WEIGHT,
    RRI_BASE,
    RRI_MAX,
    RRI_MIN,
    RRI_VALIDITY_HOURS,
)
from neuroloop.schemas.baseline import RRIBreakdown, RRIResult
from neuroloop.services.numeric import clamp, round1

SleepHours = Literal["<5h", "5-6h", "6-7h", "7-8h", ">8h"]
DetoxHours = Literal["almost_none", "<30min", "30-60min", "1-2h", ">2h"]
MentalState = Literal["very_tired", "bit_tired", "ok", "clear", "very_clear"]

SLEEP_BONUS = {">8h": 8, "7-8h": 8, "6-7h": 4}
DETOX_BONUS = {">2h": 6, "1-2h": 6, "30-60min": 3}
MENTAL_STATE_BONUS = {"very_clear": 4, "clear": 4, "ok": 2}


def compute_rri(sleep_hours: Optional[str], detox_hours: Optional[str], mental_state: Optional[str]) -> RRIResult:
    """Unknown or missing answers add nothing."""
    sleep_bonus = SLEEP_BONUS.get(sleep_hours, 0)
    detox_bonus = DETOX_BONUS.get(detox_hours, 0)
    mental_bonus = MENTAL_STATE_BONUS.get(mental_state, 0)

    value = int(clamp(RRI_BASE + sleep_bonus + detox_bonus + mental_bonus, RRI_MIN, RRI_MAX))
    return RRIResult(
        value=value,
        breakdown=RRIBreakdown(
            base=RRI_BASE,
            sleep_bonus=sleep_bonus,
            detox_bonus=detox_bonus,
            mental_state_bonus=mental_bonus,
        ),
    )


def is_rri_valid(set_at: Optional[datetime], now: datetime) -> bool:
    if set_at is None:
        return False
    return now - set_at < timedelta(hours=RRI_VALIDITY_HOURS)


def _is_night_hour(hour: int) -> bool:
    if NIGHT_START_HOUR > NIGHT_END_HOUR:
        return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR
    return NIGHT_START_HOUR <= hour < NIGHT_END_HOUR


def effective_decay_hours(start: datetime, end: datetime) -> float:
    """
    Elapsed hours between two timestamps with night hours down-weighted.
    Walks clock-hour boundaries so partial hours are weighted by the hour
    they fall in.
    """
    if end <= start:
        return 0.0

    total = 0.0
    current = start
    while current < end:
        next_hour = current.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        chunk_end = min(next_hour, end)
        hours = (chunk_end - current).total_seconds() / 3600
        weight = NIGHT_DECAY_MULTIPLIER if _is_night_hour(current.hour) else 1.0
        total += hours * weight
        current = chunk_end
    return total


def apply_recovery_decay(rec: float, last_ts: datetime, now: datetime) -> float:
    if rec <= 0:
        return 0.0
    hours = effective_decay_hours(last_ts, now)
    if hours <= 0:
        return rec
    return max(0.0, round1(rec * 2 ** (-hours / REC_HALF_LIFE_HOURS)))


def apply_recovery_action(
    rec: float,
    last_ts: Optional[datetime],
    detox_minutes: float,
    walk_minutes: float,
    now: datetime,
) -> float:
    """Decay up to `now`, then add the gain from this detox/walk session."""
    decayed = apply_recovery_decay(rec, last_ts, now) if last_ts is not None else rec
    gain = REC_GAIN_COEFFICIENT * (max(0.0, detox_minutes) + REC_WALK_WEIGHT * max(0.0, walk_minutes))
    return min(100.0, round1(decayed + gain))


def effective_recovery(
    rec: Optional[float],
    rri: Optional[float],
    rri_set_at: Optional[datetime],
    has_real_data: bool,
    now: datetime,
) -> float:
    """
    REC to feed the engine: real data first, then a still-valid RRI, else 0.
    """
    if has_real_data and rec is not None:
        return rec
    if rri is not None and is_rri_valid(rri_set_at, now):
        return float(rri)
    return 0.0
