"""
Games Gating Engine.

Decides which of the four game types a user may start right now, from
sharpness, readiness, recovery and usage caps. Two passes:

1. evaluate_all: each game type checked on its own thresholds.
2. apply_safety_rule: if everything came back withheld and the S1 daily cap
   is not used up, S1-AE is force-enabled so the user is never locked out.

Threshold tables are versioned. V1_7 is the current table: S1 games no longer
depend on recovery, and S2 games are hard-blocked below REC 40.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from neuroloop.config import settings
from neuroloop.rules.decay_constants import LOW_RECOVERY_THRESHOLD
from neuroloop.rules.training_plans import S1_DAILY_MAX, S2_DAILY_MAX, TrainingPlan
from neuroloop.schemas.gating import (
    GameAvailability,
    GamesCaps,
    GameThreshold,
    GameType,
    GatingStatus,
    GatingVersion,
    TrainingPlanModifiers,
    WithholdReasonCode,
)

logger = logging.getLogger("neuroloop")

DEFAULT_INSIGHT_WEEKLY_MAX = 3
DEFAULT_REQUIRE_REC_FOR_S2 = 50
SUPERHUMAN_PLAN = "superhuman"

S1_RECOVERY_ACTIONS = ("Complete a detox session", "Take a walk")
S2_RECOVERY_ACTIONS = ("Detox session", "No-screens break")
SHARPNESS_ACTIONS = ("S1-AE session first", "Focus block")
DELAY_ACTIONS = ("Delay by 2-4 hours", "Short rest")
INSIGHT_READINESS_ACTIONS = ("Short rest", "Low-demand activity first")

INSIGHT_TOO_HIGH = "Readiness too high for Insight — use S2-CT instead"
SHARPNESS_TOO_HIGH = "Sharpness already high — S1-AE not needed"

PROTECTION_CODES = {
    WithholdReasonCode.RECOVERY_FLOOR,
    WithholdReasonCode.SUPERHUMAN_REC_REQUIRED,
    WithholdReasonCode.CAP_REACHED_DAILY_S1,
    WithholdReasonCode.CAP_REACHED_DAILY_S2,
    WithholdReasonCode.CAP_REACHED_WEEKLY_S2,
    WithholdReasonCode.CAP_REACHED_WEEKLY_IN,
}


@dataclass(frozen=True)
class GameThresholds:
    """Per-game-type policy row. `None` means the check does not apply."""
    min_rec: Optional[float] = None
    min_sharpness: Optional[float] = None
    max_sharpness: Optional[float] = None
    min_readiness: Optional[float] = None
    max_readiness: Optional[float] = None
    recovery_floor: Optional[float] = None     # short-circuits everything below it
    plan_adjusted: bool = False                # S2 rows take the plan modifiers
    recovery_actions: Tuple[str, ...] = S1_RECOVERY_ACTIONS
    readiness_actions: Tuple[str, ...] = DELAY_ACTIONS


_S2_CT = GameThresholds(
    min_rec=50, min_sharpness=65, min_readiness=60,
    plan_adjusted=True, recovery_actions=S2_RECOVERY_ACTIONS,
)
_S2_IN = GameThresholds(
    min_rec=55, min_sharpness=60, min_readiness=50, max_readiness=70,
    plan_adjusted=True, recovery_actions=S2_RECOVERY_ACTIONS,
    readiness_actions=INSIGHT_READINESS_ACTIONS,
)

GATING_TABLES: Dict[GatingVersion, Dict[GameType, GameThresholds]] = {
    GatingVersion.V1_3: {
        GameType.S1_AE: GameThresholds(min_rec=45, max_sharpness=75),
        GameType.S1_RA: GameThresholds(min_rec=50, min_readiness=45),
        GameType.S2_CT: _S2_CT,
        GameType.S2_IN: _S2_IN,
    },
    GatingVersion.V1_7: {
        GameType.S1_AE: GameThresholds(max_sharpness=75),
        GameType.S1_RA: GameThresholds(min_sharpness=40, min_readiness=45),
        GameType.S2_CT: replace(_S2_CT, recovery_floor=LOW_RECOVERY_THRESHOLD),
        GameType.S2_IN: replace(_S2_IN, recovery_floor=LOW_RECOVERY_THRESHOLD),
    },
}

DISPLAY_NAMES = {
    GameType.S1_AE: "Focus (Fast)",
    GameType.S1_RA: "Creativity (Fast)",
    GameType.S2_CT: "Reasoning (Slow)",
    GameType.S2_IN: "Insight (Slow)",
}


def _fmt(value: float) -> str:
    return f"{value:g}"


def _resolve_version(version: Optional[GatingVersion]) -> GatingVersion:
    if version is not None:
        return GatingVersion(version)
    return GatingVersion(settings.gating_version)


def _cap_reason(
    game_type: GameType,
    caps: GamesCaps,
    insight_max: int,
    s2_weekly_max: Optional[int],
) -> Tuple[Optional[WithholdReasonCode], Optional[str]]:
    """First exhausted cap for this game type, daily before weekly."""
    if game_type.system == "S1":
        if caps.s1_daily_used >= caps.s1_daily_max:
            return (WithholdReasonCode.CAP_REACHED_DAILY_S1,
                    f"S1 daily limit reached ({caps.s1_daily_used}/{caps.s1_daily_max})")
        return (None, None)

    if caps.s2_daily_used >= caps.s2_daily_max:
        return (WithholdReasonCode.CAP_REACHED_DAILY_S2,
                f"S2 daily limit reached ({caps.s2_daily_used}/{caps.s2_daily_max})")
    if s2_weekly_max is not None:
        s2_weekly_used = caps.s2_weekly_used or 0
        if s2_weekly_used >= s2_weekly_max:
            return (WithholdReasonCode.CAP_REACHED_WEEKLY_S2,
                    f"S2 weekly limit reached ({s2_weekly_used}/{s2_weekly_max})")
    if game_type is GameType.S2_IN and caps.insight_weekly_used >= insight_max:
        return (WithholdReasonCode.CAP_REACHED_WEEKLY_IN,
                f"Insight weekly limit reached ({caps.insight_weekly_used}/{insight_max})")
    return (None, None)


def _metric_code(game_type: GameType, threshold: GameThreshold) -> WithholdReasonCode:
    if threshold.metric == "Recovery":
        return WithholdReasonCode.RECOVERY_TOO_LOW
    if threshold.metric == "Sharpness":
        if threshold.current > threshold.required:
            return WithholdReasonCode.SHARPNESS_TOO_HIGH
        return WithholdReasonCode.SHARPNESS_TOO_LOW
    if game_type is GameType.S2_IN and threshold.current > threshold.required:
        return WithholdReasonCode.READINESS_OUT_OF_RANGE
    return WithholdReasonCode.READINESS_TOO_LOW


def _dedupe(actions: List[str]) -> List[str]:
    return list(dict.fromkeys(actions))


def check_availability(
    game_type: GameType,
    sharpness: float,
    readiness: float,
    recovery: float,
    caps: GamesCaps,
    plan_modifiers: Optional[TrainingPlanModifiers] = None,
    version: Optional[GatingVersion] = None,
) -> GameAvailability:
    game_type = GameType(game_type)
    rules = GATING_TABLES[_resolve_version(version)][game_type]

    # Hard floor: nothing else is evaluated
    if rules.recovery_floor is not None and recovery < rules.recovery_floor:
        return GameAvailability(
            type=game_type,
            enabled=False,
            withheld_reason=f"Recovery below safety floor ({_fmt(recovery)} < {_fmt(rules.recovery_floor)})",
            reason_code=WithholdReasonCode.RECOVERY_FLOOR,
            thresholds=[GameThreshold(metric="Recovery", current=recovery, required=rules.recovery_floor)],
            unlock_actions=list(rules.recovery_actions),
        )

    modifier = 0.0
    require_rec = DEFAULT_REQUIRE_REC_FOR_S2
    insight_max = caps.insight_weekly_max
    s2_weekly_max = caps.s2_weekly_max
    plan_id = None
    if plan_modifiers is not None:
        plan_id = plan_modifiers.plan_id
        modifier = plan_modifiers.s2_threshold_modifier
        require_rec = plan_modifiers.require_rec_for_s2
        if plan_modifiers.insight_max_per_week is not None:
            insight_max = plan_modifiers.insight_max_per_week
        if plan_modifiers.s2_max_per_week is not None:
            s2_weekly_max = plan_modifiers.s2_max_per_week

    min_rec = rules.min_rec
    min_sharpness = rules.min_sharpness
    min_readiness = rules.min_readiness
    if rules.plan_adjusted:
        min_rec = max(min_rec, require_rec)
        min_sharpness = min_sharpness + modifier
        if rules.max_readiness is None:  # the Insight window is fixed
            min_readiness = min_readiness + modifier

    thresholds: List[GameThreshold] = []
    actions: List[str] = []
    message: Optional[str] = None

    if min_rec is not None and recovery < min_rec:
        thresholds.append(GameThreshold(metric="Recovery", current=recovery, required=min_rec))
        actions.extend(rules.recovery_actions)

    if min_sharpness is not None and sharpness < min_sharpness:
        thresholds.append(GameThreshold(metric="Sharpness", current=sharpness, required=min_sharpness))
        actions.extend(SHARPNESS_ACTIONS)
    if rules.max_sharpness is not None and sharpness > rules.max_sharpness:
        thresholds.append(GameThreshold(metric="Sharpness", current=sharpness, required=rules.max_sharpness))
        message = SHARPNESS_TOO_HIGH

    if min_readiness is not None and readiness < min_readiness:
        thresholds.append(GameThreshold(metric="Readiness", current=readiness, required=min_readiness))
        actions.extend(rules.readiness_actions)
    if rules.max_readiness is not None and readiness > rules.max_readiness:
        thresholds.append(GameThreshold(metric="Readiness", current=readiness, required=rules.max_readiness))
        message = INSIGHT_TOO_HIGH

    cap_code, cap_message = _cap_reason(game_type, caps, insight_max, s2_weekly_max)
    enabled = not thresholds and cap_code is None
    if enabled:
        return GameAvailability(type=game_type, enabled=True)

    # Caps win over metric messages
    if cap_code is not None:
        reason_code, message = cap_code, cap_message
    else:
        if game_type.system == "S2" and plan_id == SUPERHUMAN_PLAN and recovery < require_rec:
            # Plan-level requirement ranks after caps, before metric thresholds
            reason_code = WithholdReasonCode.SUPERHUMAN_REC_REQUIRED
        else:
            reason_code = _metric_code(game_type, thresholds[0])
        if message is None:
            missing = ", ".join(f"{t.metric}: {_fmt(t.current)} < {_fmt(t.required)}" for t in thresholds)
            message = f"Insufficient metrics: {missing}"

    return GameAvailability(
        type=game_type,
        enabled=False,
        withheld_reason=message,
        reason_code=reason_code,
        thresholds=thresholds,
        unlock_actions=_dedupe(actions),
    )


def evaluate_all(
    sharpness: float,
    readiness: float,
    recovery: float,
    caps: GamesCaps,
    plan_modifiers: Optional[TrainingPlanModifiers] = None,
    version: Optional[GatingVersion] = None,
) -> Dict[GameType, GameAvailability]:
    return {
        game_type: check_availability(game_type, sharpness, readiness, recovery, caps, plan_modifiers, version)
        for game_type in GameType
    }


def apply_safety_rule(availability: Dict[GameType, GameAvailability], caps: GamesCaps) -> Dict[GameType, GameAvailability]:
    """
    No-deadlock guarantee: while S1 sessions remain today, at least one game
    is playable.
    """
    if any(a.enabled for a in availability.values()):
        return availability
    if caps.s1_capped:
        return availability

    result = dict(availability)
    result[GameType.S1_AE] = GameAvailability(type=GameType.S1_AE, enabled=True, safety_override=True)
    logger.info("gating_safety_override", extra={
        "withheld": {t.value: a.reason_code.value if a.reason_code else None for t, a in availability.items()},
    })
    return result


def get_all_availability(
    sharpness: float,
    readiness: float,
    recovery: float,
    caps: GamesCaps,
    plan_modifiers: Optional[TrainingPlanModifiers] = None,
    version: Optional[GatingVersion] = None,
) -> Dict[GameType, GameAvailability]:
    availability = evaluate_all(sharpness, readiness, recovery, caps, plan_modifiers, version)
    return apply_safety_rule(availability, caps)


def is_safety_rule_active(availability: Dict[GameType, GameAvailability]) -> bool:
    return any(a.safety_override for a in availability.values())


def available_count(availability: Dict[GameType, GameAvailability]) -> int:
    return sum(1 for a in availability.values() if a.enabled)


def gating_status(availability: GameAvailability) -> GatingStatus:
    if availability.enabled:
        return "ENABLED"
    if availability.reason_code in PROTECTION_CODES:
        return "PROTECTION"
    return "WITHHELD"


def game_type_from_area(area: Optional[str], mode: Optional[str]) -> GameType:
    mode = (mode or "slow").lower()
    area = (area or "reasoning").lower()
    if mode == "fast":
        return GameType.S1_RA if area == "creativity" else GameType.S1_AE
    if area in ("creativity", "insight"):
        return GameType.S2_IN
    return GameType.S2_CT


def display_name(game_type: GameType) -> str:
    return DISPLAY_NAMES[GameType(game_type)]


def default_caps(plan_modifiers: Optional[TrainingPlanModifiers] = None) -> GamesCaps:
    insight_max = DEFAULT_INSIGHT_WEEKLY_MAX
    s2_weekly_max = None
    if plan_modifiers is not None:
        if plan_modifiers.insight_max_per_week is not None:
            insight_max = plan_modifiers.insight_max_per_week
        s2_weekly_max = plan_modifiers.s2_max_per_week
    return GamesCaps(
        s1_daily_max=S1_DAILY_MAX,
        s2_daily_max=S2_DAILY_MAX,
        insight_weekly_max=insight_max,
        s2_weekly_max=s2_weekly_max,
    )


def plan_modifiers(plan: TrainingPlan) -> TrainingPlanModifiers:
    return TrainingPlanModifiers(
        plan_id=plan.id,
        s2_threshold_modifier=plan.gating.s2_threshold_modifier,
        require_rec_for_s2=plan.gating.require_rec_for_s2,
        insight_max_per_week=plan.gating.insight_max_per_week,
        s2_max_per_week=plan.gating.s2_max_per_week,
    )
