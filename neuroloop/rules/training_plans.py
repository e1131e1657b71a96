# neuroloop/rules/training_plans.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

from neuroloop.rules.decay_constants import TC_PLAN_CAPS

TrainingPlanId = Literal["light", "expert", "superhuman"]


@dataclass(frozen=True)
class GatingModifiers:
    s2_threshold_modifier: int   # added to S2 sharpness/readiness minimums
    require_rec_for_s2: int      # floor on the S2 recovery requirement
    insight_max_per_week: int
    s2_max_per_week: int


@dataclass(frozen=True)
class TrainingPlan:
    id: TrainingPlanId
    name: str
    xp_target_week: int          # games only; tasks award no XP
    tc_plan_cap: int
    gating: GatingModifiers


S1_DAILY_MAX = 3
S2_DAILY_MAX = 1


# --- Plan library ---
TRAINING_PLANS: Dict[TrainingPlanId, TrainingPlan] = {
    "light": TrainingPlan(
        id="light",
        name="Light Training",
        xp_target_week=120,
        tc_plan_cap=TC_PLAN_CAPS["light"],
        gating=GatingModifiers(s2_threshold_modifier=3, require_rec_for_s2=50, insight_max_per_week=2, s2_max_per_week=4),
    ),
    "expert": TrainingPlan(
        id="expert",
        name="Expert Training",
        xp_target_week=200,
        tc_plan_cap=TC_PLAN_CAPS["expert"],
        gating=GatingModifiers(s2_threshold_modifier=0, require_rec_for_s2=50, insight_max_per_week=3, s2_max_per_week=7),
    ),
    "superhuman": TrainingPlan(
        id="superhuman",
        name="Superhuman Training",
        xp_target_week=300,
        tc_plan_cap=TC_PLAN_CAPS["superhuman"],
        gating=GatingModifiers(s2_threshold_modifier=-5, require_rec_for_s2=55, insight_max_per_week=4, s2_max_per_week=10),
    ),
}


def get_training_plan(plan_id: str) -> TrainingPlan:
    if plan_id not in TRAINING_PLANS:
        raise ValueError(f"Unknown training plan: {plan_id}")
    return TRAINING_PLANS[plan_id]
