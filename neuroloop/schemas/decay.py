from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from neuroloop.schemas.cognitive import CognitiveStates

RegressionRisk = Literal["low", "medium", "high"]


class DecayTracking(BaseModel):
    """
    Counters the caller persists between daily ticks.
    Read and written with read-modify-write consistency by the caller.
    """
    consecutive_low_rec_days: int = Field(0, ge=0)
    last_low_rec_check_date: Optional[date] = None

    decay_week_start: Optional[date] = None  # Monday of the week the totals belong to
    readiness_decay_applied: float = Field(0.0, ge=0)
    sci_decay_applied: float = Field(0.0, ge=0)
    dual_process_decay_applied: float = Field(0.0, ge=0)

    performance_window_start_value: Optional[float] = None
    performance_window_start_date: Optional[date] = None
    consecutive_performance_drop_days: int = Field(0, ge=0)
    last_regression_trigger_date: Optional[date] = None


class DecayInputs(BaseModel):
    today: date
    states: CognitiveStates
    baseline_states: CognitiveStates
    last_xp_dates: dict[str, Optional[date]] = Field(
        default_factory=dict, description="Per-skill last XP date, keys AE/RA/CT/IN"
    )
    recovery: float
    days_since_last_training: int = Field(0, ge=0)
    weekly_s1_xp: float = Field(0.0, ge=0)
    weekly_s2_xp: float = Field(0.0, ge=0)
    tracking: DecayTracking = Field(default_factory=DecayTracking)


class DecayReport(BaseModel):
    skill_decay: dict[str, float]
    readiness_decay: float
    sci_decay: float
    dual_process_decay: float
    cognitive_age_regression: float
    regression_risk: RegressionRisk
    decayed_states: CognitiveStates
    tracking: DecayTracking
