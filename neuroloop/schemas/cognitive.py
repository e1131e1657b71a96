"""
Cognitive state models.
Skill values, derived scores and the composite results built from them.
"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from neuroloop.schemas.reasoning import RQResult

Skill = Literal["AE", "RA", "CT", "IN"]
ThinkingSystem = Literal["S1", "S2"]


def _clamp_score(v: float) -> float:
    # Domain violations are clamped, never rejected
    return max(0.0, min(100.0, float(v)))


class CognitiveStates(BaseModel):
    """The four persistent skill variables (0-100)."""
    AE: float = Field(50.0, description="Attentional Efficiency")
    RA: float = Field(50.0, description="Rapid Association")
    CT: float = Field(50.0, description="Critical Thinking")
    IN: float = Field(50.0, description="Insight")

    @field_validator("AE", "RA", "CT", "IN", mode="before")
    @classmethod
    def clamp_skill(cls, v):
        if v is None:
            return 50.0
        return _clamp_score(v)


class DerivedSystemScores(BaseModel):
    S1: float
    S2: float


class BehavioralEngagement(BaseModel):
    weekly_games_xp: float = Field(0.0, ge=0)
    xp_target_week: float = Field(..., description="From training plan")


class SCIResult(BaseModel):
    total: float
    cognitive_performance: float
    behavioral_engagement: float
    recovery_factor: float
    dual_process_balance: float


class CognitiveAgeBaseline(BaseModel):
    baseline_cognitive_age: float
    baseline_AE: float = 50.0
    baseline_RA: float = 50.0
    baseline_CT: float = 50.0
    baseline_IN: float = 50.0


class CognitiveAgeResult(BaseModel):
    cognitive_age: float
    delta: float
    performance_avg: float
    baseline_performance_avg: float


class PhysioReading(BaseModel):
    """Wearable snapshot. Any missing signal disables the physio component."""
    hrv_ms: Optional[float] = None
    resting_hr: Optional[float] = None
    sleep_duration_min: Optional[float] = None
    sleep_efficiency: Optional[float] = None  # 0-1, or percent if > 1


class XPRouting(BaseModel):
    system: ThinkingSystem
    skill: Skill


class DailyMetrics(BaseModel):
    """One day's computation, in mandatory order."""
    states: CognitiveStates
    system_scores: DerivedSystemScores
    recovery: float
    physio_component: Optional[float] = None
    sharpness: float
    readiness: float
    readiness_level: Literal["LOW", "MEDIUM", "HIGH"]
    readiness_hint: str
    cognitive_age: CognitiveAgeResult
    sci: SCIResult
    sci_level: str
    dual_process_level: str
    performance_avg: float
    reasoning_quality: Optional[RQResult] = None
    computed_for: Optional[date] = None
