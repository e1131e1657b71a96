"""
Metrics API: daily derived metrics, decay evaluation and training capacity.
Stateless; callers send the stored state and persist what comes back.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from neuroloop.config import settings
from neuroloop.rules.training_plans import get_training_plan
from neuroloop.schemas.cognitive import (
    BehavioralEngagement,
    CognitiveAgeBaseline,
    CognitiveStates,
    DailyMetrics,
    PhysioReading,
)
from neuroloop.schemas.decay import DecayInputs, DecayReport
from neuroloop.schemas.reasoning import RQActivity, RQResult
from neuroloop.schemas.training import DynamicOptimalRange
from neuroloop.services import training_capacity
from neuroloop.services.cognitive_engine import SharpnessFormula, performance_avg
from neuroloop.services.daily_metrics import compute_daily_metrics
from neuroloop.services.daily_tracking import advance_tracking
from neuroloop.services.decay import compute_decays
from neuroloop.services.reasoning_quality import reasoning_quality

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


class DailyMetricsRequest(BaseModel):
    states: CognitiveStates
    weekly_detox_min: float = Field(0.0, ge=0)
    weekly_walk_min: float = Field(0.0, ge=0)
    engagement: BehavioralEngagement
    baseline: CognitiveAgeBaseline
    physio: Optional[PhysioReading] = None
    rq: Optional[float] = Field(None, ge=0, le=100)
    rq_activity: Optional[RQActivity] = None
    sharpness_formula: Optional[SharpnessFormula] = None
    readiness_decay: float = Field(0.0, ge=0)
    computed_for: Optional[date] = None


class ReasoningQualityRequest(BaseModel):
    s2: float = Field(..., ge=0, le=100)
    activity: RQActivity


class DecayRequest(DecayInputs):
    advance: bool = Field(True, description="Roll tracking forward to `today` before evaluating")


class TrainingCapacityRequest(BaseModel):
    training_capacity: Optional[float] = Field(None, description="Omit to initialise from states")
    states: Optional[CognitiveStates] = None
    plan_id: str = Field(default_factory=lambda: settings.default_training_plan)
    weekly_xp: float = Field(0.0, ge=0)
    avg_recovery: float = Field(0.0, ge=0, le=100)
    days_since_last_xp: int = Field(0, ge=0)


class TrainingCapacityResponse(BaseModel):
    training_capacity: float
    optimal_range: DynamicOptimalRange
    show_upgrade_hint: bool


@router.post("/daily", response_model=DailyMetrics)
async def daily_metrics(body: DailyMetricsRequest):
    return compute_daily_metrics(
        states=body.states,
        weekly_detox_min=body.weekly_detox_min,
        weekly_walk_min=body.weekly_walk_min,
        engagement=body.engagement,
        baseline=body.baseline,
        physio=body.physio,
        rq=body.rq,
        rq_activity=body.rq_activity,
        sharpness_formula=body.sharpness_formula,
        readiness_decay=body.readiness_decay,
        computed_for=body.computed_for,
    )


@router.post("/reasoning-quality", response_model=RQResult)
async def reasoning_quality_score(body: ReasoningQualityRequest):
    return reasoning_quality(body.s2, body.activity)


@router.post("/decay", response_model=DecayReport)
async def decay(body: DecayRequest):
    inputs = DecayInputs(**body.model_dump(exclude={"advance"}))
    if body.advance:
        tracking = advance_tracking(inputs.tracking, inputs.recovery, performance_avg(inputs.states), inputs.today)
        inputs = inputs.model_copy(update={"tracking": tracking})
    return compute_decays(inputs)


@router.post("/training-capacity", response_model=TrainingCapacityResponse)
async def update_training_capacity(body: TrainingCapacityRequest):
    try:
        plan = get_training_plan(body.plan_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if body.training_capacity is None:
        if body.states is None:
            raise HTTPException(status_code=400, detail="Either training_capacity or states is required")
        tc = training_capacity.initialize(body.states, plan.tc_plan_cap)
    else:
        tc = training_capacity.update(
            body.training_capacity,
            body.weekly_xp,
            body.avg_recovery,
            body.days_since_last_xp,
            plan.tc_plan_cap,
        )

    optimal = training_capacity.dynamic_optimal_range(tc, plan.tc_plan_cap, plan.xp_target_week)
    return TrainingCapacityResponse(
        training_capacity=tc,
        optimal_range=optimal,
        show_upgrade_hint=training_capacity.should_show_upgrade_hint(optimal),
    )
