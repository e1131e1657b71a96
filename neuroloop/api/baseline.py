from datetime import date
from typing import Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from neuroloop.schemas.baseline import (
    BaselineComputeResult,
    CalibrationStatus,
    DemographicInput,
    RRIResult,
)
from neuroloop.schemas.cognitive import CognitiveAgeBaseline, CognitiveStates
from neuroloop.services import baseline_engine
from neuroloop.services.recovery_init import DetoxHours, MentalState, SleepHours, compute_rri

router = APIRouter(prefix="/api/baseline", tags=["baseline"])


class BaselineRequest(BaseModel):
    demographics: DemographicInput = Field(default_factory=DemographicInput)
    drill_scores: Optional[Dict[str, float]] = Field(None, description="Calibration drill scores by skill")
    calibration_status: CalibrationStatus = "not_started"
    today: Optional[date] = None


class BaselineResponse(BaseModel):
    result: BaselineComputeResult
    initial_states: CognitiveStates
    cognitive_age_baseline: CognitiveAgeBaseline


class RRIRequest(BaseModel):
    sleep_hours: Optional[SleepHours] = None
    detox_hours: Optional[DetoxHours] = None
    mental_state: Optional[MentalState] = None


@router.post("", response_model=BaselineResponse)
async def compute_baseline(body: BaselineRequest):
    if body.calibration_status == "completed" and body.drill_scores is None:
        raise HTTPException(status_code=400, detail="drill_scores required when calibration is completed")

    calibration = None
    if body.drill_scores is not None:
        calibration = baseline_engine.calibration_from_drill_scores(body.drill_scores)

    result = baseline_engine.compute_baselines(body.demographics, calibration, body.calibration_status, body.today)

    age = body.demographics.age
    if age is None and body.demographics.birth_date is not None:
        age = baseline_engine.compute_age(body.demographics.birth_date, body.today)
    if age is None:
        age = baseline_engine.DEFAULT_AGE

    return BaselineResponse(
        result=result,
        initial_states=baseline_engine.initial_states(result.effective),
        cognitive_age_baseline=baseline_engine.cognitive_age_baseline(result.effective, age),
    )


@router.post("/rri", response_model=RRIResult)
async def recovery_readiness_init(body: RRIRequest):
    return compute_rri(body.sleep_hours, body.detox_hours, body.mental_state)
