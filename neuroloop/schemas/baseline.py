from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

CalibrationStatus = Literal["not_started", "skipped", "completed"]


class DemographicInput(BaseModel):
    birth_date: Optional[date] = None
    age: Optional[int] = Field(None, ge=0, le=130)
    education_level: Optional[str] = None
    work_type: Optional[str] = None


class DemographicBaseline(BaseModel):
    center: float
    AE: float
    RA: float
    CT: float
    IN: float


class CalibrationBaseline(BaseModel):
    AE: float
    RA: float
    CT: float
    IN: float


class EffectiveBaseline(BaseModel):
    AE: float
    RA: float
    CT: float
    IN: float
    is_estimated: bool


class BaselineComputeResult(BaseModel):
    demographic: DemographicBaseline
    calibration: Optional[CalibrationBaseline] = None
    effective: EffectiveBaseline
    calibration_status: CalibrationStatus


class RRIBreakdown(BaseModel):
    base: int
    sleep_bonus: int
    detox_bonus: int
    mental_state_bonus: int


class RRIResult(BaseModel):
    """Recovery Readiness Init: onboarding estimate used before real recovery data."""
    value: int
    breakdown: RRIBreakdown
