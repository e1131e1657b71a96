"""
Baseline Engine.

Two sources of a starting skill profile:
- demographic: a single center value from age, education and work type,
  bounded to [44, 56] and copied into all four skills;
- calibration: per-skill drill scores.

Once calibration is completed the effective baseline is a 70/30 blend of
calibration and demographics. Until then it is the demographic estimate.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Optional

from neuroloop.schemas.baseline import (
    BaselineComputeResult,
    CalibrationBaseline,
    CalibrationStatus,
    DemographicBaseline,
    DemographicInput,
    EffectiveBaseline,
)
from neuroloop.schemas.cognitive import CognitiveAgeBaseline, CognitiveStates
from neuroloop.services.numeric import clamp, round_half_up

CALIBRATION_LAMBDA = 0.70
DEMO_CENTER_MIN = 44
DEMO_CENTER_MAX = 56
DEFAULT_AGE = 35

SKILLS = ("AE", "RA", "CT", "IN")

_WORK_PLUS_ONE = ("technical", "student", "academic", "phd", "knowledge", "consulting", "analyst")


def compute_age(birth_date: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def age_adjustment(age: int) -> int:
    if age <= 30:
        return 2
    if age <= 40:
        return 1
    if age <= 55:
        return 0
    return -2


def education_adjustment(education_level: Optional[str]) -> int:
    if not education_level:
        return 0
    level = education_level.lower()
    if level == "high_school" or "high school" in level:
        return -1
    if "bachelor" in level:
        return 0
    if "master" in level:
        return 1
    if "phd" in level or "doctorate" in level:
        return 2
    return 0


def work_adjustment(work_type: Optional[str]) -> int:
    if not work_type:
        return 0
    kind = work_type.lower()
    return 1 if any(k in kind for k in _WORK_PLUS_ONE) else 0


def demographic_baseline(data: DemographicInput, today: Optional[date] = None) -> DemographicBaseline:
    age = data.age
    if age is None and data.birth_date is not None:
        age = compute_age(data.birth_date, today)
    if age is None:
        age = DEFAULT_AGE

    raw = 50 + age_adjustment(age) + education_adjustment(data.education_level) + work_adjustment(data.work_type)
    center = clamp(raw, DEMO_CENTER_MIN, DEMO_CENTER_MAX)
    return DemographicBaseline(center=center, AE=center, RA=center, CT=center, IN=center)


def blend_calibration(demographic: DemographicBaseline, calibration: Optional[CalibrationBaseline]) -> Dict[str, int]:
    if calibration is None:
        raise ValueError("Calibration baseline is required to blend")
    demo = demographic.model_dump()
    cal = calibration.model_dump()
    return {
        s: round_half_up(CALIBRATION_LAMBDA * cal[s] + (1 - CALIBRATION_LAMBDA) * demo[s])
        for s in SKILLS
    }


def effective_baseline(
    demographic: DemographicBaseline,
    calibration: Optional[CalibrationBaseline],
    status: CalibrationStatus,
) -> EffectiveBaseline:
    if status != "completed" or calibration is None:
        return EffectiveBaseline(
            AE=demographic.AE, RA=demographic.RA, CT=demographic.CT, IN=demographic.IN,
            is_estimated=True,
        )
    return EffectiveBaseline(**blend_calibration(demographic, calibration), is_estimated=False)


def calibration_from_drill_scores(scores: Dict[str, float]) -> CalibrationBaseline:
    return CalibrationBaseline(**{s: clamp(float(scores.get(s, 0)), 0, 100) for s in SKILLS})


def compute_baselines(
    data: DemographicInput,
    calibration: Optional[CalibrationBaseline],
    status: CalibrationStatus,
    today: Optional[date] = None,
) -> BaselineComputeResult:
    demographic = demographic_baseline(data, today)
    return BaselineComputeResult(
        demographic=demographic,
        calibration=calibration,
        effective=effective_baseline(demographic, calibration, status),
        calibration_status=status,
    )


def initial_states(effective: EffectiveBaseline) -> CognitiveStates:
    return CognitiveStates(AE=effective.AE, RA=effective.RA, CT=effective.CT, IN=effective.IN)


def cognitive_age_baseline(effective: EffectiveBaseline, chronological_age: float) -> CognitiveAgeBaseline:
    """Captured once, at onboarding; later estimates are measured against it."""
    return CognitiveAgeBaseline(
        baseline_cognitive_age=chronological_age,
        baseline_AE=effective.AE,
        baseline_RA=effective.RA,
        baseline_CT=effective.CT,
        baseline_IN=effective.IN,
    )
