"""
Gating API: which games are playable now, and what would unlock the rest.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from neuroloop.rules.training_plans import get_training_plan
from neuroloop.schemas.gating import (
    GameAvailability,
    GamesCaps,
    GameType,
    GatingStatus,
    GatingVersion,
    TrainingPlanModifiers,
)
from neuroloop.schemas.suggestions import MetricGap, UnlockSuggestion
from neuroloop.services import games_gating
from neuroloop.services.unlock_suggestions import (
    calculate_gaps,
    game_unlock_actions,
    gaps_from_availability,
    generate_suggestions,
    get_unlock_window,
)

router = APIRouter(prefix="/api/gating", tags=["gating"])


class AvailabilityRequest(BaseModel):
    sharpness: float = Field(..., ge=0, le=100)
    readiness: float = Field(..., ge=0, le=100)
    recovery: float = Field(..., ge=0, le=100)
    caps: Optional[GamesCaps] = None
    plan_id: Optional[str] = None
    plan_modifiers: Optional[TrainingPlanModifiers] = None
    version: Optional[GatingVersion] = None


class GameGatingResult(BaseModel):
    availability: GameAvailability
    status: GatingStatus
    display_name: str


class AvailabilityResponse(BaseModel):
    games: Dict[GameType, GameGatingResult]
    available_count: int
    safety_rule_active: bool


class SuggestionsRequest(BaseModel):
    sharpness: float = Field(..., ge=0, le=100)
    readiness: float = Field(..., ge=0, le=100)
    recovery: float = Field(..., ge=0, le=100)
    required_sharpness: Optional[float] = None
    required_readiness: Optional[float] = None
    required_recovery: Optional[float] = None
    required_s2_capacity: Optional[float] = None
    availability: Optional[GameAvailability] = Field(
        None, description="Derive gaps from a withheld game instead of explicit requirements"
    )
    games_enabled: bool = True


class SuggestionsResponse(BaseModel):
    gaps: List[MetricGap]
    suggestions: List[UnlockSuggestion]
    unlock_window: str
    quick_actions: List[str]


def _resolve_modifiers(body: AvailabilityRequest) -> Optional[TrainingPlanModifiers]:
    if body.plan_modifiers is not None:
        return body.plan_modifiers
    if body.plan_id is None:
        return None
    return games_gating.plan_modifiers(get_training_plan(body.plan_id))


@router.post("/availability", response_model=AvailabilityResponse)
async def availability(body: AvailabilityRequest):
    try:
        modifiers = _resolve_modifiers(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    caps = body.caps or games_gating.default_caps(modifiers)
    results = games_gating.get_all_availability(
        body.sharpness, body.readiness, body.recovery, caps, modifiers, body.version
    )
    return AvailabilityResponse(
        games={
            game_type: GameGatingResult(
                availability=a,
                status=games_gating.gating_status(a),
                display_name=games_gating.display_name(game_type),
            )
            for game_type, a in results.items()
        },
        available_count=games_gating.available_count(results),
        safety_rule_active=games_gating.is_safety_rule_active(results),
    )


@router.post("/suggestions", response_model=SuggestionsResponse)
async def suggestions(body: SuggestionsRequest):
    if body.availability is not None:
        gaps = gaps_from_availability(body.availability)
    else:
        gaps = calculate_gaps(
            body.sharpness,
            body.readiness,
            body.recovery,
            required_sharpness=body.required_sharpness,
            required_readiness=body.required_readiness,
            required_recovery=body.required_recovery,
            required_s2_capacity=body.required_s2_capacity,
        )
    return SuggestionsResponse(
        gaps=gaps,
        suggestions=generate_suggestions(gaps, body.games_enabled),
        unlock_window=get_unlock_window(gaps),
        quick_actions=game_unlock_actions(gaps),
    )
