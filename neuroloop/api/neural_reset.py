from fastapi import APIRouter

from neuroloop.schemas.neural_reset import NeuralResetInput, NeuralResetPhases, NeuralResetTrigger
from neuroloop.services.neural_reset import NEURAL_RESET_CONFIG, evaluate_trigger, reset_phases

router = APIRouter(prefix="/api/neural-reset", tags=["neural-reset"])


@router.post("", response_model=NeuralResetTrigger)
async def neural_reset_trigger(body: NeuralResetInput):
    return evaluate_trigger(body.activity, body.stability, body.recent_sessions, body.post_session)


@router.get("/phases", response_model=NeuralResetPhases)
async def neural_reset_phases(total_seconds: int = NEURAL_RESET_CONFIG.default_duration):
    return reset_phases(total_seconds)
