from typing import Literal, Optional

from pydantic import BaseModel, Field

NeuralResetReason = Literal["high-activity-low-stability", "post-intensive"]


class NeuralResetInput(BaseModel):
    activity: float = Field(..., description="Behavioral engagement score, 0-100")
    stability: float = Field(..., description="Focus stability (AE), 0-100")
    recent_sessions: int = Field(0, ge=0)
    post_session: bool = False


class NeuralResetTrigger(BaseModel):
    should_show: bool
    reason: Optional[NeuralResetReason] = None
    copy_text: str = Field("", alias="copy")
    cta: str = ""

    model_config = {"populate_by_name": True}


class NeuralResetPhases(BaseModel):
    breathing: int
    anchoring: int
    awareness: int
