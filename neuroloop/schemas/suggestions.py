from typing import Literal

from pydantic import BaseModel, Field

MetricType = Literal["sharpness", "readiness", "recovery", "s2Capacity"]
ActionType = Literal["focus", "detox", "rest", "delay", "game"]


class MetricGap(BaseModel):
    metric: MetricType
    current: float
    required: float
    gap: float = Field(..., ge=0)


class UnlockSuggestion(BaseModel):
    id: str
    action: str
    estimated_time: str
    target_metric: MetricType
    estimated_gain: float
    action_type: ActionType
    priority: int = Field(..., ge=1, description="1 = highest")

    model_config = {"frozen": True}
