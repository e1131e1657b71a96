from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class GameType(str, Enum):
    """The four gated activities: two fast (System 1), two slow (System 2)."""
    S1_AE = "S1-AE"   # Focus (Fast)
    S1_RA = "S1-RA"   # Creativity (Fast)
    S2_CT = "S2-CT"   # Reasoning (Slow)
    S2_IN = "S2-IN"   # Insight (Slow)

    @property
    def system(self) -> str:
        return self.value[:2]


class GatingVersion(str, Enum):
    V1_3 = "v1_3"   # legacy: recovery-gated S1
    V1_7 = "v1_7"   # canonical: recovery-independent S1, S2 recovery floor


class WithholdReasonCode(str, Enum):
    RECOVERY_FLOOR = "RECOVERY_FLOOR"
    RECOVERY_TOO_LOW = "RECOVERY_TOO_LOW"
    SUPERHUMAN_REC_REQUIRED = "SUPERHUMAN_REC_REQUIRED"
    SHARPNESS_TOO_LOW = "SHARPNESS_TOO_LOW"
    SHARPNESS_TOO_HIGH = "SHARPNESS_TOO_HIGH"
    READINESS_TOO_LOW = "READINESS_TOO_LOW"
    READINESS_OUT_OF_RANGE = "READINESS_OUT_OF_RANGE"
    CAP_REACHED_DAILY_S1 = "CAP_REACHED_DAILY_S1"
    CAP_REACHED_DAILY_S2 = "CAP_REACHED_DAILY_S2"
    CAP_REACHED_WEEKLY_S2 = "CAP_REACHED_WEEKLY_S2"
    CAP_REACHED_WEEKLY_IN = "CAP_REACHED_WEEKLY_IN"


GatingStatus = Literal["ENABLED", "WITHHELD", "PROTECTION"]


class GameThreshold(BaseModel):
    metric: str
    current: float
    required: float


class GamesCaps(BaseModel):
    s1_daily_used: int = Field(0, ge=0)
    s1_daily_max: int = Field(3, ge=0)
    s2_daily_used: int = Field(0, ge=0)
    s2_daily_max: int = Field(1, ge=0)
    insight_weekly_used: int = Field(0, ge=0)
    insight_weekly_max: int = Field(3, ge=0)
    s2_weekly_used: Optional[int] = Field(None, ge=0)
    s2_weekly_max: Optional[int] = Field(None, ge=0)

    @property
    def s1_capped(self) -> bool:
        return self.s1_daily_used >= self.s1_daily_max


class TrainingPlanModifiers(BaseModel):
    plan_id: Optional[str] = None
    s2_threshold_modifier: float = 0
    require_rec_for_s2: float = 50
    insight_max_per_week: Optional[int] = None
    s2_max_per_week: Optional[int] = None


class GameAvailability(BaseModel):
    type: GameType
    enabled: bool
    withheld_reason: Optional[str] = None
    reason_code: Optional[WithholdReasonCode] = None
    thresholds: List[GameThreshold] = Field(default_factory=list)
    unlock_actions: List[str] = Field(default_factory=list)
    safety_override: bool = False  # force-enabled by the no-deadlock rule
