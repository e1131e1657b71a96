from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

TaskType = Literal["podcast", "book", "article"]


class TaskCompletion(BaseModel):
    type: TaskType
    completed_at: datetime


class RQActivity(BaseModel):
    """Recent reasoning activity; S2 itself comes from the current states."""
    s2_game_scores: List[float] = Field(default_factory=list, description="Recent S2 game scores, oldest first")
    task_completions: List[TaskCompletion] = Field(default_factory=list)
    last_s2_game_at: Optional[datetime] = None
    last_task_at: Optional[datetime] = None
    as_of: datetime


class RQResult(BaseModel):
    """Reasoning Quality: a derived metric, never a skill and never an XP source."""
    rq: float
    s2_core: float
    s2_consistency: float
    task_priming: float
    s2_core_contribution: float
    s2_consistency_contribution: float
    task_priming_contribution: float
    decay: float
    is_decaying: bool
