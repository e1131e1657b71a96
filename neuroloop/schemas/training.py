from pydantic import BaseModel


class DynamicOptimalRange(BaseModel):
    """Weekly XP band derived from training capacity."""
    min: float
    max: float
    cap: float
