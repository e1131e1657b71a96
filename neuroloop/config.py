"""
NeuroLoop Scoring Engine - Configuration
Service settings + engine formula/version selection
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    # ==========================================
    # SERVICE SETTINGS
    # ==========================================
    env: str = "dev"  # dev | prod
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # ==========================================
    # ENGINE VERSION FLAGS
    # Two formula generations coexist; the canonical one is the default.
    # ==========================================
    sharpness_formula: Literal["v1_3", "legacy"] = "v1_3"
    gating_version: Literal["v1_7", "v1_3"] = "v1_7"

    # ==========================================
    # ENGINE DEFAULTS
    # ==========================================
    rec_target_minutes: float = 840.0  # 14h/week rolling target
    default_training_plan: Literal["light", "expert", "superhuman"] = "light"

    model_config = SettingsConfigDict(env_file=".env", env_prefix="NEUROLOOP_", extra="ignore")


# Global settings instance
settings = Settings()


@lru_cache()
def get_engine_config():
    """
    Get engine-specific configuration.
    Cached for performance.
    """
    return {
        "sharpness_formula": settings.sharpness_formula,
        "gating_version": settings.gating_version,
        "rec_target_minutes": settings.rec_target_minutes,
        "default_training_plan": settings.default_training_plan,
    }


class ComputationOrder:
    """Mandatory daily computation order for derived metrics."""
    SKILLS: str = "skills"                # AE, RA, CT, IN
    SYSTEM_SCORES: str = "system_scores"  # S1, S2
    RECOVERY: str = "recovery"            # REC from detox/walk
    STATES: str = "states"                # Sharpness, Readiness
    DASHBOARD: str = "dashboard"          # Cognitive Age, SCI, Dual-Process

    ALL: tuple = (SKILLS, SYSTEM_SCORES, RECOVERY, STATES, DASHBOARD)
