"""
NeuroLoop Scoring Engine - Main Application
Cognitive metrics + Decay + Training capacity + Games gating
+ Unlock suggestions + Baselines + Neural Reset
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from neuroloop.api.baseline import router as baseline_router
from neuroloop.api.gating import router as gating_router
from neuroloop.api.metrics import router as metrics_router
from neuroloop.api.neural_reset import router as neural_reset_router
from neuroloop.config import get_engine_config, settings

logger = logging.getLogger("neuroloop")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and report the active engine versions."""
    logging.basicConfig(level=settings.log_level)
    logger.setLevel(settings.log_level)
    logger.info("neuroloop_startup", extra={"env": settings.env, **get_engine_config()})
    yield
    logger.info("neuroloop_shutdown")


app = FastAPI(
    title="NeuroLoop",
    description="""
    Deterministic cognitive scoring engine: derived metrics, decay rules,
    training capacity, games gating with a no-deadlock safety rule,
    unlock suggestions and baseline blending.
    """,
    version="1.7.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.get("/")
def read_root():
    """Service info with active engine versions."""
    return {
        "service": "neuroloop",
        "version": app.version,
        "engine": get_engine_config(),
    }


app.include_router(metrics_router)
app.include_router(gating_router)
app.include_router(baseline_router)
app.include_router(neural_reset_router)
