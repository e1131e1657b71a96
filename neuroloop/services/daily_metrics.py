import logging
from datetime import date
from typing import Optional

from neuroloop.config import ComputationOrder, settings
from neuroloop.schemas.cognitive import (
    BehavioralEngagement,
    CognitiveAgeBaseline,
    CognitiveStates,
    DailyMetrics,
    PhysioReading,
)
from neuroloop.schemas.reasoning import RQActivity
from neuroloop.services import cognitive_engine as engine
from neuroloop.services.numeric import round1
from neuroloop.services.reasoning_quality import reasoning_quality

logger = logging.getLogger("neuroloop")


def compute_daily_metrics(
    states: CognitiveStates,
    weekly_detox_min: float,
    weekly_walk_min: float,
    engagement: BehavioralEngagement,
    baseline: CognitiveAgeBaseline,
    physio: Optional[PhysioReading] = None,
    rq: Optional[float] = None,
    rq_activity: Optional[RQActivity] = None,
    rec_target: Optional[float] = None,
    sharpness_formula: Optional[engine.SharpnessFormula] = None,
    readiness_decay: float = 0.0,
    computed_for: Optional[date] = None,
) -> DailyMetrics:
    """
    Run one day's metrics in the mandatory order:
    skills -> S1/S2 -> REC -> sharpness/readiness -> age, SCI, dual-process.

    An explicit `rq` wins; otherwise RQ is derived from `rq_activity` when given.
    """
    if rec_target is None:
        rec_target = settings.rec_target_minutes

    # 1-2. skills are given; system scores derive from them
    scores = engine.system_scores(states)

    # 3. recovery
    rec = engine.recovery(weekly_detox_min, weekly_walk_min, rec_target)

    # 4. states
    physio_value = engine.physio_component(physio)
    sharp = engine.sharpness(states, rec, sharpness_formula)
    ready = engine.readiness(states, rec, physio_value)
    if readiness_decay > 0:
        ready = max(0.0, round1(ready - readiness_decay))
    level = engine.readiness_level(ready)

    # 5. dashboard
    rq_result = None
    if rq is None and rq_activity is not None:
        rq_result = reasoning_quality(scores.S2, rq_activity)
        rq = rq_result.rq
    age = engine.cognitive_age(states, baseline, rq)
    sci = engine.sci(states, engagement, rec)
    balance = engine.dual_process_balance(scores.S1, scores.S2)

    logger.info("daily_metrics_computed", extra={
        "order": ComputationOrder.ALL,
        "sharpness": sharp,
        "readiness": ready,
        "recovery": rec,
    })

    return DailyMetrics(
        states=states,
        system_scores=scores,
        recovery=rec,
        physio_component=None if physio_value is None else round1(physio_value),
        sharpness=sharp,
        readiness=ready,
        readiness_level=level,
        readiness_hint=engine.readiness_hint(level),
        cognitive_age=age,
        sci=sci,
        sci_level=engine.sci_level(sci.total),
        dual_process_level=engine.dual_process_level(balance),
        performance_avg=round1(engine.performance_avg(states)),
        reasoning_quality=rq_result,
        computed_for=computed_for,
    )
