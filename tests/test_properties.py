"""
Property-based checks for the scoring engine.

Bounds and guarantees that must hold for every input, not just the worked
examples in the other test modules.
"""

from datetime import date, timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from neuroloop.schemas.cognitive import BehavioralEngagement, CognitiveAgeBaseline, CognitiveStates
from neuroloop.schemas.gating import GamesCaps, GatingVersion
from neuroloop.schemas.suggestions import MetricGap
from neuroloop.services import cognitive_engine as engine
from neuroloop.services import decay, games_gating
from neuroloop.services.unlock_suggestions import generate_suggestions

score = st.floats(min_value=0, max_value=100, allow_nan=False)
minutes = st.floats(min_value=0, max_value=5000, allow_nan=False)
states_st = st.builds(CognitiveStates, AE=score, RA=score, CT=score, IN=score)


@given(st.integers(min_value=0, max_value=100), st.integers(min_value=0, max_value=100))
def test_balance_bounded_and_perfect_only_when_equal(s1, s2):
    balance = engine.dual_process_balance(s1, s2)
    assert 0 <= balance <= 100
    assert (balance == 100) == (s1 == s2)


@given(minutes, minutes, minutes)
def test_recovery_monotone_in_detox_and_capped(detox, extra, walk):
    low = engine.recovery(detox, walk)
    high = engine.recovery(detox + extra, walk)
    assert 0 <= low <= high <= 100


@given(states_st, st.integers(min_value=18, max_value=90), st.one_of(st.none(), score))
def test_cognitive_age_within_fifteen_years(states, age, rq):
    result = engine.cognitive_age(states, CognitiveAgeBaseline(baseline_cognitive_age=age), rq)
    assert age - 15 <= result.cognitive_age <= age + 15


@given(states_st, minutes, st.floats(min_value=0, max_value=500), score)
def test_sci_bounded(states, xp, target, rec):
    result = engine.sci(states, BehavioralEngagement(weekly_games_xp=xp, xp_target_week=target), rec)
    assert 0 <= result.total <= 100


@given(states_st, score, st.sampled_from(list(engine.SharpnessFormula)))
def test_sharpness_and_readiness_bounded(states, rec, formula):
    assert 0 <= engine.sharpness(states, rec, formula) <= 100
    assert 0 <= engine.readiness(states, rec) <= 100


@given(st.integers(min_value=0, max_value=60), st.integers(min_value=0, max_value=15))
def test_readiness_decay_respects_weekly_cap(days, applied):
    assert applied + decay.readiness_decay(days, applied) <= 15


@given(score, st.integers(min_value=0, max_value=60), st.integers(min_value=0, max_value=10))
def test_sci_decay_respects_weekly_cap(rec, days, applied):
    assert applied + decay.sci_decay(rec, days, applied) <= 10


@given(minutes, minutes, st.integers(min_value=0, max_value=10))
def test_dual_process_decay_respects_weekly_cap(s1_xp, s2_xp, applied):
    assert applied + decay.dual_process_decay(s1_xp, s2_xp, applied) <= 10


@given(st.integers(min_value=0, max_value=400), score, score)
def test_skill_decay_never_crosses_baseline(days, current, base):
    today = date(2026, 10, 19)
    points = decay.skill_decay(today - timedelta(days=days), current, base, today)
    assert 0 <= points <= 3
    assert current - points >= min(current, base) - 1e-9


@settings(max_examples=200)
@given(
    score, score, score,
    st.integers(min_value=0, max_value=2),
    st.integers(min_value=0, max_value=3),
    st.integers(min_value=0, max_value=5),
    st.sampled_from(list(GatingVersion)),
)
def test_some_game_playable_while_s1_sessions_remain(sharp, ready, rec, s1_used, s2_used, insight_used, version):
    caps = GamesCaps(s1_daily_used=s1_used, s2_daily_used=s2_used, insight_weekly_used=insight_used)
    result = games_gating.get_all_availability(sharp, ready, rec, caps, version=version)
    assert games_gating.available_count(result) >= 1


gap_st = st.builds(
    MetricGap,
    metric=st.sampled_from(["sharpness", "readiness", "recovery", "s2Capacity"]),
    current=score,
    required=score,
    gap=st.floats(min_value=0, max_value=60),
)


@given(st.lists(gap_st, max_size=10), st.booleans())
def test_at_most_three_distinct_suggestions(gaps, games_enabled):
    suggestions = generate_suggestions(gaps, games_enabled)
    assert len(suggestions) <= 3
    assert len({s.id for s in suggestions}) == len(suggestions)
