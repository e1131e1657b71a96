import pytest
from neuroloop.schemas.cognitive import CognitiveStates
from neuroloop.schemas.training import DynamicOptimalRange
from neuroloop.services import training_capacity as tc


def uniform(value: float) -> CognitiveStates:
    return CognitiveStates(AE=value, RA=value, CT=value, IN=value)


def test_initialize_bounds():
    assert tc.initialize(uniform(50), 100) == 50
    assert tc.initialize(uniform(90), 100) == 60   # 60% of plan cap
    assert tc.initialize(uniform(10), 100) == 30   # floor

def test_recovery_multiplier():
    assert tc.recovery_multiplier(0) == pytest.approx(0.6)
    assert tc.recovery_multiplier(50) == pytest.approx(0.9)
    assert tc.recovery_multiplier(100) == pytest.approx(1.2)
    assert tc.recovery_multiplier(150) == pytest.approx(1.2)

def test_update_growth():
    assert tc.update(50, 100, 100, 0, 100) == 57.2

def test_update_xp_counted_up_to_plan_cap():
    assert tc.update(50, 500, 50, 0, 100) == tc.update(50, 100, 50, 0, 100)

def test_update_inactivity_decay_and_floor():
    assert tc.update(50, 0, 50, 7, 100) == 47.0
    assert tc.update(31, 0, 0, 10, 100) == 30

def test_update_capped_at_plan_cap():
    assert tc.update(99, 300, 100, 0, 100) == 100

def test_dynamic_optimal_range():
    r = tc.dynamic_optimal_range(80, 160)
    assert (r.min, r.max, r.cap) == (48, 68, 160)

def test_dynamic_optimal_range_respects_weekly_target():
    r = tc.dynamic_optimal_range(100, 160, weekly_target=50)
    assert r.max == 50
    assert r.min == 35
    assert r.min <= r.max

def test_upgrade_hint():
    assert tc.should_show_upgrade_hint(DynamicOptimalRange(min=100, max=145, cap=160)) is True
    assert tc.should_show_upgrade_hint(DynamicOptimalRange(min=60, max=85, cap=160)) is False

def test_dynamic_optimal_range_ignores_zero_weekly_target():
    r = tc.dynamic_optimal_range(100, 160, weekly_target=0)
    assert r.max == 85
    assert 0 < r.min <= r.max
    assert tc.dynamic_optimal_range(100, 160, weekly_target=None) == r
