from datetime import date, timedelta

import pytest
from neuroloop.schemas.cognitive import CognitiveStates
from neuroloop.schemas.decay import DecayInputs, DecayTracking
from neuroloop.services import decay

TODAY = date(2026, 10, 19)


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


@pytest.mark.parametrize("days,expected", [
    (10, 0), (29, 0), (30, 1), (44, 1), (45, 2), (60, 3), (200, 3),
])
def test_skill_decay_steps(days, expected):
    assert decay.skill_decay(days_ago(days), 80, 50, TODAY) == expected

def test_skill_decay_without_xp_history():
    assert decay.skill_decay(None, 80, 50, TODAY) == 0

def test_skill_decay_never_crosses_baseline():
    assert decay.skill_decay(days_ago(90), 51.5, 50, TODAY) == 1.5
    assert decay.skill_decay(days_ago(90), 45, 50, TODAY) == 0

def test_readiness_decay():
    assert decay.readiness_decay(2) == 0
    assert decay.readiness_decay(3) == 5
    assert decay.readiness_decay(5) == 9
    assert decay.readiness_decay(10) == 15
    assert decay.readiness_decay(3, current_decay_applied=12) == 3
    assert decay.readiness_decay(3, current_decay_applied=15) == 0

def test_sci_decay_stacks_and_caps():
    assert decay.sci_decay(50, 0) == 0
    assert decay.sci_decay(30, 0) == 5
    assert decay.sci_decay(50, 7) == 5
    assert decay.sci_decay(30, 8) == 10
    assert decay.sci_decay(30, 8, current_decay_applied=7) == 3

def test_dual_process_decay():
    assert decay.dual_process_decay(0, 0) == 0
    assert decay.dual_process_decay(15, 10) == 0
    assert decay.dual_process_decay(30, 10) == 5
    assert decay.dual_process_decay(10, 20) == 5
    assert decay.dual_process_decay(0, 10, current_decay_applied=8) == 2

def test_dual_process_decay_one_sided_training():
    # S1 XP 0, S2 XP 10: imbalance without dividing by zero
    assert decay.dual_process_decay(0, 10) == 5
    assert decay.dual_process_decay(10, 0) == 5

def test_cognitive_age_regression():
    assert decay.cognitive_age_regression(60, None, 30) == 0
    assert decay.cognitive_age_regression(60, 70, 21) == 1
    assert decay.cognitive_age_regression(60, 70, 20) == 0
    assert decay.cognitive_age_regression(60.1, 70, 25) == 0

def test_cognitive_age_regression_once_per_period():
    assert decay.cognitive_age_regression(50, 70, 25, TODAY, last_trigger_date=days_ago(10)) == 0
    assert decay.cognitive_age_regression(50, 70, 25, TODAY, last_trigger_date=days_ago(30)) == 1

def test_regression_risk():
    assert decay.regression_risk(0) == "low"
    assert decay.regression_risk(10) == "medium"
    assert decay.regression_risk(21) == "high"

def test_compute_decays_report():
    tracking = DecayTracking(
        consecutive_low_rec_days=4,
        decay_week_start=date(2026, 10, 19),
        readiness_decay_applied=5,
        performance_window_start_value=80,
        consecutive_performance_drop_days=22,
    )
    inputs = DecayInputs(
        today=TODAY,
        states=CognitiveStates(AE=60, RA=52, CT=50, IN=50),
        baseline_states=CognitiveStates(AE=50, RA=50, CT=50, IN=50),
        last_xp_dates={"AE": days_ago(60), "RA": days_ago(60), "CT": days_ago(5)},
        recovery=30,
        days_since_last_training=2,
        weekly_s1_xp=0,
        weekly_s2_xp=40,
        tracking=tracking,
    )
    report = decay.compute_decays(inputs)

    assert report.skill_decay == {"AE": 3, "RA": 2, "CT": 0, "IN": 0}
    assert report.decayed_states.AE == 57
    assert report.decayed_states.RA == 50
    assert report.readiness_decay == 7
    assert report.sci_decay == 5
    assert report.dual_process_decay == 5
    assert report.cognitive_age_regression == 1
    assert report.regression_risk == "high"

    assert report.tracking.readiness_decay_applied == 12
    assert report.tracking.sci_decay_applied == 5
    assert report.tracking.dual_process_decay_applied == 5
    assert report.tracking.last_regression_trigger_date == TODAY
