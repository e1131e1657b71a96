from datetime import datetime, timedelta

import pytest
from neuroloop.schemas.reasoning import RQActivity, TaskCompletion
from neuroloop.services import reasoning_quality as rq

NOW = datetime(2026, 10, 19, 12, 0)


def days_ago(n: float) -> datetime:
    return NOW - timedelta(days=n)


def test_consistency_falls_back_with_few_games():
    assert rq.s2_consistency([90, 10, 90, 10]) == 50.0

def test_consistency_of_steady_scores():
    assert rq.s2_consistency([70] * 5) == 100

def test_consistency_uses_population_stddev():
    # mean 75, stddev 25 -> half the scale
    assert rq.s2_consistency([50, 100] * 5) == pytest.approx(50.0)

def test_consistency_only_sees_last_ten_games():
    assert rq.s2_consistency([0, 0] + [80] * 10) == 100

def test_session_quality_and_delta():
    assert rq.s2_session_quality(100, 100, 100) == pytest.approx(1.0)
    assert rq.s2_session_quality(80, 60, 50) == pytest.approx(0.68)
    assert rq.s2_session_quality(150, -10, 100) == pytest.approx(0.7)
    assert rq.s2_consistency_delta(0.70) == 2
    assert rq.s2_consistency_delta(0.50) == 0
    assert rq.s2_consistency_delta(0.49) == -1

def test_task_contribution_fades_with_age():
    assert rq.task_contribution("book", NOW, NOW) == 20.0
    assert rq.task_contribution("book", days_ago(2), NOW) == 16.0
    assert rq.task_contribution("book", days_ago(1.5), NOW) == 18.0
    assert rq.task_contribution("podcast", days_ago(9), NOW) == 3.6
    assert rq.task_contribution("article", None, NOW) == 15.0

def test_task_priming_window():
    tasks = [
        TaskCompletion(type="book", completed_at=days_ago(8)),
        TaskCompletion(type="book", completed_at=NOW + timedelta(hours=1)),
    ]
    assert rq.task_priming(tasks, NOW) == 0.0

def test_task_priming_sums_recent_tasks():
    tasks = [
        TaskCompletion(type="book", completed_at=NOW),
        TaskCompletion(type="book", completed_at=NOW),
        TaskCompletion(type="article", completed_at=NOW),
    ]
    assert rq.task_priming(tasks, NOW) == 55

def test_task_priming_diminishes_after_five_tasks():
    one = [TaskCompletion(type="podcast", completed_at=days_ago(6))]
    assert rq.task_priming(one, NOW) == pytest.approx(4.8)
    many = [TaskCompletion(type="book", completed_at=NOW)] * 6
    assert rq.task_priming(many, NOW) == 100

def test_decay_needs_two_idle_weeks():
    assert rq.rq_decay(None, None, 50, NOW) == (0.0, 40)
    assert rq.rq_decay(days_ago(13), None, 50, NOW) == (0.0, 40)
    assert rq.rq_decay(days_ago(14), None, 50, NOW)[0] == 2
    assert rq.rq_decay(days_ago(20), None, 50, NOW)[0] == 2
    assert rq.rq_decay(days_ago(21), None, 50, NOW)[0] == 4

def test_decay_counts_from_latest_activity():
    assert rq.rq_decay(days_ago(30), days_ago(3), 50, NOW)[0] == 0
    assert rq.rq_decay(None, None, 5, NOW)[1] == 0

def test_reasoning_quality_blend():
    activity = RQActivity(
        s2_game_scores=[60] * 5,
        task_completions=[TaskCompletion(type="book", completed_at=NOW)],
        last_s2_game_at=NOW,
        last_task_at=NOW,
        as_of=NOW,
    )
    result = rq.reasoning_quality(60, activity)
    assert result.rq == 64.0
    assert (result.s2_core_contribution, result.s2_consistency_contribution, result.task_priming_contribution) == (30.0, 30.0, 4.0)
    assert result.decay == 0
    assert result.is_decaying is False

def test_reasoning_quality_decay_stops_at_floor():
    activity = RQActivity(last_s2_game_at=days_ago(28), as_of=NOW)
    result = rq.reasoning_quality(60, activity)
    # 30 + 15 + 0 - 6 = 39, floored at 60 - 10
    assert result.decay == 6.0
    assert result.is_decaying is True
    assert result.rq == 50.0
