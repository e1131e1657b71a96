import pytest
from neuroloop.schemas.gating import GamesCaps, GameType, GatingVersion
from neuroloop.schemas.suggestions import MetricGap
from neuroloop.services import games_gating
from neuroloop.services import unlock_suggestions as unlock


def gap(metric: str, size: float, current: float = 50) -> MetricGap:
    return MetricGap(metric=metric, current=current, required=current + size, gap=size)


def test_no_gaps_when_requirements_met():
    assert unlock.calculate_gaps(70, 65, 60, required_sharpness=65, required_readiness=60) == []

def test_direct_gaps_in_fixed_order():
    gaps = unlock.calculate_gaps(50, 40, 45, required_sharpness=65, required_readiness=60, required_recovery=50)
    assert [(g.metric, g.gap) for g in gaps] == [("recovery", 5), ("sharpness", 15), ("readiness", 20)]

def test_s2_capacity_gap_pushed_onto_inputs():
    gaps = unlock.calculate_gaps(60, 50, 70, required_s2_capacity=60)
    assert [(g.metric, g.gap) for g in gaps] == [
        ("s2Capacity", 4), ("sharpness", 2.4), ("readiness", 1.6),
    ]
    sharp = gaps[1]
    assert sharp.current == 60
    assert sharp.required == pytest.approx(62.4)

def test_s2_capacity_merge_keeps_larger_gap():
    gaps = unlock.calculate_gaps(60, 50, 70, required_sharpness=62, required_s2_capacity=60)
    sharpness = [g for g in gaps if g.metric == "sharpness"]
    assert len(sharpness) == 1
    assert sharpness[0].gap == 2.4

def test_s2_capacity_skips_maxed_inputs():
    gaps = unlock.calculate_gaps(100, 0, 70, required_s2_capacity=80)
    assert {g.metric for g in gaps} == {"s2Capacity", "readiness"}

@pytest.mark.parametrize("size,games_enabled,expected", [
    (15, True, "s1-ae-session"),    # nothing closes it: biggest gain
    (15, False, "focus-block"),     # games filtered out
    (8, True, "focus-block"),       # smallest sufficient
    (3, True, "breathing-reset"),
])
def test_pick_for_sharpness_gap(size, games_enabled, expected):
    [suggestion] = unlock.generate_suggestions([gap("sharpness", size)], games_enabled=games_enabled)
    assert suggestion.id == expected

def test_suggestions_capped_and_unique():
    gaps = [gap("sharpness", 15), gap("readiness", 12), gap("recovery", 9), gap("s2Capacity", 4)]
    suggestions = unlock.generate_suggestions(gaps)
    assert len(suggestions) == 3
    assert len({s.id for s in suggestions}) == 3
    # largest gaps first
    assert [s.target_metric for s in suggestions] == ["sharpness", "readiness", "recovery"]

def test_same_metric_gaps_get_distinct_actions():
    suggestions = unlock.generate_suggestions([gap("readiness", 10), gap("readiness", 9)])
    assert [s.id for s in suggestions] == ["delay-task", "short-rest"]

@pytest.mark.parametrize("sizes,expected", [
    ([4], "Estimated unlock: within 1-2 hours"),
    ([10, 5], "Estimated unlock: later today"),
    ([20, 10], "Estimated unlock: tomorrow morning"),
    ([30, 10], "Estimated unlock: after sustained recovery"),
])
def test_unlock_window(sizes, expected):
    assert unlock.get_unlock_window([gap("sharpness", s) for s in sizes]) == expected

def test_format_metric_name():
    assert unlock.format_metric_name("s2Capacity") == "S2 Capacity"
    assert unlock.format_metric_name("recovery") == "Recovery"

def test_game_unlock_actions():
    actions = unlock.game_unlock_actions([gap("sharpness", 15), gap("readiness", 5)])
    assert actions == ["Complete an S1-AE session", "90-min focus block", "Delay by 2-4 hours"]
    assert unlock.game_unlock_actions([gap("sharpness", 5)]) == ["90-min focus block"]

def test_gaps_from_withheld_game():
    availability = games_gating.check_availability(
        GameType.S2_CT, 50, 40, 45, GamesCaps(), version=GatingVersion.V1_7,
    )
    gaps = unlock.gaps_from_availability(availability)
    assert [(g.metric, g.gap) for g in gaps] == [("recovery", 5), ("sharpness", 15), ("readiness", 20)]

def test_gaps_from_availability_ignore_upper_bounds():
    availability = games_gating.check_availability(
        GameType.S1_AE, 80, 60, 60, GamesCaps(), version=GatingVersion.V1_7,
    )
    assert unlock.gaps_from_availability(availability) == []
