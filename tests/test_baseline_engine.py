from datetime import date

import pytest
from neuroloop.schemas.baseline import CalibrationBaseline, DemographicInput
from neuroloop.services import baseline_engine as baseline

TODAY = date(2026, 10, 19)


def test_compute_age_before_and_after_birthday():
    assert baseline.compute_age(date(1990, 10, 20), TODAY) == 35
    assert baseline.compute_age(date(1990, 10, 19), TODAY) == 36

@pytest.mark.parametrize("age,expected", [(25, 2), (30, 2), (31, 1), (40, 1), (41, 0), (55, 0), (56, -2)])
def test_age_adjustment(age, expected):
    assert baseline.age_adjustment(age) == expected

@pytest.mark.parametrize("level,expected", [
    (None, 0), ("high_school", -1), ("High School", -1), ("Bachelor's", 0),
    ("Master's", 1), ("PhD", 2), ("Doctorate", 2), ("Other", 0),
])
def test_education_adjustment(level, expected):
    assert baseline.education_adjustment(level) == expected

def test_work_adjustment():
    assert baseline.work_adjustment("Technical") == 1
    assert baseline.work_adjustment("Management consulting") == 1
    assert baseline.work_adjustment("Retail") == 0
    assert baseline.work_adjustment(None) == 0

def test_demographic_baseline_profiles():
    strong = baseline.demographic_baseline(DemographicInput(age=28, education_level="Master's", work_type="Technical"))
    assert strong.center == 54
    assert (strong.AE, strong.RA, strong.CT, strong.IN) == (54, 54, 54, 54)

    older = baseline.demographic_baseline(DemographicInput(age=60, education_level="high_school"))
    assert older.center == 47

def test_demographic_baseline_defaults_age():
    assert baseline.demographic_baseline(DemographicInput()).center == 51

def test_demographic_baseline_from_birth_date():
    data = DemographicInput(birth_date=date(2000, 1, 1))
    assert baseline.demographic_baseline(data, TODAY).center == 52

def test_blend_requires_calibration():
    demo = baseline.demographic_baseline(DemographicInput(age=45))
    with pytest.raises(ValueError):
        baseline.blend_calibration(demo, None)

def test_effective_baseline_blends_completed_calibration():
    demo = baseline.demographic_baseline(DemographicInput(age=45))  # center 50
    cal = CalibrationBaseline(AE=80, RA=60, CT=60, IN=60)
    effective = baseline.effective_baseline(demo, cal, "completed")
    assert effective.is_estimated is False
    assert (effective.AE, effective.RA, effective.CT, effective.IN) == (71, 57, 57, 57)

@pytest.mark.parametrize("status", ["not_started", "skipped"])
def test_effective_baseline_is_demographic_until_completed(status):
    demo = baseline.demographic_baseline(DemographicInput(age=45))
    cal = CalibrationBaseline(AE=80, RA=60, CT=60, IN=60)
    effective = baseline.effective_baseline(demo, cal, status)
    assert effective.is_estimated is True
    assert effective.AE == 50

def test_calibration_from_drill_scores_clamps_and_fills():
    cal = baseline.calibration_from_drill_scores({"AE": 120, "RA": 40, "CT": -3})
    assert (cal.AE, cal.RA, cal.CT, cal.IN) == (100, 40, 0, 0)

def test_compute_baselines_and_initial_states():
    result = baseline.compute_baselines(
        DemographicInput(age=45),
        CalibrationBaseline(AE=80, RA=60, CT=60, IN=60),
        "completed",
    )
    assert result.calibration_status == "completed"
    states = baseline.initial_states(result.effective)
    assert (states.AE, states.RA) == (71, 57)

def test_cognitive_age_baseline_snapshot():
    effective = baseline.effective_baseline(
        baseline.demographic_baseline(DemographicInput(age=45)), None, "skipped",
    )
    snapshot = baseline.cognitive_age_baseline(effective, 45)
    assert snapshot.baseline_cognitive_age == 45
    assert snapshot.baseline_AE == 50
