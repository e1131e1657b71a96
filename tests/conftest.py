import pytest
from fastapi.testclient import TestClient
from neuroloop.main import app
from neuroloop.schemas.cognitive import CognitiveAgeBaseline, CognitiveStates


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def states() -> CognitiveStates:
    # S1 = 60, S2 = 50
    return CognitiveStates(AE=55, RA=65, CT=50, IN=50)


@pytest.fixture
def baseline() -> CognitiveAgeBaseline:
    return CognitiveAgeBaseline(baseline_cognitive_age=38)
