"""
Shared test fixtures: test client, dataset, sample inputs.
"""

import pytest
from fastapi.testclient import TestClient

from feecalc.calculators.aggregator import FeeCalculator
from feecalc.guideline.dataset import DEFAULT_DATASET
from feecalc.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def dataset():
    """The ECSA 2025 guideline dataset."""
    return DEFAULT_DATASET


@pytest.fixture
def calculator(dataset):
    return FeeCalculator(dataset)
