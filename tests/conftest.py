"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from finplan_gateway.api.main import create_app
from finplan_gateway.domain.debt import Debt


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def reference_debts() -> list[Debt]:
    """Reference scenario: three debts paid down with $500/month"""
    return [
        Debt(5000, 0.18),  # highest rate
        Debt(8000, 0.06),
        Debt(3000, 0.04),  # lowest balance
    ]


@pytest.fixture
def overextended_debts() -> list[Debt]:
    """Monthly interest ~$328.83, far above a $100 budget"""
    return [
        Debt(10000, 0.25),  # ~$208.33/month
        Debt(5000, 0.20),  # ~$83.33/month
        Debt(3000, 0.15),  # ~$37.50/month
    ]
