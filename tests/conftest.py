"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from dealscore_gateway.api.main import create_app
from dealscore_gateway.api.dependencies import get_strict_mode


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client in lenient mode (missing amounts count as 0)"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def strict_client() -> TestClient:
    """FastAPI test client that rejects missing or negative amounts"""
    app = create_app()
    app.dependency_overrides[get_strict_mode] = lambda: True
    return TestClient(app)


@pytest.fixture
def risk_payload() -> dict:
    """RISK_ASSESSMENT_UPDATE payload as stored on deal_tasks"""
    return {
        "tax": 2100.0,
        "offer_price": 32450.0,
        "bottom_line_price": 36195.0,
        "gauge_value": 0.62,
        "status_text": "Some fees need attention",
        "fees": [
            {"label": "Doc Fee", "amount": 499.0, "assessment": "NORMAL"},
            {"label": "Nitrogen Tires", "amount": 396.0, "assessment": "EXCESSIVE"},
            {"label": "Market Adjustment", "amount": 750.0, "assessment": "ILLEGITIMATE"},
        ],
    }


@pytest.fixture
def ranking_rows() -> list[dict]:
    """Analysis-stage deal rows joined to dealers, as the data layer returns them"""
    return [
        {
            "deal_id": 1,
            "dealer_name": "Harbor Honda",
            "city": "Oakland",
            "state_code": "CA",
            "payload": {"fees": [{"label": "Paint Sealant", "amount": 1000, "assessment": "EXCESSIVE"}]},
        },
        {
            "deal_id": 2,
            "dealer_name": "Valley Ford",
            "city": "Fresno",
            "state_code": "CA",
            "payload": {"fees": [{"label": "Doc Fee", "amount": 85, "assessment": "NORMAL"}]},
        },
        {
            "deal_id": 3,
            "dealer_name": "Harbor Honda",
            "city": "Oakland",
            "state_code": "CA",
            "payload": {"fees": [{"label": "Dealer Markup", "amount": 2000, "assessment": "ILLEGITIMATE"}]},
        },
        # Same deal joined to a second task row
        {
            "deal_id": 2,
            "dealer_name": "Valley Ford",
            "city": "Fresno",
            "state_code": "CA",
            "payload": {"fees": [{"label": "Dealer Markup", "amount": 5000, "assessment": "ILLEGITIMATE"}]},
        },
    ]
