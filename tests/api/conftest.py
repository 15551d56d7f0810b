import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from fifa_league import runtime
from fifa_league.main import app


@pytest.fixture
def client(store, settlement, finance, roster_service) -> TestClient:
    app.dependency_overrides[runtime.get_store] = lambda: store
    app.dependency_overrides[runtime.get_settlement_service] = lambda: settlement
    app.dependency_overrides[runtime.get_finance_service] = lambda: finance
    app.dependency_overrides[runtime.get_roster_service] = lambda: roster_service
    yield TestClient(app)
    app.dependency_overrides.clear()
