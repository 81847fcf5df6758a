from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from grocery_api.config import get_settings
from grocery_api.main import app
from grocery_api.models.schemas import Customer
from grocery_api.observability.metrics import reset_metrics
from grocery_api.repositories.cancellation import CancellationToken
from grocery_api.repositories.customer_repository import CustomerRepository
from grocery_api.repositories.store import CustomerStore
from grocery_api.services.auth_service import reset_login_cache

TEST_API_KEY = "test-api-key"
TEST_USERNAME = "user"
TEST_PASSWORD = "password123"


def _seed() -> list[Customer]:
    return [
        Customer(id=1, name="Bob"),
        Customer(id=2, name="Alice"),
        Customer(id=3, name="Mary"),
        Customer(id=4, name="George"),
        Customer(id=5, name="Matthew"),
        Customer(id=6, name="Emma"),
    ]


@pytest.fixture
def seed_customers() -> list[Customer]:
    return _seed()


@pytest.fixture
def repository(seed_customers: list[Customer]) -> CustomerRepository:
    return CustomerRepository(CustomerStore(seed_customers))


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


@pytest.fixture
def cancelled_token() -> CancellationToken:
    cancelled = CancellationToken()
    cancelled.cancel()
    return cancelled


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path, repository: CustomerRepository) -> None:
    monkeypatch.setenv("API_KEY", TEST_API_KEY)
    monkeypatch.setenv("LOGIN_USERNAME", TEST_USERNAME)
    monkeypatch.setenv("LOGIN_PASSWORD", TEST_PASSWORD)
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("CUSTOMERS_FILE", str(tmp_path / "customers.json"))
    get_settings.cache_clear()
    reset_login_cache()
    reset_metrics()

    app.state.repository = repository

    yield

    app.state.repository = None
    get_settings.cache_clear()
    reset_login_cache()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers={"ApiKey": TEST_API_KEY}) as client:
        yield client
