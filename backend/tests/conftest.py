"""
Jeb's API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Autouse:
    └── clean_environment: removes real credentials from the process env

    Function-scoped:
    ├── settings / unconfigured_settings: explicit Settings values
    ├── mock_gateway / mock_email_sender: AsyncMock provider adapters
    ├── make_client: builds an HTTPX AsyncClient for any Settings + overrides
    ├── test_client: fully configured app with mocked providers
    └── sample_cart / sample_application: request bodies
"""

import os
from typing import AsyncGenerator, Callable
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from jebs_api.config import Settings
from jebs_api.dependencies import get_email_sender, get_payments_gateway
from jebs_api.services.email_base import EmailSender
from jebs_api.services.payments_base import PaymentsGateway

# Tests never talk to Stripe or Resend, even on a developer machine with keys exported
CREDENTIAL_VARS = (
    "STRIPE_SECRET_KEY",
    "RESEND_API_KEY",
    "JEB_APPLICATION_EMAIL",
    "CORS_ORIGIN",
    "ENABLE_DOCS",
)
for _var in CREDENTIAL_VARS:
    os.environ.pop(_var, None)
os.environ["LOG_LEVEL"] = "WARNING"

CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_a1b2c3"


# ══════════════════════════════════════════════════════════════════════════
# Environment
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Each test starts from an environment without provider credentials."""
    for var in CREDENTIAL_VARS:
        monkeypatch.delenv(var, raising=False)


# ══════════════════════════════════════════════════════════════════════════
# Settings
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings() -> Settings:
    """Fully configured Settings: Stripe and Resend keys present."""
    return Settings(
        _env_file=None,
        stripe_secret_key="sk_test_not_real",
        resend_api_key="re_test_not_real",
        jeb_application_email="hiring@example.com",
        cors_origin="https://jebs.example.com",
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """No credentials at all: checkout is unavailable, applications are logged."""
    return Settings(_env_file=None)


# ══════════════════════════════════════════════════════════════════════════
# Provider doubles
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_gateway():
    """
    PaymentsGateway double returning a fixed checkout URL.

    Usage:
        mock_gateway.create_checkout_session.assert_awaited_once()
    """
    gateway = AsyncMock(spec=PaymentsGateway)
    gateway.create_checkout_session.return_value = CHECKOUT_URL
    return gateway


@pytest.fixture
def mock_email_sender():
    """EmailSender double that accepts every message."""
    sender = AsyncMock(spec=EmailSender)
    sender.send.return_value = "email_123"
    return sender


# ══════════════════════════════════════════════════════════════════════════
# HTTP clients
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_client(mock_gateway, mock_email_sender) -> Callable[[Settings], AsyncClient]:
    """
    Factory for an AsyncClient bound to a fresh app built from `settings`.

    Providers are always replaced by the mock doubles so no test can reach
    the network. Use as an async context manager:

        async with make_client(unconfigured_settings) as client:
            response = await client.get("/api/health")
    """
    from jebs_api.main import create_app

    def _make(app_settings: Settings) -> AsyncClient:
        app = create_app(app_settings)
        app.dependency_overrides[get_payments_gateway] = lambda: mock_gateway
        app.dependency_overrides[get_email_sender] = lambda: mock_email_sender
        transport = ASGITransport(app=app)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest_asyncio.fixture
async def test_client(make_client, settings) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient for the fully configured app."""
    async with make_client(settings) as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Request bodies
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def sample_cart() -> dict:
    return {
        "lineItems": [
            {"id": "margherita-lg", "name": "Large Margherita", "priceCents": 1899, "quantity": 2},
            {"id": "garlic-knots", "name": "Garlic Knots", "priceCents": 650, "quantity": 1},
        ],
        "successUrl": "https://jebs.example.com/order/success",
        "cancelUrl": "https://jebs.example.com/order",
    }


@pytest.fixture
def sample_application() -> dict:
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "position": "Line Cook",
        "over18": True,
        "notes": "",
        "referral": None,
    }
