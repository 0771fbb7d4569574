"""Shared fixtures: settings with fake credentials, sandbox gateway, app client."""

import pytest
from fastapi.testclient import TestClient

from payorder.common.config import Settings
from payorder.services.api.app import create_app
from payorder.services.gateway.sandbox import SandboxGateway
from payorder.services.verification.store import InMemoryProcessedPaymentStore

TEST_SECRET = "rzp_test_secret_9f8e7d"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret=TEST_SECRET,
        gateway_mode="sandbox",
        redis_url=None,
    )


@pytest.fixture
def gateway() -> SandboxGateway:
    return SandboxGateway()


@pytest.fixture
def store(settings) -> InMemoryProcessedPaymentStore:
    return InMemoryProcessedPaymentStore(settings.processed_payment_ttl_seconds)


@pytest.fixture
def client(settings, gateway, store) -> TestClient:
    app = create_app(settings, gateway=gateway, store=store)
    return TestClient(app)
