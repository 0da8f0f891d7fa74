import pathlib
import sys

import pytest
from fastapi.testclient import TestClient

# Ensure repository root is importable when pytest is invoked from other directories
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from checkout_gateway.infra.config import GatewayConfig
from checkout_gateway.services.payments.provider import PaymentProviderClient
from main import create_app


WEBHOOK_SECRET = "whsec_test_secret"


class FakeProviderClient(PaymentProviderClient):
    """Stands in for the provider: records requests, returns a canned answer or raises."""

    name = "fake"

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {
            "session_id": "s1",
            "checkout_url": "https://pay/s1",
        }
        self.error = error
        self.calls = []

    async def create_checkout_session(self, request):
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def config():
    return GatewayConfig(
        api_key="k",
        product_id="p1",
        webhook_secret=WEBHOOK_SECRET,
        public_dir="__no_public_dir__",
    )


@pytest.fixture
def fake_provider():
    return FakeProviderClient()


@pytest.fixture
def app_instance(config, fake_provider):
    app = create_app(config=config, provider=fake_provider)
    # Clear dependency overrides to ensure isolation between tests
    app.dependency_overrides = {}
    return app


@pytest.fixture
def client(app_instance):
    with TestClient(app_instance) as c:
        yield c


@pytest.fixture
def make_fake_provider():
    return FakeProviderClient
