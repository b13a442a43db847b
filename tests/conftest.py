import hashlib
import hmac
import time
from types import SimpleNamespace
from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from shopcurator.app import app as fastapi_app
from shopcurator.payments.stripe_client import PaymentProvider, get_payment_provider
from shopcurator.scraper.fetcher import get_fetcher

WEBHOOK_SECRET = "whsec_test_secret"

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid or nodeid.startswith("tests/unit/") or nodeid.startswith("unit/"):
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid or nodeid.startswith("tests/integration/") or nodeid.startswith("integration/"):
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


# Faux fetcher: renvoie un HTML fixe ou lève l'erreur configurée
class FakeFetcher:
    def __init__(self, html: str = "", error: Optional[Exception] = None):
        self.html = html
        self.error = error
        self.urls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.html

@pytest.fixture
def fake_fetcher(app):
    fetcher = FakeFetcher()
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    yield fetcher
    app.dependency_overrides.pop(get_fetcher, None)


# Faux client Stripe: enregistre les params de checkout.sessions.create
class _FakeSessions:
    def __init__(self):
        self.calls: List[dict] = []
        self.error: Optional[Exception] = None

    def create(self, params=None, options=None):
        self.calls.append(params)
        if self.error:
            raise self.error
        return SimpleNamespace(id="cs_test_123", url="https://checkout.stripe.test/cs_test_123")

class FakeStripeClient:
    def __init__(self):
        self.checkout = SimpleNamespace(sessions=_FakeSessions())

@pytest.fixture
def stripe_client() -> FakeStripeClient:
    return FakeStripeClient()

@pytest.fixture
def payment_provider(app, stripe_client) -> Generator[PaymentProvider, None, None]:
    provider = PaymentProvider(secret_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET, client=stripe_client)
    app.dependency_overrides[get_payment_provider] = lambda: provider
    yield provider
    app.dependency_overrides.pop(get_payment_provider, None)


@pytest.fixture
def sign_payload():
    """Construit un en-tête Stripe-Signature valide (schéma v1) pour un payload."""
    def _sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp: Optional[int] = None) -> str:
        ts = int(time.time()) if timestamp is None else timestamp
        signature = hmac.new(secret.encode("utf-8"), f"{ts}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
        return f"t={ts},v1={signature}"
    return _sign
