import json

import pytest
import stripe

from shopcurator.errors import ProviderError, SignatureError
from shopcurator.payments.stripe_client import PaymentProvider

WEBHOOK_SECRET = "whsec_test_secret"


@pytest.fixture
def provider(stripe_client):
    return PaymentProvider(secret_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET, client=stripe_client)


def test_create_checkout_session_returns_ids(provider, stripe_client):
    params = {"mode": "payment", "line_items": []}
    session = provider.create_checkout_session(params)
    assert session.session_id == "cs_test_123"
    assert session.session_url == "https://checkout.stripe.test/cs_test_123"
    assert stripe_client.checkout.sessions.calls == [params]

def test_create_checkout_session_wraps_stripe_errors(provider, stripe_client):
    stripe_client.checkout.sessions.error = stripe.APIConnectionError("Network down")
    with pytest.raises(ProviderError) as exc:
        provider.create_checkout_session({"mode": "payment"})
    assert exc.value.status_code == 500
    assert exc.value.error == "Failed to create checkout session"


def test_verify_event_accepts_valid_signature(provider, sign_payload):
    payload = json.dumps({"id": "evt_1", "type": "checkout.session.completed"})
    event = provider.verify_event(payload.encode("utf-8"), sign_payload(payload))
    assert event["id"] == "evt_1"

def test_verify_event_rejects_bad_signature(provider):
    with pytest.raises(SignatureError):
        provider.verify_event(b'{"id": "evt_1"}', "t=123,v1=bad")

def test_verify_event_rejects_missing_header(provider):
    with pytest.raises(SignatureError):
        provider.verify_event(b'{"id": "evt_1"}', None)

def test_verify_event_rejects_wrong_secret(provider, sign_payload):
    payload = '{"id": "evt_1"}'
    with pytest.raises(SignatureError):
        provider.verify_event(payload.encode("utf-8"), sign_payload(payload, secret="whsec_other"))

def test_verify_event_rejects_stale_timestamp(provider, sign_payload):
    payload = '{"id": "evt_1"}'
    with pytest.raises(SignatureError):
        provider.verify_event(payload.encode("utf-8"), sign_payload(payload, timestamp=1))

def test_verify_event_rejects_signed_non_json(provider, sign_payload):
    payload = "pas du json"
    with pytest.raises(SignatureError) as exc:
        provider.verify_event(payload.encode("utf-8"), sign_payload(payload))
    assert "Invalid payload" in exc.value.message

def test_verify_event_requires_configured_secret(stripe_client, sign_payload):
    provider = PaymentProvider(secret_key="sk_test_dummy", webhook_secret="", client=stripe_client)
    payload = '{"id": "evt_1"}'
    with pytest.raises(SignatureError):
        provider.verify_event(payload.encode("utf-8"), sign_payload(payload, secret=""))
