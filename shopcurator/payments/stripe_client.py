"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
Le client est construit une fois au démarrage (lifespan) et injecté dans les
vues via get_payment_provider, jamais via l'état global du module stripe.
"""
import json
import logging
from typing import Any, Dict, Optional

import stripe
from fastapi import Request

from shopcurator.config import STRIPE_SECRET_KEY, STRIPE_WEBHOOK_SECRET
from shopcurator.errors import ProviderError, SignatureError
from .models import CheckoutSession

logger = logging.getLogger(__name__)

# module shopcurator.payments.stripe_client
class PaymentProvider:
    def __init__(self, secret_key: str, webhook_secret: str, client: Optional[Any] = None):
        self.webhook_secret = webhook_secret
        # client injectable (faux client en tests)
        self._client = client if client is not None else stripe.StripeClient(secret_key)

    def create_checkout_session(self, params: Dict[str, Any]) -> CheckoutSession:
        """
        Crée une session Stripe Checkout.
        - params: corps complet de checkout.sessions.create (line_items, mode, urls, metadata...)
        Retour: CheckoutSession(session_url, session_id)
        Erreurs: ProviderError (le message Stripe n'est que journalisé)
        """
        try:
            session = self._client.checkout.sessions.create(params=params)
        except Exception as e:
            logger.error("payments.stripe_create_failed error=%s", e)
            raise ProviderError(str(e)) from e
        return CheckoutSession(session_url=session.url, session_id=session.id)

    def verify_event(self, payload: bytes, sig_header: Optional[str]) -> Dict[str, Any]:
        """
        Valide un événement Stripe signé (webhook) et le retourne en dict.
        - Vérifie l'en-tête Stripe-Signature (HMAC + tolérance d'horodatage du SDK)
        - SignatureError si secret absent, signature invalide ou JSON illisible
        """
        if not self.webhook_secret:
            raise SignatureError("STRIPE_WEBHOOK_SECRET is not configured")
        try:
            text = payload.decode("utf-8")
            stripe.WebhookSignature.verify_header(
                text, sig_header or "", self.webhook_secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE,
            )
            event = json.loads(text)
        except stripe.SignatureVerificationError as e:
            raise SignatureError(str(e)) from e
        except ValueError as e:
            # UnicodeDecodeError et json.JSONDecodeError sont des ValueError
            raise SignatureError(f"Invalid payload: {e}") from e
        if not isinstance(event, dict):
            raise SignatureError("Invalid payload: event must be a JSON object")
        return event


def build_payment_provider() -> PaymentProvider:
    return PaymentProvider(secret_key=STRIPE_SECRET_KEY, webhook_secret=STRIPE_WEBHOOK_SECRET)

def get_payment_provider(request: Request) -> PaymentProvider:
    """Dépendance FastAPI: client construit par le lifespan (app.state)."""
    provider = getattr(request.app.state, "payment_provider", None)
    if provider is None:
        provider = build_payment_provider()
        request.app.state.payment_provider = provider
    return provider
