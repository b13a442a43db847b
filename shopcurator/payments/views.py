import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from shopcurator.config import API_PREFIX, SHIPPING_COUNTRIES
from shopcurator.errors import ValidationError
from shopcurator.payments import service as payments_service
from shopcurator.payments.models import CheckoutRequest
from shopcurator.payments.stripe_client import PaymentProvider, get_payment_provider

logger = logging.getLogger(__name__)
router = APIRouter(prefix=API_PREFIX, tags=["Payments API"])

# module shopcurator.payments.views
@router.post("/checkout")
async def create_checkout_session(
    request: Request,
    body: Optional[CheckoutRequest] = None,
    provider: PaymentProvider = Depends(get_payment_provider),
):
    """
    Crée une session Checkout Stripe pour le panier fourni.
    - Entrée JSON: { "items": [ {name, basePrice, quantity, image?, sourceUrl?} ], "customerEmail", "shippingAddress" }
    - Étapes: totaux + frais (10%), line_items, metadata, session Stripe
    - Réponse: { "url", "sessionId" }
    - Erreurs: 400 si panier vide, 500 si Stripe échoue
    """
    if body is None or not body.items:
        raise ValidationError("No items provided", error="No items provided")

    # L'appel Stripe est bloquant: exécuté hors de la boucle d'événements
    session = await run_in_threadpool(
        payments_service.build_session,
        provider,
        body.items,
        body.customer_email,
        SHIPPING_COUNTRIES,
        request.headers.get("origin"),
    )
    return JSONResponse({"url": session.session_url, "sessionId": session.session_id})

@router.post("/webhook", include_in_schema=False)
async def webhook_stripe(request: Request, provider: PaymentProvider = Depends(get_payment_provider)):
    """
    Webhook Stripe (Checkout): journalise checkout.session.completed.
    - Signature: corps brut + en-tête Stripe-Signature, secret STRIPE_WEBHOOK_SECRET
    - Réponse: {"received": true}
    - Erreurs: 400 "Webhook Error: <message>" si signature/payload invalide
    """
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    ack = payments_service.handle_event(provider, payload, sig_header)
    return JSONResponse(ack)
