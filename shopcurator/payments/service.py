"""
Cas d'usage 'payments': orchestre cart, stripe_client, metadata.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import pydantic

from shopcurator.config import CHECKOUT_FALLBACK_ORIGIN, SHIPPING_COUNTRIES
from shopcurator.errors import ValidationError
from . import cart
from . import metadata as meta
from .models import CartItem, CheckoutSession, OrderEvent
from .stripe_client import PaymentProvider

logger = logging.getLogger(__name__)

COMPLETED_EVENT = "checkout.session.completed"

def redirect_urls(origin: Optional[str]) -> Dict[str, str]:
    """URLs de retour dérivées de l'origine déclarée par l'appelant (repli fixe sinon)."""
    base = (origin or CHECKOUT_FALLBACK_ORIGIN).rstrip("/")
    return {
        "success_url": f"{base}?success=true",
        "cancel_url": f"{base}?canceled=true",
    }

def build_session(
    provider: PaymentProvider,
    items: Sequence[CartItem],
    customer_email: Optional[str] = None,
    shipping_countries: Sequence[str] = SHIPPING_COUNTRIES,
    origin: Optional[str] = None,
) -> CheckoutSession:
    """
    Prépare et crée la session Stripe Checkout.
    - ValidationError si le panier est vide
    - ProviderError si Stripe échoue
    Le total (subtotal + frais) est journalisé mais jamais comparé au montant
    confirmé par Stripe, qui reste la source de vérité.
    """
    if not items:
        raise ValidationError("No items provided", error="No items provided")
    totals = cart.compute_totals(items)
    params: Dict[str, Any] = {
        "payment_method_types": ["card"],
        "line_items": cart.to_line_items(items, totals.fee),
        "mode": "payment",
        "shipping_address_collection": {"allowed_countries": list(shipping_countries)},
        "metadata": cart.make_metadata(items),
        **redirect_urls(origin),
    }
    if customer_email:
        params["customer_email"] = customer_email

    session = provider.create_checkout_session(params)
    logger.info(
        "checkout.session_created id=%s items=%s subtotal=%s fee=%s total=%s",
        session.session_id, len(items), totals.subtotal, totals.fee, totals.total,
    )
    return session

def log_order(order: OrderEvent) -> None:
    amount = None
    if order.amount_total is not None:
        amount = Decimal(order.amount_total) / 100
    logger.info(
        "webhook.order_completed event_id=%s customer=%s amount=%s currency=%s items=%s shipping=%s",
        order.event_id,
        order.customer_email,
        amount,
        (order.currency or "").upper(),
        order.line_items_metadata,
        order.shipping_details,
    )

def handle_event(provider: PaymentProvider, raw_body: bytes, sig_header: Optional[str]) -> Dict[str, bool]:
    """
    Webhook Stripe: vérifie la signature puis journalise les commandes terminées.
    - SignatureError si la vérification échoue (rien n'est journalisé comme commande)
    - Événement signé mais mal formé: avertissement journalisé, acquitté quand même
    - Aucune écriture externe; pas de dédoublonnage en cas de redélivrance
    """
    event = provider.verify_event(raw_body, sig_header)
    event_type = event.get("type")
    if event_type == COMPLETED_EVENT:
        try:
            order = meta.extract_order_event(event)
        except pydantic.ValidationError as e:
            # Événement authentique mais inexploitable: acquitté pour stopper les relances
            logger.warning("webhook.malformed_event event_id=%r type=%s error=%s", event.get("id"), event_type, e)
            return {"received": True}
        log_order(order)
    else:
        logger.debug("webhook.ignored event_id=%s type=%s", event.get("id"), event_type)
    return {"received": True}
