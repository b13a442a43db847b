"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, metadata Stripe, client Stripe et services.
"""

from .cart import compute_totals, to_minor_units, to_line_items, make_metadata, fee_item_name
from .metadata import parse_order_items, extract_order_event
from .models import CartItem, CheckoutRequest, CheckoutSession, CheckoutTotals, OrderEvent
from .stripe_client import PaymentProvider, build_payment_provider, get_payment_provider
from .service import build_session, handle_event

__all__ = [
    # cart
    "compute_totals",
    "to_minor_units",
    "to_line_items",
    "make_metadata",
    "fee_item_name",
    # metadata
    "parse_order_items",
    "extract_order_event",
    # models
    "CartItem",
    "CheckoutRequest",
    "CheckoutSession",
    "CheckoutTotals",
    "OrderEvent",
    # stripe
    "PaymentProvider",
    "build_payment_provider",
    "get_payment_provider",
    # services
    "build_session",
    "handle_event",
]
