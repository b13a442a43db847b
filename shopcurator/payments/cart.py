"""
Logique panier pure (pas de Stripe, pas de réseau).
Tous les montants envoyés au fournisseur sont des centimes entiers,
arrondis une seule fois (demi vers le haut).
"""
import json
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Sequence

from shopcurator.config import CHECKOUT_CURRENCY, FEE_RATE
from shopcurator.errors import ValidationError
from .models import CartItem, CheckoutTotals

FEE_ITEM_NAME = "Finder's Fee ({rate}%)"
FEE_ITEM_DESCRIPTION = "Curation and sourcing fee"
# Limite Stripe pour une valeur de metadata
METADATA_VALUE_LIMIT = 500

# module shopcurator.payments.cart
def round_half_up(amount: Decimal) -> int:
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def to_minor_units(amount: Decimal) -> int:
    """Montant décimal (ex: 10.005) -> centimes entiers (1001)."""
    return round_half_up(Decimal(amount) * 100)

def compute_totals(items: Sequence[CartItem], fee_rate: Decimal = FEE_RATE) -> CheckoutTotals:
    """
    subtotal = Σ(base_price × quantity) en centimes (un seul arrondi sur la somme)
    fee      = arrondi(subtotal × fee_rate)
    total    = subtotal + fee
    """
    if not items:
        raise ValidationError("No items provided", error="No items provided")
    subtotal = to_minor_units(sum((item.base_price * item.quantity for item in items), Decimal("0")))
    fee = round_half_up(Decimal(subtotal) * fee_rate)
    return CheckoutTotals(subtotal=subtotal, fee=fee, total=subtotal + fee)

def fee_item_name(fee_rate: Decimal = FEE_RATE) -> str:
    return FEE_ITEM_NAME.format(rate=f"{float(fee_rate) * 100:g}")

def to_line_items(
    items: Sequence[CartItem],
    fee: int,
    currency: str = CHECKOUT_CURRENCY,
    fee_rate: Decimal = FEE_RATE,
) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe:
    - une ligne price_data par article (unit_amount en centimes, quantité conservée)
    - une ligne synthétique pour les frais (quantité 1, unit_amount = fee)
    """
    line_items: List[Dict[str, Any]] = []
    for item in items:
        line_items.append({
            "quantity": item.quantity,
            "price_data": {
                "currency": currency,
                "unit_amount": to_minor_units(item.base_price),
                "product_data": {
                    "name": item.name,
                    "images": [item.image] if item.image else [],
                },
            },
        })
    line_items.append({
        "quantity": 1,
        "price_data": {
            "currency": currency,
            "unit_amount": fee,
            "product_data": {
                "name": fee_item_name(fee_rate),
                "description": FEE_ITEM_DESCRIPTION,
            },
        },
    })
    return line_items

def make_metadata(items: Sequence[CartItem]) -> Dict[str, str]:
    """
    Résumé compact du panier pour le rapprochement côté webhook.
    - order_items: JSON [{name, qty, source}], tronqué à la limite Stripe
    """
    order_items = [{"name": i.name, "qty": i.quantity, "source": i.source_url} for i in items]
    return {"order_items": json.dumps(order_items)[:METADATA_VALUE_LIMIT]}
