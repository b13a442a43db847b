# module shopcurator.payments.models
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CartItem(BaseModel):
    """Ligne de panier fournie par l'appelant (prix positif ou nul, quantité >= 1)."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    base_price: Decimal = Field(alias="basePrice", ge=0)
    quantity: int = Field(ge=1)
    image: Optional[str] = None
    source_url: Optional[str] = Field(default=None, alias="sourceUrl")


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # null ou absent: traité comme panier vide par la vue
    items: Optional[List[CartItem]] = None
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    # Accepté mais non utilisé: Stripe collecte l'adresse lui-même
    shipping_address: Optional[Dict[str, Any]] = Field(default=None, alias="shippingAddress")


class CheckoutTotals(BaseModel):
    """Montants en centimes."""
    subtotal: int
    fee: int
    total: int


class CheckoutSession(BaseModel):
    session_url: str
    session_id: str


class OrderEvent(BaseModel):
    """Commande confirmée par webhook: lue, journalisée puis oubliée."""
    event_id: Optional[str] = None
    customer_email: Optional[str] = None
    amount_total: Optional[int] = None
    currency: Optional[str] = None
    line_items_metadata: Any = None
    shipping_details: Optional[Dict[str, Any]] = None
