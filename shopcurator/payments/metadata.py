"""
Désérialisation des événements/métadonnées Stripe (order_items).
"""
import json
from typing import Any, Dict

from .models import OrderEvent

# module shopcurator.payments.metadata
def parse_order_items(metadata: Dict[str, Any]) -> Any:
    """
    Lit metadata.order_items (JSON [{name, qty, source}]).
    - Tolérant aux erreurs: renvoie la chaîne brute si le JSON a été tronqué
    - Renvoie [] si absent
    """
    raw = (metadata or {}).get("order_items")
    if not raw:
        return []
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return raw

def _obj(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}

def extract_order_event(event: Dict[str, Any]) -> OrderEvent:
    """
    Construit l'OrderEvent depuis un event checkout.session.completed.
    - Attend event.data.object.{customer_email, amount_total, currency, metadata, shipping_details}
    - customer_details.email sert de repli si customer_email est vide
    - pydantic.ValidationError si un champ a un type inattendu (id non textuel, adresse non objet)
    """
    session = _obj(_obj(_obj(event).get("data")).get("object"))
    email = session.get("customer_email") or _obj(session.get("customer_details")).get("email")
    # Les versions récentes de l'API placent l'adresse sous collected_information
    shipping = session.get("shipping_details") or _obj(session.get("collected_information")).get("shipping_details")
    return OrderEvent(
        event_id=_obj(event).get("id"),
        customer_email=email,
        amount_total=session.get("amount_total"),
        currency=session.get("currency"),
        line_items_metadata=parse_order_items(_obj(session.get("metadata"))),
        shipping_details=shipping,
    )
