import json
from decimal import Decimal

import pytest

from shopcurator.errors import ValidationError
from shopcurator.payments import CartItem, compute_totals, fee_item_name, make_metadata, to_line_items, to_minor_units


def _item(price: str, qty: int = 1, **kw) -> CartItem:
    return CartItem(name=kw.pop("name", "Article"), basePrice=Decimal(price), quantity=qty, **kw)


def test_totals_and_line_items_for_single_item():
    items = [_item("10.00", 2)]
    totals = compute_totals(items)
    assert (totals.subtotal, totals.fee, totals.total) == (2000, 200, 2200)

    line_items = to_line_items(items, totals.fee)
    assert len(line_items) == 2
    assert line_items[0]["price_data"]["unit_amount"] == 1000
    assert line_items[0]["quantity"] == 2
    assert line_items[1]["price_data"]["unit_amount"] == 200
    assert line_items[1]["quantity"] == 1
    assert line_items[1]["price_data"]["product_data"] == {
        "name": "Finder's Fee (10%)",
        "description": "Curation and sourcing fee",
    }


def test_subtotal_rounded_once_on_the_sum():
    # 3 x 0.333 = 0.999 -> 100 centimes (et non 3 x 33 = 99)
    totals = compute_totals([_item("0.333", 3)])
    assert totals.subtotal == 100
    assert totals.fee == 10


def test_fee_rounds_half_up():
    totals = compute_totals([_item("0.05")])
    assert totals.subtotal == 5
    assert totals.fee == 1
    assert totals.total == 6


def test_to_minor_units_rounds_half_up():
    assert to_minor_units(Decimal("19.995")) == 2000
    assert to_minor_units(Decimal("19.994")) == 1999


def test_empty_cart_raises_validation_error():
    with pytest.raises(ValidationError) as exc:
        compute_totals([])
    assert exc.value.status_code == 400


def test_line_items_carry_currency_and_images():
    items = [
        _item("5.50", 1, name="Bol", image="https://cdn.x.com/bol.jpg"),
        _item("3", 4, name="Tasse"),
    ]
    line_items = to_line_items(items, fee=370, currency="eur")
    assert [li["price_data"]["currency"] for li in line_items] == ["eur", "eur", "eur"]
    assert line_items[0]["price_data"]["product_data"] == {"name": "Bol", "images": ["https://cdn.x.com/bol.jpg"]}
    assert line_items[1]["price_data"]["product_data"] == {"name": "Tasse", "images": []}
    assert line_items[1]["price_data"]["unit_amount"] == 300
    assert line_items[1]["quantity"] == 4


def test_fee_item_name_follows_rate():
    assert fee_item_name(Decimal("0.10")) == "Finder's Fee (10%)"
    assert fee_item_name(Decimal("0.15")) == "Finder's Fee (15%)"


def test_make_metadata_summarizes_items():
    items = [_item("10", 2, name="Vase", sourceUrl="https://shop.example.com/p/1")]
    meta = make_metadata(items)
    assert json.loads(meta["order_items"]) == [
        {"name": "Vase", "qty": 2, "source": "https://shop.example.com/p/1"}
    ]


def test_make_metadata_respects_stripe_value_limit():
    items = [_item("1", 1, name=f"Article numéro {i}", sourceUrl=f"https://shop.example.com/p/{i}") for i in range(40)]
    assert len(make_metadata(items)["order_items"]) == 500
