from decimal import Decimal

from sqlalchemy import event
from sqlmodel import Session, select

from storefront.models import CartLine
from storefront.services.cart_service import CartStore


def test_add_creates_line(session, seed):
    cart = CartStore(session)

    line, created = cart.add_to_cart(seed.alice, seed.mug, 2, Decimal("10.00"))

    assert created is True
    assert line.quantity == 2
    assert line.price_at_added == Decimal("10.00")


def test_add_same_product_accumulates_quantity_and_takes_latest_price(session, seed):
    cart = CartStore(session)

    cart.add_to_cart(seed.alice, 7, 1, 10)
    line, created = cart.add_to_cart(seed.alice, 7, 2, 12)

    assert created is False
    lines = session.exec(select(CartLine).where(CartLine.account_id == seed.alice)).all()
    assert len(lines) == 1
    assert lines[0].quantity == 3
    assert lines[0].price_at_added == Decimal("12.00")


def test_get_cart_items_joins_product_and_totals_lines(session, seed):
    cart = CartStore(session)
    cart.add_to_cart(seed.alice, seed.lamp, 2, Decimal("50.00"))
    cart.add_to_cart(seed.alice, seed.pen, 1, Decimal("20.00"))

    items = cart.get_cart_items(seed.alice)

    assert [i["name"] for i in items] == ["Desk Lamp", "Fountain Pen"]
    assert items[0]["line_total"] == Decimal("100.00")
    assert cart.cart_subtotal(items) == Decimal("120.00")


def test_carts_are_per_account(session, seed):
    cart = CartStore(session)
    cart.add_to_cart(seed.alice, seed.mug, 1, Decimal("10.00"))

    assert cart.get_cart_items(seed.bob) == []


def test_update_allows_zero_and_keeps_line(session, seed):
    cart = CartStore(session)
    line, _ = cart.add_to_cart(seed.alice, seed.mug, 3, Decimal("10.00"))

    assert cart.update_cart_item(seed.alice, line.id, 0) is True

    items = cart.get_cart_items(seed.alice)
    assert len(items) == 1
    assert items[0]["quantity"] == 0


def test_update_other_accounts_line_affects_nothing(session, seed):
    cart = CartStore(session)
    line, _ = cart.add_to_cart(seed.alice, seed.mug, 3, Decimal("10.00"))

    assert cart.update_cart_item(seed.bob, line.id, 1) is False
    assert cart.get_cart_items(seed.alice)[0]["quantity"] == 3


def test_remove_and_clear(session, seed):
    cart = CartStore(session)
    mug, _ = cart.add_to_cart(seed.alice, seed.mug, 1, Decimal("10.00"))
    cart.add_to_cart(seed.alice, seed.pen, 1, Decimal("20.00"))

    assert cart.remove_cart_item(seed.bob, mug.id) is False
    assert cart.remove_cart_item(seed.alice, mug.id) is True
    assert cart.remove_cart_item(seed.alice, mug.id) is False

    assert cart.clear_cart(seed.alice) == 1
    assert cart.get_cart_items(seed.alice) == []


def test_concurrent_first_insert_is_retried_as_top_up(engine, session, seed):
    cart = CartStore(session)

    def insert_from_other_session(*_):
        # lands after the lookup missed and before this session's insert
        with Session(engine) as other:
            other.add(CartLine(account_id=seed.alice, product_id=seed.mug, quantity=1, price_at_added=Decimal("10.00")))
            other.commit()

    event.listen(session, "before_flush", insert_from_other_session, once=True)

    line, created = cart.add_to_cart(seed.alice, seed.mug, 2, Decimal("12.00"))

    assert created is False
    lines = session.exec(select(CartLine).where(CartLine.account_id == seed.alice)).all()
    assert len(lines) == 1
    assert lines[0].quantity == 3
    assert lines[0].price_at_added == Decimal("12.00")
