from decimal import Decimal

import pytest
from sqlmodel import select

from storefront.exceptions import OrderAlreadyPaid, OrderNotFound, PaymentNotFound
from storefront.models import Order, Payment
from storefront.services.cart_service import CartStore
from storefront.services.order_service import OrderEngine
from storefront.services.payment_service import PaymentLedger


@pytest.fixture
def order_id(session, seed):
    cart = CartStore(session)
    cart.add_to_cart(seed.alice, seed.lamp, 2, Decimal("50.00"))
    cart.add_to_cart(seed.alice, seed.pen, 1, Decimal("20.00"))
    return OrderEngine(session).place_order(
        seed.alice, seed.alice_address, seed.alice_address, "card"
    )["order_id"]


def test_create_payment_uses_order_total(session, seed, order_id):
    payment = PaymentLedger(session).create_payment(seed.alice, order_id, "card")

    assert payment["order_id"] == order_id
    assert payment["amount"] == Decimal("120.00")
    assert payment["status"] == "pending"
    assert session.get(Order, order_id).payment_status == "pending"


def test_create_payment_for_someone_elses_order(session, seed, order_id):
    with pytest.raises(OrderNotFound):
        PaymentLedger(session).create_payment(seed.bob, order_id, "card")

    assert session.exec(select(Payment)).all() == []


def test_paid_order_rejects_new_payment(session, seed, order_id):
    ledger = PaymentLedger(session)
    payment = ledger.create_payment(seed.alice, order_id, "card")
    ledger.update_payment_status(payment["payment_id"], "completed", "txn-1", {"ok": True})

    with pytest.raises(OrderAlreadyPaid):
        ledger.create_payment(seed.alice, order_id, "card")

    assert len(session.exec(select(Payment)).all()) == 1


@pytest.mark.parametrize(
    "status, expected",
    [
        ("completed", "paid"),
        ("failed", "failed"),
        ("pending", "pending"),
        ("refunded", "pending"),
        ("authorized", "pending"),
    ],
)
def test_callback_status_derives_order_payment_status(session, seed, order_id, status, expected):
    ledger = PaymentLedger(session)
    payment = ledger.create_payment(seed.alice, order_id, "card")

    result = ledger.update_payment_status(payment["payment_id"], status, "txn-9", None)

    assert result["order_payment_status"] == expected
    assert session.get(Order, order_id).payment_status == expected


def test_callback_stores_gateway_data_verbatim(session, seed, order_id):
    ledger = PaymentLedger(session)
    payment = ledger.create_payment(seed.alice, order_id, "card")
    response = {"code": "00", "message": "Approved", "card": {"last4": "4242"}}

    ledger.update_payment_status(payment["payment_id"], "completed", "txn-42", response)

    stored = session.get(Payment, payment["payment_id"])
    assert stored.transaction_id == "txn-42"
    assert stored.gateway_response == response


def test_completed_payment_can_be_downgraded(session, seed, order_id):
    ledger = PaymentLedger(session)
    payment = ledger.create_payment(seed.alice, order_id, "card")

    ledger.update_payment_status(payment["payment_id"], "completed", "txn-1", None)
    ledger.update_payment_status(payment["payment_id"], "pending", "txn-1", None)

    assert session.get(Order, order_id).payment_status == "pending"


def test_repeated_callback_is_idempotent(session, seed, order_id):
    ledger = PaymentLedger(session)
    payment = ledger.create_payment(seed.alice, order_id, "card")

    first = ledger.update_payment_status(payment["payment_id"], "completed", "txn-1", None)
    second = ledger.update_payment_status(payment["payment_id"], "completed", "txn-1", None)

    assert first == second
    assert session.get(Payment, payment["payment_id"]).status == "completed"


def test_unknown_payment(session, seed):
    with pytest.raises(PaymentNotFound):
        PaymentLedger(session).update_payment_status(12345, "completed", None, None)


def test_failed_attempt_then_retry_keeps_history(session, seed, order_id):
    ledger = PaymentLedger(session)
    first = ledger.create_payment(seed.alice, order_id, "card")
    ledger.update_payment_status(first["payment_id"], "failed", "txn-1", None)
    second = ledger.create_payment(seed.alice, order_id, "upi")

    payments = ledger.get_payments_by_order(seed.alice, order_id)

    assert [p["payment_id"] for p in payments] == [first["payment_id"], second["payment_id"]]
    assert [p["status"] for p in payments] == ["failed", "pending"]
    assert ledger.get_payments_by_order(seed.bob, order_id) == []


def test_refund_moves_order_back_to_pending(session, seed, order_id):
    ledger = PaymentLedger(session)
    payment = ledger.create_payment(seed.alice, order_id, "card")
    ledger.update_payment_status(payment["payment_id"], "completed", "txn-7", {"ok": True})

    result = ledger.refund_payment(payment["payment_id"])

    assert result["status"] == "refunded"
    stored = session.get(Payment, payment["payment_id"])
    assert stored.transaction_id == "txn-7"
    assert session.get(Order, order_id).payment_status == "pending"
    assert ledger.list_all_payments()[0]["status"] == "refunded"


def test_refund_unknown_payment(session, seed):
    with pytest.raises(PaymentNotFound):
        PaymentLedger(session).refund_payment(999)
