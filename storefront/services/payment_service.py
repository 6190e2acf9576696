import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from storefront.constants.order_status import (
    OrderPaymentStatus,
    PaymentStatus,
    order_payment_status_for,
)
from storefront.database import unit_of_work
from storefront.exceptions import OrderAlreadyPaid, OrderNotFound, PaymentNotFound
from storefront.models.order import Order
from storefront.models.payment import Payment

logger = logging.getLogger(__name__)


class PaymentLedger:
    """Payment attempts per order and the order payment status they imply.

    The gateway is simulated: ``update_payment_status`` plays the role of
    the asynchronous callback a real provider would send.
    """

    def __init__(self, session: Session, timeout_ms: Optional[int] = None):
        self.session = session
        self.timeout_ms = timeout_ms

    def create_payment(self, account_id: int, order_id: int, payment_method: str) -> Dict[str, Any]:
        with unit_of_work(self.session, self.timeout_ms):
            order = self.session.exec(
                select(Order)
                .where(Order.id == order_id, Order.account_id == account_id)
                .with_for_update()
            ).first()

            if not order:
                raise OrderNotFound()

            if order.payment_status == OrderPaymentStatus.paid.value:
                logger.warning(f"Payment rejected: order {order.order_number} is already paid")
                raise OrderAlreadyPaid()

            # amount always comes from the order, never from the caller
            payment = Payment(
                order_id=order.id,
                payment_method=payment_method,
                amount=order.total_amount,
                status=PaymentStatus.pending.value,
            )
            self.session.add(payment)

            order.payment_status = OrderPaymentStatus.pending.value
            order.updated_at = datetime.utcnow()
            self.session.add(order)
            self.session.flush()

            result = {
                "payment_id": payment.id,
                "order_id": order.id,
                "amount": payment.amount,
                "status": payment.status,
            }

        logger.info(f"Payment {result['payment_id']} initiated for order {order_id}")
        return result

    def update_payment_status(
        self,
        payment_id: int,
        status: str,
        transaction_id: Optional[str] = None,
        gateway_response: Any = None,
    ) -> Dict[str, Any]:
        """Record a gateway outcome and re-derive the order's payment status.

        Any status is accepted, including moves back from ``completed``;
        the order side is recomputed from this call alone.
        """
        with unit_of_work(self.session, self.timeout_ms):
            payment = self.session.exec(
                select(Payment).where(Payment.id == payment_id).with_for_update()
            ).first()

            if not payment:
                raise PaymentNotFound()

            payment.status = status
            payment.transaction_id = transaction_id
            payment.gateway_response = gateway_response
            payment.updated_at = datetime.utcnow()
            self.session.add(payment)

            order = self.session.exec(
                select(Order).where(Order.id == payment.order_id).with_for_update()
            ).one()

            order.payment_status = order_payment_status_for(status)
            order.updated_at = datetime.utcnow()
            self.session.add(order)

            result = {
                "payment_id": payment.id,
                "order_id": order.id,
                "status": status,
                "order_payment_status": order.payment_status,
            }

        logger.info(
            f"Payment {payment_id} -> {status}; order {result['order_id']} "
            f"payment status {result['order_payment_status']}"
        )
        return result

    def get_payments_by_order(self, account_id: int, order_id: int) -> List[Dict[str, Any]]:
        rows = self.session.exec(
            select(Payment)
            .join(Order, Payment.order_id == Order.id)
            .where(Payment.order_id == order_id, Order.account_id == account_id)
            .order_by(Payment.created_at, Payment.id)
        ).all()

        return [self._public(p) for p in rows]

    # -------- admin --------

    def list_all_payments(self) -> List[Dict[str, Any]]:
        rows = self.session.exec(
            select(Payment).order_by(Payment.created_at.desc(), Payment.id.desc())
        ).all()

        return [{**self._public(p), "order_id": p.order_id} for p in rows]

    def refund_payment(self, payment_id: int) -> Dict[str, Any]:
        payment = self.session.get(Payment, payment_id)
        if not payment:
            raise PaymentNotFound()

        return self.update_payment_status(
            payment_id,
            PaymentStatus.refunded.value,
            payment.transaction_id,
            payment.gateway_response,
        )

    @staticmethod
    def _public(payment: Payment) -> Dict[str, Any]:
        return {
            "payment_id": payment.id,
            "payment_method": payment.payment_method,
            "amount": payment.amount,
            "currency": payment.currency,
            "status": payment.status,
            "transaction_id": payment.transaction_id,
            "created_at": payment.created_at,
        }
