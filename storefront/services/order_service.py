import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from storefront.constants.order_status import ALLOWED_TRANSITIONS, OrderStatus
from storefront.database import unit_of_work
from storefront.exceptions import CartEmpty, InvalidStatusTransition, OrderNotFound
from storefront.models.cart import CartLine
from storefront.models.order import Order
from storefront.models.order_item import OrderItem
from storefront.models.order_status_history import OrderStatusHistory
from storefront.models.product import Product
from storefront.utils.money import ZERO, to_money
from storefront.utils.numbers import allocate_number, generate_order_number

logger = logging.getLogger(__name__)


def log_status_change(session: Session, order_id: int, status: str, notes: Optional[str] = None):
    """Append one row to the order's status ledger."""
    session.add(
        OrderStatusHistory(
            order_id=order_id,
            status=status,
            notes=notes,
            created_at=datetime.utcnow(),
        )
    )


class OrderEngine:
    """Turns a cart into an immutable order and keeps its status ledger."""

    def __init__(self, session: Session, timeout_ms: Optional[int] = None, number_attempts: int = 5):
        self.session = session
        self.timeout_ms = timeout_ms
        self.number_attempts = number_attempts

    def place_order(
        self,
        account_id: int,
        shipping_address_id: int,
        billing_address_id: int,
        payment_method: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        with unit_of_work(self.session, self.timeout_ms):
            # lock the lines being consumed so a concurrent checkout of the
            # same cart waits here and then finds it empty
            rows = self.session.exec(
                select(CartLine, Product)
                .join(Product, CartLine.product_id == Product.id)
                .where(CartLine.account_id == account_id)
                .order_by(CartLine.id)
                .with_for_update(of=CartLine)
            ).all()

            if not rows:
                logger.warning(f"Checkout rejected for account {account_id}: cart is empty")
                raise CartEmpty()

            subtotal = to_money(
                sum((line.quantity * line.price_at_added for line, _ in rows), ZERO)
            )
            tax_amount = ZERO
            shipping_amount = ZERO
            discount_amount = ZERO
            total_amount = to_money(subtotal + tax_amount + shipping_amount - discount_amount)

            order = Order(
                account_id=account_id,
                order_number=allocate_number(
                    self.session, Order.order_number, generate_order_number, self.number_attempts
                ),
                subtotal=subtotal,
                tax_amount=tax_amount,
                shipping_amount=shipping_amount,
                discount_amount=discount_amount,
                total_amount=total_amount,
                shipping_address_id=shipping_address_id,
                billing_address_id=billing_address_id,
                payment_method=payment_method,
                notes=notes,
                status=OrderStatus.pending.value,
            )
            self.session.add(order)
            self.session.flush()

            for line, product in rows:
                self.session.add(self._snapshot_line(order, line, product))

            log_status_change(self.session, order.id, OrderStatus.pending.value, "Order created")

            for line, _ in rows:
                self.session.delete(line)

            self.session.flush()
            result = {
                "order_id": order.id,
                "order_number": order.order_number,
                "total_amount": total_amount,
            }

        logger.info(
            f"Order {result['order_number']} placed for account {account_id} "
            f"({len(rows)} lines, total {total_amount})"
        )
        return result

    def _snapshot_line(self, order: Order, line: CartLine, product: Product) -> OrderItem:
        unit_price = to_money(line.price_at_added)
        return OrderItem(
            order_id=order.id,
            product_id=line.product_id,
            product_name=product.name,
            product_sku=product.sku,
            quantity=line.quantity,
            unit_price=unit_price,
            total_price=to_money(line.quantity * unit_price),
        )

    def list_orders(self, account_id: int) -> List[Dict[str, Any]]:
        orders = self.session.exec(
            select(Order)
            .where(Order.account_id == account_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        ).all()

        return [self._summary(order) for order in orders]

    def get_order_details(self, account_id: int, order_id: int) -> Optional[Dict[str, Any]]:
        # someone else's order looks exactly like a missing one
        order = self.session.exec(
            select(Order).where(Order.id == order_id, Order.account_id == account_id)
        ).first()

        if not order:
            return None

        items = self.session.exec(
            select(OrderItem).where(OrderItem.order_id == order.id).order_by(OrderItem.id)
        ).all()

        history = self.session.exec(
            select(OrderStatusHistory)
            .where(OrderStatusHistory.order_id == order.id)
            .order_by(OrderStatusHistory.created_at, OrderStatusHistory.id)
        ).all()

        return {
            "order": order.model_dump(),
            "items": [
                {
                    "product_id": i.product_id,
                    "product_name": i.product_name,
                    "product_sku": i.product_sku,
                    "quantity": i.quantity,
                    "unit_price": i.unit_price,
                    "total_price": i.total_price,
                }
                for i in items
            ],
            "history": [
                {"status": h.status, "notes": h.notes, "created_at": h.created_at}
                for h in history
            ],
        }

    # -------- admin --------

    def list_all_orders(self) -> List[Dict[str, Any]]:
        orders = self.session.exec(
            select(Order).order_by(Order.created_at.desc(), Order.id.desc())
        ).all()

        return [{**self._summary(order), "account_id": order.account_id} for order in orders]

    def update_order_status(self, order_id: int, status: str, notes: Optional[str] = None) -> Order:
        with unit_of_work(self.session, self.timeout_ms):
            order = self.session.exec(
                select(Order).where(Order.id == order_id).with_for_update()
            ).first()

            if not order:
                raise OrderNotFound()

            allowed = ALLOWED_TRANSITIONS.get(order.status, [])
            if status not in allowed:
                logger.warning(
                    f"Rejected status change {order.status} -> {status} on order {order_id}"
                )
                raise InvalidStatusTransition(
                    f"Cannot move order from '{order.status}' to '{status}'"
                )

            previous = order.status
            order.status = status
            order.updated_at = datetime.utcnow()
            self.session.add(order)
            log_status_change(self.session, order.id, status, notes)

        self.session.refresh(order)
        logger.info(f"Order {order.order_number} moved {previous} -> {status}")
        return order

    @staticmethod
    def _summary(order: Order) -> Dict[str, Any]:
        return {
            "order_id": order.id,
            "order_number": order.order_number,
            "status": order.status,
            "total_amount": order.total_amount,
            "payment_status": order.payment_status,
            "created_at": order.created_at,
        }
