import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from storefront.database import unit_of_work
from storefront.models.cart import CartLine
from storefront.models.product import Product
from storefront.utils.money import ZERO, to_money

logger = logging.getLogger(__name__)


class CartStore:
    """Mutable pre-purchase lines, one set per account."""

    def __init__(self, session: Session, timeout_ms: Optional[int] = None):
        self.session = session
        self.timeout_ms = timeout_ms

    def get_cart_items(self, account_id: int) -> List[Dict[str, Any]]:
        rows = self.session.exec(
            select(CartLine, Product)
            .join(Product, CartLine.product_id == Product.id)
            .where(CartLine.account_id == account_id)
            .order_by(CartLine.id)
        ).all()

        return [
            {
                "cart_id": line.id,
                "product_id": line.product_id,
                "name": product.name,
                "slug": product.slug,
                "is_active": product.is_active,
                "quantity": line.quantity,
                "price_at_added": line.price_at_added,
                "line_total": to_money(line.quantity * line.price_at_added),
            }
            for line, product in rows
        ]

    def cart_subtotal(self, items: List[Dict[str, Any]]) -> Decimal:
        return to_money(sum((item["line_total"] for item in items), ZERO))

    def add_to_cart(
        self, account_id: int, product_id: int, quantity: int, price
    ) -> Tuple[CartLine, bool]:
        """Add ``quantity`` of a product, or top up the existing line.

        Quantities accumulate and the latest price replaces the stored one.
        Returns the line and whether it was newly created.
        """
        price = to_money(price)

        # a concurrent first insert for the same product loses on the unique
        # constraint; the retry then finds that row and updates it
        for attempt in range(2):
            try:
                with unit_of_work(self.session, self.timeout_ms):
                    line = self.session.exec(
                        select(CartLine)
                        .where(
                            CartLine.account_id == account_id,
                            CartLine.product_id == product_id,
                        )
                        .with_for_update()
                    ).first()

                    created = line is None
                    if created:
                        line = CartLine(
                            account_id=account_id,
                            product_id=product_id,
                            quantity=quantity,
                            price_at_added=price,
                        )
                    else:
                        line.quantity += quantity
                        line.price_at_added = price
                        line.updated_at = datetime.utcnow()

                    self.session.add(line)
                    self.session.flush()
                break
            except IntegrityError:
                if attempt:
                    raise
                logger.warning(
                    f"Cart line for account {account_id}, product {product_id} "
                    "was inserted concurrently; retrying as update"
                )

        self.session.refresh(line)
        logger.info(
            f"Cart {'add' if created else 'top-up'}: account {account_id}, "
            f"product {product_id}, quantity now {line.quantity}"
        )
        return line, created

    def update_cart_item(self, account_id: int, cart_id: int, quantity: int) -> bool:
        """Set a line's quantity. Zero keeps the line; use remove to drop it."""
        with unit_of_work(self.session, self.timeout_ms):
            line = self._owned_line(account_id, cart_id)
            if line is not None:
                line.quantity = quantity
                line.updated_at = datetime.utcnow()
                self.session.add(line)

        return line is not None

    def remove_cart_item(self, account_id: int, cart_id: int) -> bool:
        with unit_of_work(self.session, self.timeout_ms):
            line = self._owned_line(account_id, cart_id)
            if line is not None:
                self.session.delete(line)

        return line is not None

    def clear_cart(self, account_id: int) -> int:
        with unit_of_work(self.session, self.timeout_ms):
            lines = self.session.exec(
                select(CartLine).where(CartLine.account_id == account_id)
            ).all()

            for line in lines:
                self.session.delete(line)

        logger.info(f"Cleared {len(lines)} cart lines for account {account_id}")
        return len(lines)

    def _owned_line(self, account_id: int, cart_id: int) -> Optional[CartLine]:
        return self.session.exec(
            select(CartLine)
            .where(CartLine.id == cart_id, CartLine.account_id == account_id)
            .with_for_update()
        ).first()
