import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from storefront.constants.order_status import OrderPaymentStatus
from storefront.database import unit_of_work
from storefront.exceptions import (
    InvoiceAlreadyExists,
    InvoiceNotFound,
    OrderNotFound,
    PaymentNotCompleted,
)
from storefront.models.invoice import Invoice
from storefront.models.order import Order
from storefront.utils.numbers import allocate_number, generate_invoice_number

logger = logging.getLogger(__name__)


def invoice_paths(invoice_number: str, storage_dir: str, base_url: str) -> Dict[str, str]:
    """Placeholder locations; nothing is rendered at either path yet."""
    return {
        "file_path": f"{storage_dir.rstrip('/')}/{invoice_number}.pdf",
        "file_url": f"{base_url.rstrip('/')}/{invoice_number}.pdf",
    }


class InvoiceGenerator:
    """One invoice per paid order."""

    def __init__(
        self,
        session: Session,
        timeout_ms: Optional[int] = None,
        number_attempts: int = 5,
        storage_dir: str = "/invoices",
        base_url: str = "https://cdn.yourapp.com/invoices",
    ):
        self.session = session
        self.timeout_ms = timeout_ms
        self.number_attempts = number_attempts
        self.storage_dir = storage_dir
        self.base_url = base_url

    def generate_invoice(self, account_id: int, order_id: int) -> Dict[str, Any]:
        try:
            with unit_of_work(self.session, self.timeout_ms):
                # the order lock serialises concurrent requests for the same invoice
                order = self.session.exec(
                    select(Order)
                    .where(Order.id == order_id, Order.account_id == account_id)
                    .with_for_update()
                ).first()

                if not order:
                    raise OrderNotFound()

                if order.payment_status != OrderPaymentStatus.paid.value:
                    logger.warning(
                        f"Invoice refused for order {order.order_number}: "
                        f"payment status is {order.payment_status}"
                    )
                    raise PaymentNotCompleted()

                existing = self.session.exec(
                    select(Invoice.id).where(Invoice.order_id == order.id)
                ).first()

                if existing is not None:
                    raise InvoiceAlreadyExists()

                invoice = Invoice(order_id=order.id, **self._new_number(order.id))
                self.session.add(invoice)
                self.session.flush()
                record = self._record(invoice)
        except IntegrityError as exc:
            # only a committed invoice for this order means the race was lost;
            # any other constraint failure propagates unchanged
            winner = self.session.exec(
                select(Invoice.id).where(Invoice.order_id == order_id)
            ).first()
            if winner is None:
                raise
            raise InvoiceAlreadyExists() from exc

        logger.info(f"Invoice {record['invoice_number']} generated for order {order_id}")
        return record

    def get_invoice_by_order(self, account_id: int, order_id: int) -> Optional[Dict[str, Any]]:
        invoice = self.session.exec(
            select(Invoice)
            .join(Order, Invoice.order_id == Order.id)
            .where(Invoice.order_id == order_id, Order.account_id == account_id)
        ).first()

        return self._record(invoice) if invoice else None

    # -------- admin --------

    def get_invoice(self, invoice_id: int) -> Dict[str, Any]:
        invoice = self.session.get(Invoice, invoice_id)
        if not invoice:
            raise InvoiceNotFound()

        return self._record(invoice)

    def reissue_invoice(self, invoice_id: int) -> Dict[str, Any]:
        with unit_of_work(self.session, self.timeout_ms):
            invoice = self.session.exec(
                select(Invoice).where(Invoice.id == invoice_id).with_for_update()
            ).first()

            if not invoice:
                raise InvoiceNotFound()

            previous = invoice.invoice_number
            for key, value in self._new_number(invoice.order_id).items():
                setattr(invoice, key, value)
            invoice.updated_at = datetime.utcnow()
            self.session.add(invoice)
            self.session.flush()
            record = self._record(invoice)

        logger.info(f"Invoice {previous} reissued as {record['invoice_number']}")
        return record

    def _new_number(self, order_id: int) -> Dict[str, str]:
        number = allocate_number(
            self.session,
            Invoice.invoice_number,
            lambda: generate_invoice_number(order_id),
            self.number_attempts,
        )
        return {"invoice_number": number, **invoice_paths(number, self.storage_dir, self.base_url)}

    @staticmethod
    def _record(invoice: Invoice) -> Dict[str, Any]:
        return {
            "invoice_id": invoice.id,
            "order_id": invoice.order_id,
            "invoice_number": invoice.invoice_number,
            "file_path": invoice.file_path,
            "file_url": invoice.file_url,
            "generated_at": invoice.generated_at,
        }
