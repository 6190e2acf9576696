# -------- ADMIN ORDERS / PAYMENTS / INVOICES --------
from fastapi import APIRouter, Depends

from storefront.dependencies.admin import require_admin
from storefront.dependencies.services import (
    get_invoice_generator,
    get_order_engine,
    get_payment_ledger,
)
from storefront.models.account import Account
from storefront.schemas.orders_schemas import OrderStatusUpdate
from storefront.services.invoice_service import InvoiceGenerator
from storefront.services.order_service import OrderEngine
from storefront.services.payment_service import PaymentLedger
from storefront.utils.responses import success

router = APIRouter()


@router.get("/orders")
def list_orders(
    orders: OrderEngine = Depends(get_order_engine),
    _: Account = Depends(require_admin)
):
    return success(orders.list_all_orders())


@router.patch("/orders/{order_id}/status")
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    orders: OrderEngine = Depends(get_order_engine),
    _: Account = Depends(require_admin)
):
    order = orders.update_order_status(order_id, data.status.value, data.notes)
    return success(
        {"order_id": order.id, "status": order.status},
        "Order status updated",
    )


@router.get("/payments")
def list_payments(
    ledger: PaymentLedger = Depends(get_payment_ledger),
    _: Account = Depends(require_admin)
):
    return success(ledger.list_all_payments())


@router.patch("/payments/{payment_id}/refund")
def refund_payment(
    payment_id: int,
    ledger: PaymentLedger = Depends(get_payment_ledger),
    _: Account = Depends(require_admin)
):
    return success(ledger.refund_payment(payment_id), "Payment marked refunded")


@router.get("/invoices/{invoice_id}")
def get_invoice(
    invoice_id: int,
    invoices: InvoiceGenerator = Depends(get_invoice_generator),
    _: Account = Depends(require_admin)
):
    return success(invoices.get_invoice(invoice_id))


@router.patch("/invoices/{invoice_id}/reissue")
def reissue_invoice(
    invoice_id: int,
    invoices: InvoiceGenerator = Depends(get_invoice_generator),
    _: Account = Depends(require_admin)
):
    return success(invoices.reissue_invoice(invoice_id), "Invoice reissued successfully")
