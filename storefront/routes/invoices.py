from fastapi import APIRouter, Depends

from storefront.dependencies.services import get_invoice_generator
from storefront.exceptions import InvoiceNotFound
from storefront.models.account import Account
from storefront.schemas.invoice_schemas import InvoiceGenerateRequest
from storefront.services.invoice_service import InvoiceGenerator
from storefront.utils.responses import success
from storefront.utils.token import get_current_account

router = APIRouter()


@router.post("/generate", status_code=201)
def generate_invoice(
    data: InvoiceGenerateRequest,
    invoices: InvoiceGenerator = Depends(get_invoice_generator),
    current_account: Account = Depends(get_current_account)
):
    invoice = invoices.generate_invoice(current_account.id, data.order_id)
    return success(invoice, "Invoice generated")


@router.get("/order/{order_id}")
def get_invoice(
    order_id: int,
    invoices: InvoiceGenerator = Depends(get_invoice_generator),
    current_account: Account = Depends(get_current_account)
):
    invoice = invoices.get_invoice_by_order(current_account.id, order_id)

    if invoice is None:
        raise InvoiceNotFound()

    return success(invoice)
