from fastapi import APIRouter, Depends

from storefront.dependencies.services import get_payment_ledger
from storefront.models.account import Account
from storefront.schemas.payment_schemas import PaymentInitiateRequest, PaymentStatusUpdate
from storefront.services.payment_service import PaymentLedger
from storefront.utils.responses import success
from storefront.utils.token import get_current_account

router = APIRouter()


@router.post("/initiate", status_code=201)
def initiate_payment(
    data: PaymentInitiateRequest,
    ledger: PaymentLedger = Depends(get_payment_ledger),
    current_account: Account = Depends(get_current_account)
):
    payment = ledger.create_payment(current_account.id, data.order_id, data.payment_method)
    return success(payment, "Payment initiated")


# Simulated gateway callback. Any signed-in account may report a status;
# ownership of the payment is intentionally not checked here.
@router.put("/{payment_id}/status")
def update_payment_status(
    payment_id: int,
    data: PaymentStatusUpdate,
    ledger: PaymentLedger = Depends(get_payment_ledger),
    _: Account = Depends(get_current_account)
):
    result = ledger.update_payment_status(
        payment_id, data.status, data.transaction_id, data.gateway_response
    )
    return success(result, "Payment status updated")


@router.get("/order/{order_id}")
def get_order_payments(
    order_id: int,
    ledger: PaymentLedger = Depends(get_payment_ledger),
    current_account: Account = Depends(get_current_account)
):
    return success(ledger.get_payments_by_order(current_account.id, order_id))
