from fastapi import APIRouter, Depends

from storefront.dependencies.services import get_order_engine
from storefront.exceptions import OrderNotFound
from storefront.models.account import Account
from storefront.schemas.orders_schemas import PlaceOrderRequest
from storefront.services.order_service import OrderEngine
from storefront.utils.responses import success
from storefront.utils.token import get_current_account

router = APIRouter()


@router.post("", status_code=201)
def place_order(
    data: PlaceOrderRequest,
    orders: OrderEngine = Depends(get_order_engine),
    current_account: Account = Depends(get_current_account)
):
    order = orders.place_order(
        current_account.id,
        data.shipping_address_id,
        data.billing_address_id,
        data.payment_method,
        data.notes,
    )
    return success(order, "Order placed successfully")


@router.get("")
def list_orders(
    orders: OrderEngine = Depends(get_order_engine),
    current_account: Account = Depends(get_current_account)
):
    return success(orders.list_orders(current_account.id))


@router.get("/{order_id}")
def get_order(
    order_id: int,
    orders: OrderEngine = Depends(get_order_engine),
    current_account: Account = Depends(get_current_account)
):
    details = orders.get_order_details(current_account.id, order_id)

    if details is None:
        raise OrderNotFound()

    return success(details)
