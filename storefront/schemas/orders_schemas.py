from typing import Optional

from pydantic import BaseModel, Field

from storefront.constants.order_status import OrderStatus


class PlaceOrderRequest(BaseModel):
    shipping_address_id: int = Field(gt=0)
    billing_address_id: int = Field(gt=0)
    payment_method: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=1000)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    notes: Optional[str] = None
