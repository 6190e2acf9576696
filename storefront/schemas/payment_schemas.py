from typing import Any, Optional

from pydantic import BaseModel, Field


class PaymentInitiateRequest(BaseModel):
    order_id: int = Field(gt=0)
    payment_method: str = Field(min_length=1)


class PaymentStatusUpdate(BaseModel):
    # free-form: the gateway decides the vocabulary (completed, failed, refunded, ...)
    status: str = Field(min_length=1)
    transaction_id: Optional[str] = None
    gateway_response: Optional[Any] = None
