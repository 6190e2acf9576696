from decimal import Decimal

from pydantic import BaseModel, Field


class CartAddRequest(BaseModel):
    product_id: int = Field(gt=0)
    quantity: int = Field(default=1, gt=0)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)


class CartUpdateRequest(BaseModel):
    cart_id: int = Field(gt=0)
    quantity: int = Field(ge=0)
