from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from storefront.models.order_item import OrderItem
from storefront.models.order_status_history import OrderStatusHistory


class Order(SQLModel, table=True):
    __tablename__ = "orders"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    order_number: str = Field(index=True, unique=True)

    # monetary snapshot, computed once at checkout
    subtotal: Decimal = Field(max_digits=10, decimal_places=2)
    tax_amount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    shipping_amount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    discount_amount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    total_amount: Decimal = Field(max_digits=10, decimal_places=2)

    shipping_address_id: int = Field(foreign_key="address.id")
    billing_address_id: int = Field(foreign_key="address.id")
    payment_method: Optional[str] = None
    notes: Optional[str] = None

    status: str = Field(default="pending", index=True)
    payment_status: str = Field(default="unpaid")

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    items: List["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
    history: List["OrderStatusHistory"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "OrderStatusHistory.id",
        },
    )
