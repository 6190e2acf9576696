from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import Any, Optional
from decimal import Decimal
from datetime import datetime


class Payment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", index=True)

    payment_method: str
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    currency: str = Field(default="USD")
    status: str = Field(default="pending")  # pending | completed | failed | refunded

    transaction_id: Optional[str] = Field(default=None, index=True)
    gateway_response: Optional[Any] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
