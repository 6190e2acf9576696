from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Address(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    line1: str
    city: str
    state: str
    postal_code: str
    country: str = Field(default="US")
    is_default: bool = Field(default=False)
    created_at: datetime = Field(default_factory=datetime.utcnow)
