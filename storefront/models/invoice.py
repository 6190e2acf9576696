from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime


class Invoice(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="orders.id", unique=True)
    invoice_number: str = Field(index=True, unique=True)

    # placeholders until PDFs are rendered
    file_path: Optional[str] = None
    file_url: Optional[str] = None

    generated_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
