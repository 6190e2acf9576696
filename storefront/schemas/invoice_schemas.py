from pydantic import BaseModel, Field


class InvoiceGenerateRequest(BaseModel):
    order_id: int = Field(gt=0)
