from enum import Enum


class OrderStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"
    failed = "failed"


class PaymentStatus(str, Enum):
    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"


class OrderPaymentStatus(str, Enum):
    unpaid = "unpaid"
    pending = "pending"
    paid = "paid"
    failed = "failed"


ALLOWED_TRANSITIONS = {
    "pending": ["processing", "cancelled"],
    "processing": ["shipped", "cancelled", "failed"],
    "shipped": ["delivered", "failed"],
    "delivered": [],
    "failed": [],
    "cancelled": []
}


def order_payment_status_for(payment_status: str) -> str:
    """Order payment status implied by a payment's latest status.

    Recomputed from scratch on every callback, never merged with the
    previous value.
    """
    if payment_status == PaymentStatus.completed.value:
        return OrderPaymentStatus.paid.value
    if payment_status == PaymentStatus.failed.value:
        return OrderPaymentStatus.failed.value
    return OrderPaymentStatus.pending.value
