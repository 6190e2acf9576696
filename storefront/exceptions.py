from enum import Enum


class ErrorKind(str, Enum):
    CART_EMPTY = "CART_EMPTY"
    CART_ITEM_NOT_FOUND = "CART_ITEM_NOT_FOUND"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_ALREADY_PAID = "ORDER_ALREADY_PAID"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
    PAYMENT_NOT_COMPLETED = "PAYMENT_NOT_COMPLETED"
    INVOICE_ALREADY_EXISTS = "INVOICE_ALREADY_EXISTS"
    INVOICE_NOT_FOUND = "INVOICE_NOT_FOUND"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


class StorefrontError(Exception):
    """Base class for every domain failure the core reports to the boundary."""

    kind: ErrorKind
    message: str = "Request could not be completed"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class CartEmpty(StorefrontError):
    kind = ErrorKind.CART_EMPTY
    message = "Cart is empty"


class CartItemNotFound(StorefrontError):
    kind = ErrorKind.CART_ITEM_NOT_FOUND
    message = "Cart item not found"


class OrderNotFound(StorefrontError):
    kind = ErrorKind.ORDER_NOT_FOUND
    message = "Order not found"


class OrderAlreadyPaid(StorefrontError):
    kind = ErrorKind.ORDER_ALREADY_PAID
    message = "Order already paid"


class PaymentNotFound(StorefrontError):
    kind = ErrorKind.PAYMENT_NOT_FOUND
    message = "Payment not found"


class PaymentNotCompleted(StorefrontError):
    kind = ErrorKind.PAYMENT_NOT_COMPLETED
    message = "Payment not completed for this order"


class InvoiceAlreadyExists(StorefrontError):
    kind = ErrorKind.INVOICE_ALREADY_EXISTS
    message = "Invoice already exists for this order"


class InvoiceNotFound(StorefrontError):
    kind = ErrorKind.INVOICE_NOT_FOUND
    message = "Invoice not found"


class InvalidStatusTransition(StorefrontError):
    kind = ErrorKind.INVALID_STATUS_TRANSITION
    message = "Order status transition not allowed"


class StoreUnavailable(StorefrontError):
    """Storage failed or the transaction ran past its deadline; safe to retry."""

    kind = ErrorKind.STORE_UNAVAILABLE
    message = "Database temporarily unavailable"
