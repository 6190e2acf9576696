import pytest

from storefront import exceptions
from storefront.error_handlers import ERROR_STATUS
from storefront.exceptions import ErrorKind, StorefrontError


def test_every_error_kind_has_a_status():
    assert set(ERROR_STATUS) == set(ErrorKind)


@pytest.mark.parametrize(
    "error_class, status",
    [
        (exceptions.CartEmpty, 400),
        (exceptions.OrderNotFound, 404),
        (exceptions.OrderAlreadyPaid, 409),
        (exceptions.PaymentNotFound, 404),
        (exceptions.PaymentNotCompleted, 400),
        (exceptions.InvoiceAlreadyExists, 409),
        (exceptions.StoreUnavailable, 503),
    ],
)
def test_domain_errors_map_to_http_status(error_class, status):
    assert ERROR_STATUS[error_class().kind] == status


def test_every_error_class_declares_its_kind():
    classes = [
        obj for obj in vars(exceptions).values()
        if isinstance(obj, type) and issubclass(obj, StorefrontError) and obj is not StorefrontError
    ]

    assert {cls.kind for cls in classes} == set(ErrorKind)


def test_custom_message_overrides_default():
    error = exceptions.InvalidStatusTransition("Cannot move order from 'pending' to 'delivered'")

    assert error.message == "Cannot move order from 'pending' to 'delivered'"
    assert exceptions.CartEmpty().message == "Cart is empty"
