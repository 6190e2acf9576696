from fastapi import Depends, Request
from sqlmodel import Session

from storefront.config import Settings
from storefront.database import get_session
from storefront.services.cart_service import CartStore
from storefront.services.invoice_service import InvoiceGenerator
from storefront.services.order_service import OrderEngine
from storefront.services.payment_service import PaymentLedger


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cart_store(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> CartStore:
    return CartStore(session, timeout_ms=settings.transaction_timeout_ms)


def get_order_engine(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> OrderEngine:
    return OrderEngine(
        session,
        timeout_ms=settings.transaction_timeout_ms,
        number_attempts=settings.number_attempts,
    )


def get_payment_ledger(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> PaymentLedger:
    return PaymentLedger(session, timeout_ms=settings.transaction_timeout_ms)


def get_invoice_generator(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> InvoiceGenerator:
    return InvoiceGenerator(
        session,
        timeout_ms=settings.transaction_timeout_ms,
        number_attempts=settings.number_attempts,
        storage_dir=settings.invoice_storage_dir,
        base_url=settings.invoice_base_url,
    )
