import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from storefront.database import unit_of_work
from storefront.exceptions import OrderNotFound, StoreUnavailable
from storefront.models import Account


def test_commits_on_success(session):
    with unit_of_work(session, timeout_ms=1000):
        session.add(Account(email="carol@example.com", full_name="Carol"))

    assert session.exec(select(Account.email)).all() == ["carol@example.com"]


def test_domain_error_rolls_back_and_propagates(session):
    with pytest.raises(OrderNotFound):
        with unit_of_work(session):
            session.add(Account(email="dave@example.com", full_name="Dave"))
            session.flush()
            raise OrderNotFound()

    assert session.exec(select(Account)).all() == []


def test_operational_failure_becomes_store_unavailable(session):
    with pytest.raises(StoreUnavailable) as info:
        with unit_of_work(session):
            session.add(Account(email="erin@example.com", full_name="Erin"))
            session.flush()
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))

    assert isinstance(info.value.__cause__, OperationalError)
    assert session.exec(select(Account)).all() == []
