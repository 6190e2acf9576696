from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storefront import models  # noqa: F401
from storefront.config import Settings
from storefront.main import create_app
from storefront.models import Account, Address, Product

TEST_SECRET = "test-secret"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seed(engine):
    """Two shoppers, an admin, three products and an address per shopper."""
    with Session(engine) as s:
        alice = Account(email="alice@example.com", full_name="Alice Shopper")
        bob = Account(email="bob@example.com", full_name="Bob Shopper")
        admin = Account(email="ops@example.com", full_name="Ops Admin", role="admin")
        s.add_all([alice, bob, admin])
        s.flush()

        mug = Product(id=7, name="Enamel Mug", sku="MUG-001", slug="enamel-mug", price=Decimal("10.00"))
        lamp = Product(id=8, name="Desk Lamp", sku="LAMP-001", slug="desk-lamp", price=Decimal("50.00"))
        pen = Product(id=9, name="Fountain Pen", sku="PEN-001", slug="fountain-pen", price=Decimal("20.00"))
        s.add_all([mug, lamp, pen])

        alice_home = Address(account_id=alice.id, line1="1 Main St", city="Springfield", state="IL", postal_code="62701")
        bob_home = Address(account_id=bob.id, line1="9 Elm St", city="Shelbyville", state="IL", postal_code="62565")
        s.add_all([alice_home, bob_home])
        s.commit()

        return SimpleNamespace(
            alice=alice.id,
            bob=bob.id,
            admin=admin.id,
            mug=mug.id,
            lamp=lamp.id,
            pen=pen.id,
            alice_address=alice_home.id,
            bob_address=bob_home.id,
        )


@pytest.fixture
def app(engine):
    settings = Settings(
        env="test",
        sqlalchemy_url="sqlite://",
        secret_key=TEST_SECRET,
        algorithm="HS256",
        log_level="WARNING",
    )
    return create_app(settings=settings, engine=engine)


@pytest.fixture
def client(app):
    return TestClient(app)


def bearer(account_id: int) -> dict:
    token = jwt.encode({"sub": str(account_id)}, TEST_SECRET, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth():
    return bearer
