import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, SQLModel, create_engine

from storefront.config import Settings
from storefront.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    url = settings.database_url

    if url.startswith("sqlite"):
        return create_engine(url, echo=False, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        echo=False,
        pool_size=settings.pool_size,
        pool_pre_ping=True,      # checks dead connections
        pool_recycle=settings.pool_recycle,
    )


def create_db_and_tables(engine: Engine):
    from storefront import models  # noqa: F401  registers every table

    SQLModel.metadata.create_all(engine)


def get_session(request: Request) -> Iterator[Session]:
    # one pooled connection per request, returned on every exit path
    with Session(request.app.state.engine) as session:
        yield session


def _apply_deadline(session: Session, timeout_ms: Optional[int]):
    if not timeout_ms:
        return

    connection = session.connection()
    if connection.dialect.name == "postgresql":
        connection.exec_driver_sql(f"SET LOCAL statement_timeout = {int(timeout_ms)}")


@contextmanager
def unit_of_work(session: Session, timeout_ms: Optional[int] = None) -> Iterator[Session]:
    """Run the enclosed block as one transaction.

    Commits when the block finishes, rolls back on any exception and
    re-raises it. Operational failures (lost connection, statement timeout)
    surface as ``StoreUnavailable`` so callers can retry the whole operation.
    """
    try:
        _apply_deadline(session, timeout_ms)
        yield session
        session.commit()
    except OperationalError as exc:
        session.rollback()
        logger.error(f"Transaction aborted by storage failure: {exc.orig}")
        raise StoreUnavailable() from exc
    except Exception:
        session.rollback()
        raise
