import random
import time
from typing import Callable

from sqlmodel import Session, select


def _timestamp() -> int:
    # microseconds since the epoch
    return time.time_ns() // 1000


def generate_order_number() -> str:
    return f"ORD-{_timestamp()}-{random.randint(0, 999)}"


def generate_invoice_number(order_id: int) -> str:
    return f"INV-{_timestamp()}-{order_id}"


def allocate_number(session: Session, column, generate: Callable[[], str], attempts: int) -> str:
    """Return a generated number not yet present in ``column``.

    The unique constraint on the column still decides races between
    concurrent transactions; this only avoids the obvious collision.
    """
    for _ in range(max(attempts, 1)):
        candidate = generate()
        taken = session.exec(select(column).where(column == candidate)).first()
        if taken is None:
            return candidate

    raise RuntimeError(f"Could not allocate a unique value for {column} after {attempts} attempts")
