"""
Queue Number Allocation

Daily per-vendor pickup tickets of the form ``V{vendor_id}-{YYYYMMDD}-{seq}``:
- sequence restarts at 1 every calendar day for each vendor
- zero-padded to 3 digits, growing past 999 instead of wrapping
- uniqueness guarded by the (vendor_id, queue_date, queue_sequence) constraint;
  a lost race is retried with a fresh sequence
"""
import logging
from dataclasses import dataclass
from datetime import date

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodcourt.core.config import settings
from foodcourt.core.errors import Conflict
from foodcourt.models.order.order import Order

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueueTicket:
    vendor_id: int
    queue_date: date
    sequence: int

    @property
    def number(self) -> str:
        return format_queue_number(self.vendor_id, self.queue_date, self.sequence)


def format_queue_number(vendor_id: int, as_of_date: date, sequence: int) -> str:
    return f"V{vendor_id}-{as_of_date:%Y%m%d}-{sequence:03d}"


async def allocate(db: AsyncSession, vendor_id: int, as_of_date: date) -> QueueTicket:
    """
    Next ticket for a vendor on a given day.

    Must run inside the transaction that inserts the order; on its own the
    read is only a proposal that the unique constraint confirms or rejects.
    """
    result = await db.execute(
        select(func.coalesce(func.max(Order.queue_sequence), 0)).where(
            Order.vendor_id == vendor_id,
            Order.queue_date == as_of_date,
        )
    )
    return QueueTicket(vendor_id=vendor_id, queue_date=as_of_date, sequence=result.scalar_one() + 1)


def _is_unique_violation(exc: IntegrityError) -> bool:
    # asyncpg: "duplicate key value violates unique constraint"
    # sqlite:  "UNIQUE constraint failed"
    return "unique" in str(exc.orig).lower()


async def insert_with_queue_number(
    db: AsyncSession,
    vendor_id: int,
    as_of_date: date,
    max_attempts: int = None,
    **fields,
) -> Order:
    """
    Allocate a ticket and insert the order header under it.

    Each attempt runs in a SAVEPOINT so a duplicate-key failure only undoes
    the header insert, not the caller's transaction.
    """
    max_attempts = max_attempts or settings.queue_allocation_retries

    for attempt in range(1, max_attempts + 1):
        ticket = await allocate(db, vendor_id, as_of_date)
        order = Order(
            vendor_id=vendor_id,
            queue_date=ticket.queue_date,
            queue_sequence=ticket.sequence,
            queue_number=ticket.number,
            **fields,
        )
        try:
            async with db.begin_nested():
                db.add(order)
                await db.flush()
        except IntegrityError as exc:
            if not _is_unique_violation(exc):
                raise
            log.warning(
                "queue number %s taken, retrying (attempt %s/%s)",
                ticket.number, attempt, max_attempts,
            )
            continue

        return order

    raise Conflict(
        f"Could not allocate a queue number for vendor {vendor_id} after {max_attempts} attempts"
    )
