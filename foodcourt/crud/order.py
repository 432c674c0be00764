from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from foodcourt.core.errors import NotFound
from foodcourt.models.order.order import Order, OrderStatus
from .vendor import get_vendor

# Work-in-progress states shown on the kitchen screen
ACTIVE_QUEUE_STATUSES = (OrderStatus.PAID, OrderStatus.PREPARING, OrderStatus.READY)


def _with_details(query):
    return query.options(
        selectinload(Order.vendor),
        selectinload(Order.items),
        selectinload(Order.creator),
    )


async def get_order(db: AsyncSession, order_id: str, populate_existing: bool = False) -> Order:
    query = _with_details(select(Order).where(Order.id == order_id))
    if populate_existing:
        query = query.execution_options(populate_existing=True)

    result = await db.execute(query)
    order = result.scalar_one_or_none()
    if not order:
        raise NotFound(f"Order {order_id} not found")
    return order


async def list_orders(
    db: AsyncSession,
    vendor_id: Optional[int] = None,
    status: Optional[OrderStatus] = None,
    on_date: Optional[date] = None,
):
    """Orders newest first, optionally narrowed to a vendor, status and queue date."""
    query = select(Order)

    if vendor_id is not None:
        await get_vendor(db, vendor_id)
        query = query.where(Order.vendor_id == vendor_id)
    if status is not None:
        query = query.where(Order.status == status)
    if on_date is not None:
        query = query.where(Order.queue_date == on_date)

    query = _with_details(query).order_by(
        Order.created_at.desc(),
        Order.queue_date.desc(),
        Order.queue_sequence.desc(),
    )

    result = await db.execute(query)
    return result.scalars().all()


async def get_active_queue(db: AsyncSession, vendor_id: int):
    """Paid, preparing and ready orders for a vendor, oldest first (serving order)."""
    await get_vendor(db, vendor_id)

    query = _with_details(
        select(Order).where(
            Order.vendor_id == vendor_id,
            Order.status.in_(ACTIVE_QUEUE_STATUSES),
        )
    ).order_by(
        Order.created_at.asc(),
        Order.queue_date.asc(),
        Order.queue_sequence.asc(),
    )

    result = await db.execute(query)
    return result.scalars().all()
