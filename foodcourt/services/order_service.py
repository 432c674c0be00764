"""
Order Intake

Creates an order header and its lines in one transaction:
- vendor must exist and be active
- every line must reference an available item on that vendor's menu
- line prices are copied from the catalog at creation time
- order total is the sum of the line subtotals

Any failure rolls the whole unit of work back.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodcourt.core.errors import NotFound, InvalidItem, ValidationError, Internal, OrderingError
from foodcourt.crud.menu_item import get_item
from foodcourt.crud.order import get_order
from foodcourt.models.order.order import Order, OrderItem, OrderStatus
from foodcourt.models.user import User
from foodcourt.models.vendor import Vendor
from foodcourt.services.queue_allocator import insert_with_queue_number
from foodcourt.utils.timezones import utcnow, business_date

log = logging.getLogger(__name__)


@dataclass
class RequestedItem:
    menu_item_id: str
    quantity: int
    notes: Optional[str] = None


def _validate_items(items: Sequence[RequestedItem]) -> None:
    if not items:
        raise ValidationError("Order must contain at least one item")
    for item in items:
        if not item.menu_item_id:
            raise ValidationError("Each item needs a menu_item_id")
        if item.quantity is None or item.quantity < 1:
            raise ValidationError(f"Quantity for menu item {item.menu_item_id} must be at least 1")


async def _lock_active_vendor(db: AsyncSession, vendor_id: int) -> Vendor:
    # Row lock serializes order creation per vendor on databases that support it
    result = await db.execute(
        select(Vendor).where(Vendor.id == vendor_id).with_for_update()
    )
    vendor = result.scalar_one_or_none()
    if not vendor or not vendor.is_active:
        raise NotFound(f"Vendor {vendor_id} not found")
    return vendor


async def _get_active_user(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, user_id)
    if not user or not user.is_active:
        raise NotFound(f"User {user_id} not found")
    return user


async def create_order(
    db: AsyncSession,
    vendor_id: int,
    items: Sequence[RequestedItem],
    creator_id: str,
    customer_name: Optional[str] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Order:
    _validate_items(items)

    now = now or utcnow()
    as_of_date = business_date(now)

    try:
        await _lock_active_vendor(db, vendor_id)
        await _get_active_user(db, creator_id)

        order = await insert_with_queue_number(
            db,
            vendor_id,
            as_of_date,
            customer_name=customer_name,
            notes=notes,
            status=OrderStatus.PENDING,
            total_amount=Decimal("0"),
            created_by=creator_id,
            created_at=now,
            updated_at=now,
        )

        order_total = Decimal("0")
        for position, row in enumerate(items):
            try:
                menu_item = await get_item(db, row.menu_item_id)
            except NotFound:
                raise InvalidItem(f"Menu item {row.menu_item_id} not found") from None

            if menu_item.vendor_id != vendor_id:
                raise InvalidItem(f"Menu item {row.menu_item_id} is not sold by vendor {vendor_id}")
            if not menu_item.is_available:
                raise InvalidItem(f"Menu item '{menu_item.name}' is not available")

            # Snapshot price at time of order
            price = Decimal(menu_item.price)
            subtotal = price * row.quantity
            order_total += subtotal

            db.add(
                OrderItem(
                    order_id=order.id,
                    menu_item_id=menu_item.id,
                    position=position,
                    quantity=row.quantity,
                    price=price,
                    subtotal=subtotal,
                    item_name=menu_item.name,
                    notes=row.notes,
                )
            )

        order.total_amount = order_total
        await db.flush()
        await db.commit()
    except OrderingError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        log.exception("create_order failed: vendor=%s creator=%s", vendor_id, creator_id)
        raise Internal("Failed to create order") from exc

    log.info(
        "order created: vendor=%s order=%s queue=%s total=%s items=%s",
        vendor_id, order.id, order.queue_number, order_total, len(items),
    )
    return await get_order(db, order.id, populate_existing=True)
