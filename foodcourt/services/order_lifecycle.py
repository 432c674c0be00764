"""
Order Lifecycle

pending -> paid -> preparing -> ready -> completed, and cancelled from any
non-terminal state. completed and cancelled accept no further moves.
Each stage timestamp is written on first entry and never overwritten.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodcourt.core.errors import NotFound, InvalidTransition, ValidationError, Internal, OrderingError
from foodcourt.crud.order import get_order
from foodcourt.models.order.order import Order, OrderStatus, PaymentMethod
from foodcourt.utils.timezones import utcnow

log = logging.getLogger(__name__)


TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    # Refunds after pickup are not handled here
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in TRANSITIONS.items() if not targets)

STAGE_TIMESTAMPS = {
    OrderStatus.PAID: "paid_at",
    OrderStatus.PREPARING: "prepared_at",
    OrderStatus.READY: "ready_at",
    OrderStatus.COMPLETED: "completed_at",
}


def can_transition(src: OrderStatus, dst: OrderStatus) -> bool:
    return dst in TRANSITIONS.get(src, frozenset())


def _coerce_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown order status: {value}") from None


def _coerce_payment_method(value) -> PaymentMethod:
    try:
        return PaymentMethod(value)
    except ValueError:
        raise ValidationError(f"Unknown payment method: {value}") from None


async def update_status(
    db: AsyncSession,
    order_id: str,
    new_status,
    payment_method=None,
    now: Optional[datetime] = None,
) -> Order:
    new_status = _coerce_status(new_status)
    if new_status == OrderStatus.PAID:
        if payment_method is None:
            raise ValidationError("payment_method is required when marking an order paid")
        payment_method = _coerce_payment_method(payment_method)

    now = now or utcnow()

    try:
        result = await db.execute(
            select(Order)
            .where(Order.id == order_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        order = result.scalar_one_or_none()
        if not order:
            raise NotFound(f"Order {order_id} not found")

        prior = order.status
        if not can_transition(prior, new_status):
            raise InvalidTransition(
                f"Cannot move order {order.queue_number} from {prior.value} to {new_status.value}"
            )

        values = {"status": new_status, "updated_at": now}
        stamp_field = STAGE_TIMESTAMPS.get(new_status)
        if stamp_field and getattr(order, stamp_field) is None:
            values[stamp_field] = now
        if new_status == OrderStatus.PAID:
            values["payment_method"] = payment_method

        # Compare-and-set on the status we validated against
        result = await db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == prior)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise InvalidTransition(
                f"Order {order.queue_number} changed while updating; reload and retry"
            )

        await db.commit()
    except InvalidTransition as exc:
        await db.rollback()
        log.warning("status change rejected: order=%s to=%s (%s)", order_id, new_status.value, exc.message)
        raise
    except OrderingError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        log.exception("update_status failed: order=%s to=%s", order_id, new_status.value)
        raise Internal("Failed to update order status") from exc

    log.info("order status: order=%s %s -> %s", order_id, prior.value, new_status.value)
    return await get_order(db, order_id, populate_existing=True)
