"""Tests for order lookups, listings and the vendor pickup queue."""
from datetime import date, datetime, timedelta

import pytest
import pytest_asyncio

from foodcourt.core.errors import NotFound
from foodcourt.crud.order import get_active_queue, get_order, list_orders
from foodcourt.models.order.order import OrderStatus, PaymentMethod
from foodcourt.services.order_lifecycle import update_status
from foodcourt.services.order_service import RequestedItem, create_order

T0 = datetime(2025, 1, 15, 8, 0)


@pytest_asyncio.fixture
async def day_of_orders(db, vendor, other_vendor, cashier, menu):
    """
    Five orders for the main vendor placed a minute apart and moved to
    different stages, plus one order for the other vendor:

        001 pending, 002 paid, 003 preparing, 004 ready, 005 completed
    """
    orders = []
    for minute in range(5):
        order = await create_order(
            db,
            vendor_id=vendor.id,
            items=[RequestedItem(menu_item_id=menu["rendang"].id, quantity=1)],
            creator_id=cashier.id,
            now=T0 + timedelta(minutes=minute),
        )
        orders.append(order)

    path = [OrderStatus.PAID, OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.COMPLETED]
    for index, order in enumerate(orders[1:], start=1):
        for status in path[:index]:
            await update_status(
                db, order.id, status,
                payment_method=PaymentMethod.CASH if status == OrderStatus.PAID else None,
            )

    await create_order(
        db,
        vendor_id=other_vendor.id,
        items=[RequestedItem(menu_item_id=menu["mie_ayam"].id, quantity=1)],
        creator_id=cashier.id,
        now=T0,
    )
    return orders


class TestGetOrder:
    @pytest.mark.asyncio
    async def test_loads_lines_vendor_and_creator(self, db, day_of_orders, vendor, cashier):
        order = await get_order(db, day_of_orders[0].id)

        assert order.vendor.name == vendor.name
        assert order.creator.full_name == cashier.full_name
        assert len(order.items) == 1

    @pytest.mark.asyncio
    async def test_unknown_order(self, db):
        with pytest.raises(NotFound):
            await get_order(db, "missing")


class TestActiveQueue:
    @pytest.mark.asyncio
    async def test_only_work_in_progress_oldest_first(self, db, vendor, day_of_orders):
        queue = await get_active_queue(db, vendor.id)

        assert [o.queue_sequence for o in queue] == [2, 3, 4]
        assert [o.status for o in queue] == [OrderStatus.PAID, OrderStatus.PREPARING, OrderStatus.READY]

    @pytest.mark.asyncio
    async def test_empty_for_vendor_without_paid_orders(self, db, other_vendor, day_of_orders):
        assert await get_active_queue(db, other_vendor.id) == []

    @pytest.mark.asyncio
    async def test_unknown_vendor(self, db):
        with pytest.raises(NotFound):
            await get_active_queue(db, 4242)


class TestListOrders:
    @pytest.mark.asyncio
    async def test_vendor_orders_newest_first(self, db, vendor, day_of_orders):
        orders = await list_orders(db, vendor_id=vendor.id)

        assert [o.queue_sequence for o in orders] == [5, 4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_filter_by_status(self, db, vendor, day_of_orders):
        orders = await list_orders(db, vendor_id=vendor.id, status=OrderStatus.COMPLETED)

        assert [o.id for o in orders] == [day_of_orders[4].id]

    @pytest.mark.asyncio
    async def test_filter_by_queue_date(self, db, vendor, day_of_orders):
        assert len(await list_orders(db, vendor_id=vendor.id, on_date=date(2025, 1, 15))) == 5
        assert await list_orders(db, vendor_id=vendor.id, on_date=date(2025, 1, 16)) == []

    @pytest.mark.asyncio
    async def test_all_vendors(self, db, day_of_orders):
        assert len(await list_orders(db)) == 6

    @pytest.mark.asyncio
    async def test_unknown_vendor(self, db):
        with pytest.raises(NotFound):
            await list_orders(db, vendor_id=4242)
