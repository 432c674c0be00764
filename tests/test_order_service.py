"""Tests for order creation: pricing, validation and all-or-nothing writes."""
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import func
from sqlalchemy.future import select

from foodcourt.core.errors import InvalidItem, NotFound, ValidationError
from foodcourt.crud import menu_item as menu_crud
from foodcourt.crud.order import get_order
from foodcourt.models.order.order import Order, OrderItem, OrderStatus
from foodcourt.schemas.menu_item import MenuItemUpdate
from foodcourt.services.order_service import RequestedItem, create_order

NOW = datetime(2025, 1, 15, 12, 0)


async def _row_counts(db):
    orders = await db.scalar(select(func.count(Order.id)))
    lines = await db.scalar(select(func.count(OrderItem.id)))
    return orders, lines


@pytest.fixture
def rendang_and_tea(menu):
    return [
        RequestedItem(menu_item_id=menu["rendang"].id, quantity=2),
        RequestedItem(menu_item_id=menu["es_teh"].id, quantity=1, notes="less sugar"),
    ]


# ============================================================================
# HAPPY PATH
# ============================================================================


class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_total_is_sum_of_line_subtotals(self, db, vendor, cashier, rendang_and_tea):
        order = await create_order(db, vendor.id, rendang_and_tea, cashier.id, now=NOW)

        assert order.total_amount == Decimal("55000")
        assert [line.subtotal for line in order.items] == [Decimal("50000"), Decimal("5000")]

    @pytest.mark.asyncio
    async def test_new_order_is_pending_and_unpaid(self, db, vendor, cashier, rendang_and_tea):
        order = await create_order(
            db, vendor.id, rendang_and_tea, cashier.id, customer_name="Budi", notes="dine in", now=NOW
        )

        assert order.status == OrderStatus.PENDING
        assert order.payment_method is None
        assert order.paid_at is None
        assert order.customer_name == "Budi"
        assert order.notes == "dine in"
        assert order.created_by == cashier.id
        assert order.created_at == NOW

    @pytest.mark.asyncio
    async def test_lines_keep_input_order_and_snapshot_names(self, db, vendor, cashier, menu):
        items = [
            RequestedItem(menu_item_id=menu["es_teh"].id, quantity=3),
            RequestedItem(menu_item_id=menu["ayam_pop"].id, quantity=1),
            RequestedItem(menu_item_id=menu["rendang"].id, quantity=1),
        ]

        order = await create_order(db, vendor.id, items, cashier.id, now=NOW)

        assert [line.item_name for line in order.items] == ["Es Teh Manis", "Nasi Ayam Pop", "Nasi Rendang"]
        assert order.items[0].notes is None

    @pytest.mark.asyncio
    async def test_same_item_twice_makes_two_lines(self, db, vendor, cashier, menu):
        items = [
            RequestedItem(menu_item_id=menu["rendang"].id, quantity=1, notes="extra sambal"),
            RequestedItem(menu_item_id=menu["rendang"].id, quantity=1),
        ]

        order = await create_order(db, vendor.id, items, cashier.id, now=NOW)

        assert len(order.items) == 2
        assert order.total_amount == Decimal("50000")

    @pytest.mark.asyncio
    async def test_price_change_does_not_touch_existing_orders(self, db, vendor, cashier, menu, rendang_and_tea):
        order = await create_order(db, vendor.id, rendang_and_tea, cashier.id, now=NOW)

        await menu_crud.update_item(db, menu["rendang"].id, MenuItemUpdate(price=Decimal("30000")))
        reloaded = await get_order(db, order.id, populate_existing=True)

        assert reloaded.items[0].price == Decimal("25000")
        assert reloaded.total_amount == Decimal("55000")

        newer = await create_order(db, vendor.id, rendang_and_tea, cashier.id, now=NOW)
        assert newer.total_amount == Decimal("65000")


# ============================================================================
# REJECTIONS
# ============================================================================


class TestCreateOrderRejections:
    @pytest.mark.asyncio
    async def test_empty_item_list(self, db, vendor, cashier):
        with pytest.raises(ValidationError):
            await create_order(db, vendor.id, [], cashier.id, now=NOW)

    @pytest.mark.asyncio
    async def test_zero_quantity(self, db, vendor, cashier, menu):
        with pytest.raises(ValidationError):
            await create_order(
                db, vendor.id, [RequestedItem(menu_item_id=menu["rendang"].id, quantity=0)], cashier.id, now=NOW
            )

    @pytest.mark.asyncio
    async def test_unknown_vendor(self, db, cashier, rendang_and_tea):
        with pytest.raises(NotFound):
            await create_order(db, 9999, rendang_and_tea, cashier.id, now=NOW)

    @pytest.mark.asyncio
    async def test_inactive_vendor(self, db, vendor, cashier, rendang_and_tea):
        vendor.is_active = False
        await db.commit()

        with pytest.raises(NotFound):
            await create_order(db, vendor.id, rendang_and_tea, cashier.id, now=NOW)

    @pytest.mark.asyncio
    async def test_unknown_creator(self, db, vendor, menu, rendang_and_tea):
        with pytest.raises(NotFound):
            await create_order(db, vendor.id, rendang_and_tea, "no-such-user", now=NOW)

    @pytest.mark.asyncio
    async def test_unavailable_item_rolls_back_everything(self, db, vendor, cashier, menu):
        items = [
            RequestedItem(menu_item_id=menu["rendang"].id, quantity=1),
            RequestedItem(menu_item_id=menu["sold_out"].id, quantity=1),
        ]

        with pytest.raises(InvalidItem):
            await create_order(db, vendor.id, items, cashier.id, now=NOW)

        assert await _row_counts(db) == (0, 0)

    @pytest.mark.asyncio
    async def test_missing_item_rolls_back_everything(self, db, vendor, cashier, menu):
        items = [
            RequestedItem(menu_item_id=menu["rendang"].id, quantity=1),
            RequestedItem(menu_item_id="does-not-exist", quantity=1),
        ]

        with pytest.raises(InvalidItem):
            await create_order(db, vendor.id, items, cashier.id, now=NOW)

        assert await _row_counts(db) == (0, 0)

    @pytest.mark.asyncio
    async def test_item_from_another_vendor(self, db, vendor, cashier, menu):
        items = [RequestedItem(menu_item_id=menu["mie_ayam"].id, quantity=1)]

        with pytest.raises(InvalidItem):
            await create_order(db, vendor.id, items, cashier.id, now=NOW)

        assert await _row_counts(db) == (0, 0)

    @pytest.mark.asyncio
    async def test_deleted_item_is_invalid(self, db, vendor, cashier, menu):
        await menu_crud.delete_item(db, menu["es_teh"].id)

        with pytest.raises(InvalidItem):
            await create_order(
                db, vendor.id, [RequestedItem(menu_item_id=menu["es_teh"].id, quantity=1)], cashier.id, now=NOW
            )

    @pytest.mark.asyncio
    async def test_failed_order_does_not_burn_a_queue_number(self, db, vendor, cashier, menu, rendang_and_tea):
        # Rollback expires loaded rows, so keep plain ids
        vendor_id, cashier_id = vendor.id, cashier.id
        bad = [RequestedItem(menu_item_id=menu["sold_out"].id, quantity=1)]
        with pytest.raises(InvalidItem):
            await create_order(db, vendor_id, bad, cashier_id, now=NOW)

        order = await create_order(db, vendor_id, rendang_and_tea, cashier_id, now=NOW)

        assert order.queue_sequence == 1
