from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from foodcourt.db import get_db
from foodcourt.auth.capabilities import Capability, ensure_vendor_access, require_capability, require_vendor_access
from foodcourt.auth.dependencies import get_current_identity
from foodcourt.crud import order as order_crud
from foodcourt.models.order.order import OrderStatus
from foodcourt.schemas.envelope import Envelope
from foodcourt.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate
from foodcourt.services import order_lifecycle, order_service
from foodcourt.services.order_service import RequestedItem

router = APIRouter(tags=["orders"])


@router.post("/vendors/{vendor_id}/orders", response_model=Envelope[OrderRead], status_code=201)
async def create_order(
    vendor_id: int,
    payload: OrderCreate,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_vendor_access),
):
    order = await order_service.create_order(
        db,
        vendor_id=vendor_id,
        items=[
            RequestedItem(menu_item_id=it.menu_item_id, quantity=it.quantity, notes=it.notes)
            for it in payload.items
        ],
        creator_id=identity.user_id,
        customer_name=payload.customer_name,
        notes=payload.notes,
    )
    return {"message": "Order created successfully", "data": OrderRead.from_model(order)}


@router.get("/vendors/{vendor_id}/orders", response_model=Envelope[list[OrderRead]])
async def list_vendor_orders(
    vendor_id: int,
    status: Optional[OrderStatus] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_vendor_access),
):
    orders = await order_crud.list_orders(db, vendor_id=vendor_id, status=status, on_date=on_date)
    return {"data": [OrderRead.from_model(o) for o in orders]}


@router.get("/vendors/{vendor_id}/queue", response_model=Envelope[list[OrderRead]])
async def get_vendor_queue(
    vendor_id: int,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_vendor_access),
):
    orders = await order_crud.get_active_queue(db, vendor_id)
    return {"data": [OrderRead.from_model(o) for o in orders]}


@router.get("/orders", response_model=Envelope[list[OrderRead]])
async def list_all_orders(
    status: Optional[OrderStatus] = None,
    on_date: Optional[date] = Query(None, alias="date"),
    vendor_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_capability(Capability.CASHIER)),
):
    orders = await order_crud.list_orders(db, vendor_id=vendor_id, status=status, on_date=on_date)
    return {"data": [OrderRead.from_model(o) for o in orders]}


@router.get("/orders/{order_id}", response_model=Envelope[OrderRead])
async def get_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    order = await order_crud.get_order(db, order_id)
    ensure_vendor_access(identity, order.vendor_id)
    return {"data": OrderRead.from_model(order)}


@router.put("/orders/{order_id}/status", response_model=Envelope[OrderRead])
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    order = await order_crud.get_order(db, order_id)
    ensure_vendor_access(identity, order.vendor_id)

    order = await order_lifecycle.update_status(
        db, order_id, payload.status, payment_method=payload.payment_method
    )
    return {"message": "Order status updated successfully", "data": OrderRead.from_model(order)}
