from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from foodcourt.models.order.order import Order, OrderStatus, PaymentMethod


# ---------- Create ----------
class OrderItemCreate(BaseModel):
    menu_item_id: str
    quantity: int = Field(..., ge=1)
    notes: Optional[str] = Field(None, max_length=200)


class OrderCreate(BaseModel):
    customer_name: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)
    items: List[OrderItemCreate] = Field(..., min_length=1)


# ---------- Status ----------
class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    payment_method: Optional[PaymentMethod] = None


# ---------- Read ----------
class OrderItemRead(BaseModel):
    id: str
    menu_item_id: str
    menu_name: str
    quantity: int
    price: Decimal
    subtotal: Decimal
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderRead(BaseModel):
    id: str
    queue_number: str
    queue_date: date
    vendor_id: int
    vendor_name: str
    customer_name: Optional[str] = None
    status: OrderStatus
    total_amount: Decimal
    payment_method: Optional[PaymentMethod] = None
    paid_at: Optional[datetime] = None
    prepared_at: Optional[datetime] = None
    ready_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    items: List[OrderItemRead] = []
    created_by: str
    creator_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, order: Order) -> "OrderRead":
        """Flatten an order whose vendor, items and creator are already loaded."""
        return cls(
            id=order.id,
            queue_number=order.queue_number,
            queue_date=order.queue_date,
            vendor_id=order.vendor_id,
            vendor_name=order.vendor.name,
            customer_name=order.customer_name,
            status=order.status,
            total_amount=order.total_amount,
            payment_method=order.payment_method,
            paid_at=order.paid_at,
            prepared_at=order.prepared_at,
            ready_at=order.ready_at,
            completed_at=order.completed_at,
            notes=order.notes,
            items=[
                OrderItemRead(
                    id=item.id,
                    menu_item_id=item.menu_item_id,
                    menu_name=item.item_name,
                    quantity=item.quantity,
                    price=item.price,
                    subtotal=item.subtotal,
                    notes=item.notes,
                )
                for item in order.items
            ],
            created_by=order.created_by,
            creator_name=order.creator.full_name,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
