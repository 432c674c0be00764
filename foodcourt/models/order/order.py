from sqlalchemy import (
    Column, String, Integer, ForeignKey, DateTime, Date, Text, Enum, Numeric,
    UniqueConstraint, Index, CheckConstraint,
)
from sqlalchemy.orm import relationship
from foodcourt.models.base import Base
from foodcourt.utils.timezones import utcnow
import uuid, enum


class OrderStatus(str, enum.Enum):
    PENDING = "pending"      # created, not paid yet
    PAID = "paid"            # paid, waiting in the vendor queue
    PREPARING = "preparing"
    READY = "ready"          # waiting for pickup
    COMPLETED = "completed"  # picked up
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    DIGITAL = "digital"


def _enum_values(e):
    return [m.value for m in e]


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # V{vendor_id}-{YYYYMMDD}-{sequence:03d}; never changes once assigned
    queue_number = Column(String, nullable=False, unique=True)
    queue_date = Column(Date, nullable=False)
    queue_sequence = Column(Integer, nullable=False)

    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    vendor = relationship("Vendor", back_populates="orders")

    customer_name = Column(String, nullable=True)
    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        default=OrderStatus.PENDING,
        nullable=False,
    )

    # Derived from the items; never set from client input
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", values_callable=_enum_values),
        nullable=True,
    )

    # Lifecycle timestamps, each written once
    paid_at = Column(DateTime, nullable=True)
    prepared_at = Column(DateTime, nullable=True)
    ready_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)

    notes = Column(Text, nullable=True)

    created_by = Column(String, ForeignKey("users.id"), nullable=False)
    creator = relationship("User", back_populates="orders")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        UniqueConstraint("vendor_id", "queue_date", "queue_sequence", name="uq_order_vendor_day_sequence"),
        Index("idx_orders_vendor_status", "vendor_id", "status"),
        Index("idx_orders_created_at", "created_at"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String, ForeignKey("orders.id"), nullable=False)
    menu_item_id = Column(String, ForeignKey("menu_items.id"), nullable=False)
    # Input order of the line within its order
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)

    # Snapshot pricing and name at time of order
    price = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)
    item_name = Column(String, nullable=False)
    notes = Column(Text, nullable=True)

    order = relationship("Order", back_populates="items")
    menu_item = relationship("MenuItem", back_populates="order_items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),
        Index("idx_order_items_order", "order_id"),
    )
