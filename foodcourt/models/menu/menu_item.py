from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Text, Numeric, DateTime, Enum, Index
from sqlalchemy.orm import relationship
from foodcourt.models.base import Base
from foodcourt.utils.timezones import utcnow
import uuid, enum


class MenuCategory(str, enum.Enum):
    FOOD = "food"
    DRINK = "drink"
    SNACK = "snack"
    DESSERT = "dessert"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False)
    vendor = relationship("Vendor", back_populates="menu_items")

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    # Live price; orders copy it into OrderItem.price when they are placed
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(
        Enum(MenuCategory, name="menu_category", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    image_url = Column(String, nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    order_items = relationship("OrderItem", back_populates="menu_item")

    __table_args__ = (
        Index("idx_menu_items_vendor", "vendor_id"),
    )
