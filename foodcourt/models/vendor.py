# foodcourt/models/vendor.py
from sqlalchemy import Column, Integer, String, Boolean, Text, DateTime
from sqlalchemy.orm import relationship
from foodcourt.models.base import Base
from foodcourt.utils.timezones import utcnow


class Vendor(Base):
    """A stall in the food court. Soft-deleted via is_active, never removed."""
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Back-populated relationships
    users = relationship("User", back_populates="vendor")
    menu_items = relationship("MenuItem", back_populates="vendor")
    orders = relationship("Order", back_populates="vendor")
