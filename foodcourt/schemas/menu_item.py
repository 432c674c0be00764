from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from foodcourt.models.menu.menu_item import MenuCategory


class MenuItemBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    category: MenuCategory
    image_url: Optional[str] = None


class MenuItemCreate(MenuItemBase):
    is_available: bool = True


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    category: Optional[MenuCategory] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None


class MenuItemRead(MenuItemBase):
    id: str
    vendor_id: int
    vendor_name: Optional[str] = None
    is_available: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, item) -> "MenuItemRead":
        read = cls.model_validate(item)
        read.vendor_name = item.vendor.name
        return read
