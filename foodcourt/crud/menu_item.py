from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from foodcourt.core.errors import NotFound
from foodcourt.models.menu.menu_item import MenuItem, MenuCategory
from foodcourt.schemas.menu_item import MenuItemCreate, MenuItemUpdate
from .vendor import get_vendor


async def get_item(db: AsyncSession, menu_item_id: str) -> MenuItem:
    """
    Catalog lookup: current price, availability, name and vendor of a menu item.

    Called inside the order-creation transaction, so the price read here is
    the one that gets snapshotted onto the order line.
    """
    result = await db.execute(
        select(MenuItem)
        .where(MenuItem.id == menu_item_id, MenuItem.is_deleted == False)
        .options(selectinload(MenuItem.vendor))
    )
    item = result.scalar_one_or_none()
    if not item:
        raise NotFound(f"Menu item {menu_item_id} not found")
    return item


async def get_items_for_vendor(
    db: AsyncSession,
    vendor_id: int,
    category: Optional[MenuCategory] = None,
    available: Optional[bool] = None,
):
    await get_vendor(db, vendor_id)

    query = (
        select(MenuItem)
        .where(MenuItem.vendor_id == vendor_id, MenuItem.is_deleted == False)
        .options(selectinload(MenuItem.vendor))
    )
    if category is not None:
        query = query.where(MenuItem.category == category)
    if available is not None:
        query = query.where(MenuItem.is_available == available)

    result = await db.execute(query.order_by(MenuItem.category, MenuItem.name))
    return result.scalars().all()


async def create_item(db: AsyncSession, vendor_id: int, item: MenuItemCreate) -> MenuItem:
    await get_vendor(db, vendor_id)

    new_item = MenuItem(
        vendor_id=vendor_id,
        name=item.name,
        description=item.description,
        price=item.price,
        category=item.category,
        image_url=item.image_url,
        is_available=item.is_available,
    )
    db.add(new_item)
    await db.commit()
    return await get_item(db, new_item.id)


async def update_item(db: AsyncSession, menu_item_id: str, updates: MenuItemUpdate) -> MenuItem:
    """Price changes only affect orders placed afterwards."""
    item = await get_item(db, menu_item_id)

    update_data = updates.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(item, key, value)

    await db.commit()
    return await get_item(db, menu_item_id)


async def delete_item(db: AsyncSession, menu_item_id: str) -> MenuItem:
    item = await get_item(db, menu_item_id)
    item.is_deleted = True
    item.is_available = False
    await db.commit()
    return item
