from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from foodcourt.core.errors import NotFound
from foodcourt.models.vendor import Vendor
from foodcourt.models.menu.menu_item import MenuItem
from foodcourt.models.order.order import Order
from foodcourt.schemas.vendor import VendorCreate, VendorUpdate


async def create_vendor(db: AsyncSession, vendor: VendorCreate) -> Vendor:
    new_vendor = Vendor(
        name=vendor.name,
        description=vendor.description,
        location=vendor.location,
        is_active=True,
    )
    db.add(new_vendor)
    await db.commit()
    await db.refresh(new_vendor)
    return new_vendor


async def get_vendors(db: AsyncSession, include_inactive: bool = False):
    query = select(Vendor)
    if not include_inactive:
        query = query.where(Vendor.is_active == True)
    result = await db.execute(query.order_by(Vendor.name))
    return result.scalars().all()


async def get_vendor(db: AsyncSession, vendor_id: int) -> Vendor:
    vendor = await db.get(Vendor, vendor_id)
    if not vendor:
        raise NotFound(f"Vendor {vendor_id} not found")
    return vendor


async def get_vendor_counts(db: AsyncSession, vendor_ids: list[int]) -> dict[int, tuple[int, int]]:
    """Menu item and order counts per vendor, as {vendor_id: (menus, orders)}."""
    if not vendor_ids:
        return {}

    menu_res = await db.execute(
        select(MenuItem.vendor_id, func.count(MenuItem.id))
        .where(MenuItem.vendor_id.in_(vendor_ids), MenuItem.is_deleted == False)
        .group_by(MenuItem.vendor_id)
    )
    order_res = await db.execute(
        select(Order.vendor_id, func.count(Order.id))
        .where(Order.vendor_id.in_(vendor_ids))
        .group_by(Order.vendor_id)
    )
    menus = dict(menu_res.all())
    orders = dict(order_res.all())
    return {vid: (menus.get(vid, 0), orders.get(vid, 0)) for vid in vendor_ids}


async def update_vendor(db: AsyncSession, vendor_id: int, updates: VendorUpdate) -> Vendor:
    vendor = await get_vendor(db, vendor_id)

    update_data = updates.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(vendor, key, value)

    await db.commit()
    await db.refresh(vendor)
    return vendor


async def deactivate_vendor(db: AsyncSession, vendor_id: int) -> Vendor:
    """Soft delete: orders keep pointing at the vendor row."""
    vendor = await get_vendor(db, vendor_id)
    vendor.is_active = False
    await db.commit()
    await db.refresh(vendor)
    return vendor
