from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foodcourt.db import get_db
from foodcourt.auth.capabilities import Capability, ensure_vendor_access, require_capability
from foodcourt.auth.dependencies import get_current_identity
from foodcourt.crud import menu_item as menu_crud
from foodcourt.models.menu.menu_item import MenuCategory
from foodcourt.schemas.envelope import Envelope
from foodcourt.schemas.menu_item import MenuItemCreate, MenuItemRead, MenuItemUpdate

router = APIRouter(tags=["menus"])


@router.get("/vendors/{vendor_id}/menus", response_model=Envelope[list[MenuItemRead]])
async def list_vendor_menu(
    vendor_id: int,
    category: Optional[MenuCategory] = None,
    available: Optional[bool] = None,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    items = await menu_crud.get_items_for_vendor(db, vendor_id, category=category, available=available)
    return {"data": [MenuItemRead.from_model(it) for it in items]}


@router.post("/vendors/{vendor_id}/menus", response_model=Envelope[MenuItemRead], status_code=201)
async def create_menu_item(
    vendor_id: int,
    payload: MenuItemCreate,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_capability(Capability.CASHIER)),
):
    item = await menu_crud.create_item(db, vendor_id, payload)
    return {"message": "Menu item created successfully", "data": MenuItemRead.from_model(item)}


@router.get("/menus/{menu_item_id}", response_model=Envelope[MenuItemRead])
async def get_menu_item(
    menu_item_id: str,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    item = await menu_crud.get_item(db, menu_item_id)
    return {"data": MenuItemRead.from_model(item)}


@router.put("/menus/{menu_item_id}", response_model=Envelope[MenuItemRead])
async def update_menu_item(
    menu_item_id: str,
    payload: MenuItemUpdate,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    # Vendor staff may toggle availability / reprice their own menu
    item = await menu_crud.get_item(db, menu_item_id)
    ensure_vendor_access(identity, item.vendor_id)

    item = await menu_crud.update_item(db, menu_item_id, payload)
    return {"message": "Menu item updated successfully", "data": MenuItemRead.from_model(item)}


@router.delete("/menus/{menu_item_id}", response_model=Envelope[MenuItemRead])
async def delete_menu_item(
    menu_item_id: str,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_capability(Capability.CASHIER)),
):
    item = await menu_crud.delete_item(db, menu_item_id)
    return {"message": "Menu item deleted successfully", "data": MenuItemRead.from_model(item)}
