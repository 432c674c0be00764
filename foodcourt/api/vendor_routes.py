from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foodcourt.db import get_db
from foodcourt.auth.capabilities import Capability, require_capability
from foodcourt.auth.dependencies import get_current_identity
from foodcourt.crud import vendor as vendor_crud
from foodcourt.schemas.envelope import Envelope
from foodcourt.schemas.vendor import VendorCreate, VendorRead, VendorUpdate

router = APIRouter(tags=["vendors"])


async def _to_read(db: AsyncSession, vendors) -> list[VendorRead]:
    counts = await vendor_crud.get_vendor_counts(db, [v.id for v in vendors])
    reads = []
    for v in vendors:
        menu_count, order_count = counts.get(v.id, (0, 0))
        read = VendorRead.model_validate(v)
        read.menu_count = menu_count
        read.order_count = order_count
        reads.append(read)
    return reads


@router.get("/vendors", response_model=Envelope[list[VendorRead]])
async def list_vendors(
    include_inactive: bool = False,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    vendors = await vendor_crud.get_vendors(db, include_inactive=include_inactive)
    return {"data": await _to_read(db, vendors)}


@router.post("/vendors", response_model=Envelope[VendorRead], status_code=201)
async def create_vendor(
    payload: VendorCreate,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_capability(Capability.CASHIER)),
):
    vendor = await vendor_crud.create_vendor(db, payload)
    return {"message": "Vendor created successfully", "data": (await _to_read(db, [vendor]))[0]}


@router.get("/vendors/{vendor_id}", response_model=Envelope[VendorRead])
async def get_vendor(
    vendor_id: int,
    db: AsyncSession = Depends(get_db),
    identity=Depends(get_current_identity),
):
    vendor = await vendor_crud.get_vendor(db, vendor_id)
    return {"data": (await _to_read(db, [vendor]))[0]}


@router.put("/vendors/{vendor_id}", response_model=Envelope[VendorRead])
async def update_vendor(
    vendor_id: int,
    payload: VendorUpdate,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_capability(Capability.CASHIER)),
):
    vendor = await vendor_crud.update_vendor(db, vendor_id, payload)
    return {"message": "Vendor updated successfully", "data": (await _to_read(db, [vendor]))[0]}


@router.delete("/vendors/{vendor_id}", response_model=Envelope[VendorRead])
async def delete_vendor(
    vendor_id: int,
    db: AsyncSession = Depends(get_db),
    identity=Depends(require_capability(Capability.CASHIER)),
):
    """Soft delete; the vendor keeps its order history."""
    vendor = await vendor_crud.deactivate_vendor(db, vendor_id)
    return {"message": "Vendor deactivated", "data": (await _to_read(db, [vendor]))[0]}
