import enum
from typing import Optional

from fastapi import Depends

from foodcourt.auth.dependencies import get_current_identity
from foodcourt.auth.identity import IdentityClaims, Role
from foodcourt.core.errors import Forbidden


class Capability(str, enum.Enum):
    CASHIER = "cashier"
    VENDOR_STAFF = "vendor_staff"


def has_capability(identity: IdentityClaims, capability: Capability, vendor_id: Optional[int] = None) -> bool:
    """
    Cashiers work the front counter for every vendor. Vendor staff only hold
    their capability for the vendor they are affiliated with; pass vendor_id
    to check a specific vendor.
    """
    if capability == Capability.CASHIER:
        return identity.role == Role.CASHIER

    if capability == Capability.VENDOR_STAFF:
        if identity.role != Role.VENDOR or identity.vendor_id is None:
            return False
        return vendor_id is None or identity.vendor_id == vendor_id

    return False


def can_access_vendor(identity: IdentityClaims, vendor_id: int) -> bool:
    return (
        has_capability(identity, Capability.CASHIER)
        or has_capability(identity, Capability.VENDOR_STAFF, vendor_id)
    )


def ensure_vendor_access(identity: IdentityClaims, vendor_id: int) -> None:
    if not can_access_vendor(identity, vendor_id):
        raise Forbidden(f"Access denied to vendor {vendor_id}")


def require_capability(capability: Capability):
    async def _dep(identity: IdentityClaims = Depends(get_current_identity)):
        if not has_capability(identity, capability):
            raise Forbidden("Insufficient permissions")
        return identity
    return _dep


async def require_vendor_access(
    vendor_id: int,
    identity: IdentityClaims = Depends(get_current_identity),
) -> IdentityClaims:
    ensure_vendor_access(identity, vendor_id)
    return identity
