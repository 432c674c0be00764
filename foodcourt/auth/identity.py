# auth/identity.py
import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from foodcourt.auth.config import auth_config


class Role(str, enum.Enum):
    CASHIER = "cashier"
    VENDOR = "vendor"


@dataclass(frozen=True)
class IdentityClaims:
    """Who is calling, as asserted by the identity provider."""
    user_id: str
    role: Role
    vendor_id: Optional[int] = None


def decode_identity(token: str) -> IdentityClaims:
    """
    Decode a bearer token into identity claims.

    Raises jwt.InvalidTokenError for bad signatures, expired tokens, a wrong
    audience or claims that do not fit the identity shape.
    """
    payload = jwt.decode(
        token,
        auth_config.secret,
        algorithms=[auth_config.jwt_algorithm],
        audience=auth_config.jwt_audience,
    )

    try:
        role = Role(payload.get("role"))
        vendor_id = payload.get("vendor_id")
        return IdentityClaims(
            user_id=str(payload["sub"]),
            role=role,
            vendor_id=int(vendor_id) if vendor_id is not None else None,
        )
    except (KeyError, ValueError, TypeError) as exc:
        raise jwt.InvalidTokenError(f"Malformed identity claims: {exc}") from exc


def encode_identity(claims: IdentityClaims, lifetime_seconds: Optional[int] = None) -> str:
    """Dev/test helper; production tokens come from the identity provider."""
    lifetime = lifetime_seconds or auth_config.jwt_lifetime_seconds
    payload = {
        "sub": claims.user_id,
        "role": claims.role.value,
        "aud": auth_config.jwt_audience,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=lifetime),
    }
    if claims.vendor_id is not None:
        payload["vendor_id"] = claims.vendor_id
    return jwt.encode(payload, auth_config.secret, algorithm=auth_config.jwt_algorithm)
