# auth/dependencies.py
import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from foodcourt.auth.identity import IdentityClaims, decode_identity

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> IdentityClaims:
    if not credentials:
        raise HTTPException(status_code=401, detail="Authorization header required")

    try:
        return decode_identity(credentials.credentials)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
