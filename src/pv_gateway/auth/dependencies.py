"""FastAPI dependency: get_caller_id.

Usage in any protected router:
    from src.pv_gateway.auth.dependencies import get_caller_id

    @router.post("/protected")
    async def protected(caller_id: str = Depends(get_caller_id)):
        ...

Authority checks are not done here: they must run inside the operation's
transaction against the stored authority record.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from src.pv_common.errors import InvalidCredentialsError
from src.pv_gateway.auth.jwt_handler import decode_token

# Tokens come from the external identity provider; tokenUrl is informational.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token")

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_caller_id(token: str = Depends(oauth2_scheme)) -> str:
    """Return the authenticated caller identity or raise HTTP 401."""
    try:
        return decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None
