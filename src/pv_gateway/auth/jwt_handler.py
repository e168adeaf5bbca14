"""JWT verification for caller identity.

The `sub` claim carries the caller identity (bettor or authority). Tokens are
issued by the external identity provider; create_access_token exists for
operator tooling and tests and signs with the same shared secret.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.pv_common.errors import InvalidCredentialsError
from src.pv_common.identity import is_caller_identity

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(identity: str) -> str:
    """Issue a short-lived access token for identity."""
    now = datetime.now(UTC)
    payload = {
        "sub": identity,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> str:
    """Decode and validate an access token, returning the caller identity.

    Raises:
        InvalidCredentialsError: signature/expiry invalid, wrong token type,
            missing subject, or a subject no caller may hold.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # never taken from the token header
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != "access":
        raise InvalidCredentialsError()
    identity = payload.get("sub")
    if not isinstance(identity, str) or not is_caller_identity(identity):
        raise InvalidCredentialsError()
    return identity
