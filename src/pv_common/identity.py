"""Caller identities and the reserved escrow address space.

Caller identities and market vaults share the accounts table, so no caller may
present an address under VAULT_ADDRESS_PREFIX. IDENTITY_MAX_LENGTH matches the
VARCHAR(64) identity columns of authority, markets and positions.
"""

from src.pv_common.errors import InvalidIdentityError

IDENTITY_MAX_LENGTH = 64
VAULT_ADDRESS_PREFIX = "vault:"


def is_caller_identity(identity: str) -> bool:
    return (
        0 < len(identity) <= IDENTITY_MAX_LENGTH
        and not identity.startswith(VAULT_ADDRESS_PREFIX)
    )


def ensure_caller_identity(identity: str) -> str:
    """Return identity, or raise InvalidIdentityError if no caller may hold it."""
    if not is_caller_identity(identity):
        raise InvalidIdentityError(identity)
    return identity
