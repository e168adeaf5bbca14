"""Pydantic schemas for pv_vault API."""

from pydantic import BaseModel

from src.pv_vault.domain.models import Vault


class VaultResponse(BaseModel):
    market_id: int
    address: str
    balance: int

    @classmethod
    def from_domain(cls, vault: Vault) -> "VaultResponse":
        return cls(market_id=vault.market_id, address=vault.address, balance=vault.balance)
