"""Per-market escrow vault.

A vault is an ordinary ledger account whose address is derived from the
market id, so stakes and payouts go through the same transfer primitive as
every other balance movement.
"""

from dataclasses import dataclass

from src.pv_common.errors import InsufficientVaultBalanceError
from src.pv_common.identity import VAULT_ADDRESS_PREFIX


def vault_address(market_id: int) -> str:
    return f"{VAULT_ADDRESS_PREFIX}{market_id}"


@dataclass
class Vault:
    market_id: int
    balance: int

    @property
    def address(self) -> str:
        return vault_address(self.market_id)

    def ensure_covers(self, payout: int) -> None:
        """Raise unless the escrow balance can fund payout."""
        if self.balance < payout:
            raise InsufficientVaultBalanceError(self.market_id, payout, self.balance)
