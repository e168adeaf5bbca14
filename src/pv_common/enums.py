"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class MarketStatus(str, Enum):
    OPEN = "OPEN"
    RESOLVED = "RESOLVED"


class LedgerEntryType(str, Enum):
    # Funding
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    # Bet placement (bettor + vault paired)
    BET_STAKE = "BET_STAKE"
    VAULT_STAKE_IN = "VAULT_STAKE_IN"
    # Claim (vault + bettor paired)
    VAULT_PAYOUT_OUT = "VAULT_PAYOUT_OUT"
    CLAIM_PAYOUT = "CLAIM_PAYOUT"
