"""Commit-reveal primitive.

    commitment = SHA-256(secret ‖ side_byte)    side_byte = 0x01 (yes) | 0x00 (no)

A Commitment is opaque while betting is open: only the digest is stored.
It yields a RevealedChoice only when given the matching preimage, which is
the single place a bettor's side becomes known.
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass

from src.pv_common.errors import InvalidCommitmentError

SECRET_LENGTH = 32
DIGEST_LENGTH = 32

YES_BYTE = b"\x01"
NO_BYTE = b"\x00"


def side_byte(side: bool) -> bytes:
    return YES_BYTE if side else NO_BYTE


def compute_commitment(secret: bytes, side: bool) -> bytes:
    hasher = hashlib.sha256()
    hasher.update(secret)
    hasher.update(side_byte(side))
    return hasher.digest()


def generate_secret() -> bytes:
    """Client-side helper: a fresh random secret to commit with."""
    return secrets.token_bytes(SECRET_LENGTH)


@dataclass(frozen=True)
class RevealedChoice:
    side: bool


@dataclass(frozen=True)
class Commitment:
    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != DIGEST_LENGTH:
            raise ValueError(
                f"commitment must be {DIGEST_LENGTH} bytes, got {len(self.digest)}"
            )

    @classmethod
    def for_choice(cls, secret: bytes, side: bool) -> "Commitment":
        return cls(compute_commitment(secret, side))

    @classmethod
    def from_hex(cls, value: str) -> "Commitment":
        return cls(bytes.fromhex(value))

    def hex(self) -> str:
        return self.digest.hex()

    def matches(self, secret: bytes, side: bool) -> bool:
        return hmac.compare_digest(compute_commitment(secret, side), self.digest)

    def reveal(self, secret: bytes, side: bool) -> RevealedChoice:
        if not self.matches(secret, side):
            raise InvalidCommitmentError()
        return RevealedChoice(side=side)
