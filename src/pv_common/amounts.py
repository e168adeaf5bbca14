"""Checked u64 arithmetic for pool, stake and payout amounts.

All amounts are int in the smallest currency unit. No float, no Decimal.
Every result must stay inside [0, U64_MAX]; anything else raises
ArithmeticOverflowError instead of wrapping or truncating.
"""

from src.pv_common.errors import ArithmeticOverflowError

U64_MAX = (1 << 64) - 1


def validate_u64(value: int, name: str = "value") -> int:
    """Return value unchanged if it fits in an unsigned 64-bit integer."""
    if not (0 <= value <= U64_MAX):
        raise ArithmeticOverflowError(f"{name}={value} outside u64 range")
    return value


def checked_add(a: int, b: int) -> int:
    return validate_u64(a + b, f"{a} + {b}")


def checked_sub(a: int, b: int) -> int:
    return validate_u64(a - b, f"{a} - {b}")


def checked_mul(a: int, b: int) -> int:
    return validate_u64(a * b, f"{a} * {b}")


def checked_div(a: int, b: int) -> int:
    """Floor division; a zero divisor is an overflow, never a ZeroDivisionError."""
    if b == 0:
        raise ArithmeticOverflowError(f"{a} / 0")
    return validate_u64(a // b, f"{a} / {b}")


def saturating_sub(a: int, b: int) -> int:
    """a - b clamped at zero."""
    return a - b if a > b else 0
