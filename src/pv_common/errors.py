"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/Authority
  2xxx: Account/Vault
  3xxx: Market
  4xxx: Bet/Position
  5xxx: Settlement
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/Authority ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired token", 401)


class UnauthorizedError(AppError):
    def __init__(self, caller_id: str) -> None:
        super().__init__(1002, f"Caller {caller_id} is not authorized to perform this action", 403)


class AuthorityAlreadyInitializedError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Authority is already initialized", 409)


class AuthorityNotInitializedError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Authority has not been initialized", 409)


class InvalidIdentityError(AppError):
    def __init__(self, identity: str) -> None:
        super().__init__(1005, f"Identity cannot act as a caller: {identity[:80]!r}", 403)


# --- 2xxx: Account/Vault ---

class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2001,
            f"Insufficient balance: required {required}, available {available}",
            422,
        )


class InsufficientVaultBalanceError(AppError):
    def __init__(self, market_id: int, required: int, available: int) -> None:
        super().__init__(
            2002,
            f"Vault for market {market_id} cannot cover payout: "
            f"required {required}, available {available}",
            422,
        )


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


class MarketExistsError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3002, f"Market already exists: {market_id}", 409)


class MarketNotOpenError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3003, f"Market is not open for betting: {market_id}", 422)


class MarketNotResolvedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3004, f"Market has not been resolved yet: {market_id}", 422)


class MarketAlreadyResolvedError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3005, f"Market is already resolved: {market_id}", 422)


class DeadlinePassedError(AppError):
    def __init__(self) -> None:
        super().__init__(3006, "Betting deadline has already passed", 422)


class DeadlineNotPassedError(AppError):
    def __init__(self) -> None:
        super().__init__(3007, "Deadline has not passed yet, market cannot be resolved", 422)


class QuestionTooLongError(AppError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(3008, f"Question is too long: {length} > {limit}", 422)


# --- 4xxx: Bet/Position ---

class InvalidAmountError(AppError):
    def __init__(self, amount: int) -> None:
        super().__init__(4001, f"Bet amount must be greater than zero, got {amount}", 422)


class PositionExistsError(AppError):
    def __init__(self, market_id: int, bettor_id: str) -> None:
        super().__init__(
            4002, f"Bettor {bettor_id} already holds a position in market {market_id}", 409
        )


class PositionNotFoundError(AppError):
    def __init__(self, market_id: int, bettor_id: str) -> None:
        super().__init__(
            4003, f"No position for bettor {bettor_id} in market {market_id}", 404
        )


# --- 5xxx: Settlement ---

class AlreadyClaimedError(AppError):
    def __init__(self) -> None:
        super().__init__(5001, "This position has already been claimed", 409)


class InvalidCommitmentError(AppError):
    def __init__(self) -> None:
        super().__init__(5002, "Commitment verification failed, wrong secret or side", 422)


class NotAWinnerError(AppError):
    def __init__(self) -> None:
        super().__init__(5003, "Position is not on the winning outcome", 422)


class ZeroWinningPoolError(AppError):
    def __init__(self) -> None:
        super().__init__(5004, "Winning pool is zero", 422)


# --- 9xxx: System ---

class ArithmeticOverflowError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Arithmetic overflow: {detail}", 422)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
