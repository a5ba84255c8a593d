"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: User
  2xxx: Balance
  3xxx: Contract
  4xxx: Bet
  5xxx: Ranking
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


# --- 1xxx: User ---

class UserNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(1001, f"User not found: {user_id}", 404)


class UsernameExistsError(AppError):
    def __init__(self, username: str) -> None:
        super().__init__(1002, f"Username already exists: {username}", 409)


# --- 2xxx: Balance ---

class InsufficientFundsError(AppError):
    def __init__(self, required: float, available: float) -> None:
        super().__init__(
            2001,
            f"Insufficient prediction coins: required {required:g}, available {available:g}",
            422,
        )


# --- 3xxx: Contract ---

class ContractNotFoundError(AppError):
    def __init__(self, contract_id: str) -> None:
        super().__init__(3001, f"Contract not found: {contract_id}", 404)


class ContractNotOpenError(AppError):
    def __init__(self, contract_id: str) -> None:
        super().__init__(3002, f"Contract is not open for betting: {contract_id}", 422)


class ContractAlreadyResolvedError(AppError):
    def __init__(self, contract_id: str, resolution: str | None) -> None:
        super().__init__(
            3003, f"Contract {contract_id} already resolved as {resolution}", 409
        )


class ContractTitleExistsError(AppError):
    def __init__(self, title: str) -> None:
        super().__init__(3004, f"Contract title already exists: {title}", 409)


class DegenerateMarketError(AppError):
    def __init__(self, side: str, probability: float) -> None:
        super().__init__(
            3005,
            f"Cannot price {side.upper()} shares: pool is fully one-sided "
            f"(probability={probability:g})",
            422,
        )


# --- 4xxx: Bet ---

class BetValidationError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Invalid bet: {detail}", 422)


# --- 5xxx: Ranking ---

class RankingNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(5001, f"No ranking yet for user {user_id}", 404)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
